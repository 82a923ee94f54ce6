from __future__ import annotations

import json
from pathlib import Path

from ldsynth.exceptions import ParseError, SampleReadError, UnsupportedRootError
from ldsynth.json_types import JSONValue
from ldsynth.synthesis.classify import describe_value
from ldsynth.synthesis.model import (
    SynthesisConfig,
    SynthesisPlan,
    TypeDefinition,
    TypeRegistry,
)
from ldsynth.synthesis.resolver import resolve_object

_DEFAULT_CONFIG = SynthesisConfig()


def parse_document(text: str, *, source: str = "") -> JSONValue:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(exc.msg, line=exc.lineno, column=exc.colno, source=source) from exc


def synthesize(
    text: str,
    root_name: str,
    *,
    config: SynthesisConfig = _DEFAULT_CONFIG,
    source: str = "",
) -> SynthesisPlan:
    """Infer the type definitions for one sample document.

    The plan lists hoisted definitions in discovery order followed by the
    root definition named ``root_name``.
    """
    document = parse_document(text, source=source)
    if not isinstance(document, dict):
        raise UnsupportedRootError(describe_value(document), source=source)
    registry = TypeRegistry()
    root_fields = resolve_object(registry, "", document, config=config)
    root = TypeDefinition(name=root_name, fields=root_fields)
    return SynthesisPlan(
        root=root_name,
        definitions=[*registry.definitions, root],
        warnings=list(registry.warnings),
        errors=[],
    )


def synthesize_path(
    path: Path,
    root_name: str,
    *,
    config: SynthesisConfig = _DEFAULT_CONFIG,
) -> SynthesisPlan:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeError) as exc:
        raise SampleReadError(f"Failed to read {path}: {exc}") from exc
    return synthesize(text, root_name, config=config, source=str(path))
