from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional
import json

import typer

from ldsynth.config import (
    fail_on_warnings as configured_fail_on_warnings,
    load_config,
    merge_payload,
    model_sources,
    scaffold_defaults,
    scaffold_paths,
    synthesis_config,
    synthesis_defaults,
)
from ldsynth.exceptions import LdSynthError
from ldsynth.scaffold import DEFAULT_BASE, discover_entities, render_repositories
from ldsynth.schema import DiscoveredTypeDTO, ScaffoldResponseDTO, plan_to_dto
from ldsynth.synthesis.driver import synthesize, synthesize_path
from ldsynth.synthesis.emission import RENDER_KINDS, render
from ldsynth.synthesis.model import SynthesisPlan
from ldsynth.synthesis.naming import python_type_name

app = typer.Typer(add_completion=False, help="Synthesize typed models from JSON-LD samples.")

_STDOUT_ALIAS = "-"
_JSON_KIND = "json"
_OUTPUT_KINDS = (*RENDER_KINDS, _JSON_KIND)
_SUFFIXES = {"pydantic": ".py", "outline": ".txt", _JSON_KIND: ".json"}

# Exit codes: 1 for warnings under --fail-on-warnings, 2 for fatal errors.
_EXIT_WARNINGS = 1
_EXIT_ERROR = 2


def _fail(message: str) -> typer.Exit:
    typer.echo(f"error: {message}", err=True)
    return typer.Exit(code=_EXIT_ERROR)


def _emit_warnings(warnings: Iterable[str], *, prefix: str = "") -> int:
    count = 0
    for warning in warnings:
        typer.echo(f"warning: {prefix}{warning}", err=True)
        count += 1
    return count


def _write_text_to_target(target: Optional[Path], text: str) -> None:
    if target is None or str(target) == _STDOUT_ALIAS:
        typer.echo(text, nl=not text.endswith("\n"))
        return
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding="utf-8")


def _resolve_kind(settings: dict[str, object]) -> str:
    resolved = settings.get("kind", "pydantic")
    if resolved not in _OUTPUT_KINDS:
        raise _fail(f"unknown kind {resolved!r}; expected one of {', '.join(_OUTPUT_KINDS)}")
    return str(resolved)


def render_output(plan: SynthesisPlan, kind: str) -> str:
    if kind == _JSON_KIND:
        payload = plan_to_dto(plan).model_dump()
        return json.dumps(payload, indent=2, sort_keys=True) + "\n"
    return render(plan, kind)


@app.command()
def synth(
    sample: Path = typer.Argument(..., help="Sample JSON or JSON-LD document."),
    name: Optional[str] = typer.Option(None, "--name", help="Root type name."),
    kind: Optional[str] = typer.Option(None, "--kind", help="pydantic, outline or json."),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
    root: Path = typer.Option(Path("."), "--root"),
    config: Optional[Path] = typer.Option(None, "--config"),
    fail_on_warnings: Optional[bool] = typer.Option(
        None, "--fail-on-warnings/--no-fail-on-warnings"
    ),
) -> None:
    """Synthesize the types of one sample document."""
    defaults = synthesis_defaults(root=root, config_path=config)
    settings = merge_payload(
        {"kind": kind, "fail_on_warnings": fail_on_warnings},
        defaults,
    )
    resolved_kind = _resolve_kind(settings)
    root_name = name or python_type_name(sample.name.split(".")[0])
    try:
        plan = synthesize_path(sample, root_name, config=synthesis_config(defaults))
    except LdSynthError as exc:
        raise _fail(str(exc)) from exc
    warned = _emit_warnings(plan.warnings)
    _write_text_to_target(output, render_output(plan, resolved_kind))
    if warned and configured_fail_on_warnings(settings):
        raise typer.Exit(code=_EXIT_WARNINGS)


@app.command()
def build(
    root: Path = typer.Option(Path("."), "--root"),
    config: Optional[Path] = typer.Option(None, "--config"),
    out_dir: Optional[Path] = typer.Option(None, "--out-dir"),
    kind: Optional[str] = typer.Option(None, "--kind"),
    fail_on_warnings: Optional[bool] = typer.Option(
        None, "--fail-on-warnings/--no-fail-on-warnings"
    ),
) -> None:
    """Synthesize every model declared in ldsynth.toml."""
    data = load_config(root=root, config_path=config)
    defaults = synthesis_defaults(root=root, config_path=config)
    settings = merge_payload(
        {"kind": kind, "out_dir": out_dir, "fail_on_warnings": fail_on_warnings},
        defaults,
    )
    resolved_kind = _resolve_kind(settings)
    target_dir = Path(str(settings.get("out_dir", "generated")))
    if not target_dir.is_absolute():
        target_dir = root / target_dir
    try:
        sources = model_sources(data, root=root)
    except LdSynthError as exc:
        raise _fail(str(exc)) from exc
    if not sources:
        typer.echo("No models declared; nothing to build.")
        return
    synthesis = synthesis_config(defaults)
    warned = 0
    for model in sources:
        try:
            plan = synthesize(
                model.text,
                python_type_name(model.name),
                config=synthesis,
                source=model.source or model.name,
            )
        except LdSynthError as exc:
            raise _fail(str(exc)) from exc
        warned += _emit_warnings(plan.warnings, prefix=f"{model.name}: ")
        target = target_dir / f"{model.stem}{_SUFFIXES[resolved_kind]}"
        _write_text_to_target(target, render_output(plan, resolved_kind))
        typer.echo(f"Wrote {model.name}: {target}")
    if warned and configured_fail_on_warnings(settings):
        raise typer.Exit(code=_EXIT_WARNINGS)


@app.command()
def scaffold(
    paths: List[Path] = typer.Argument(None),
    root: Path = typer.Option(Path("."), "--root"),
    config: Optional[Path] = typer.Option(None, "--config"),
    base: Optional[str] = typer.Option(None, "--base", help="Entity base class name."),
    include_models: bool = typer.Option(
        False, "--include-models/--no-include-models",
        help="Also scaffold the models declared in ldsynth.toml.",
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
    as_json: bool = typer.Option(False, "--json"),
) -> None:
    """Emit repository classes for discovered entity types."""
    defaults = scaffold_defaults(root=root, config_path=config)
    settings = merge_payload({"base": base}, defaults)
    scan = list(paths or []) or [root / p for p in scaffold_paths(defaults)]
    result = discover_entities(
        scan,
        root=root,
        base=str(settings.get("base", DEFAULT_BASE)),
    )
    _emit_warnings(result.warnings)
    types = list(result.types)
    if include_models:
        try:
            sources = model_sources(load_config(root=root, config_path=config), root=root)
        except LdSynthError as exc:
            raise _fail(str(exc)) from exc
        types.extend(model.discovered() for model in sources)
    source = render_repositories(types)
    if as_json:
        response = ScaffoldResponseDTO(
            types=[DiscoveredTypeDTO(name=item.name, module=item.module) for item in types],
            source=source,
            warnings=result.warnings,
        )
        _write_text_to_target(
            output,
            json.dumps(response.model_dump(), indent=2, sort_keys=True) + "\n",
        )
        return
    _write_text_to_target(output, source)


def main() -> None:
    app()
