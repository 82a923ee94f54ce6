from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import re
from typing import TypeAlias
import tomllib

from ldsynth.exceptions import ConfigError, SampleReadError
from ldsynth.scaffold import DiscoveredType
from ldsynth.synthesis.model import SynthesisConfig
from ldsynth.synthesis.naming import python_type_name

DEFAULT_CONFIG_NAME = "ldsynth.toml"

TomlScalar: TypeAlias = str | int | float | bool | None
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]


@dataclass(frozen=True)
class ModelSource:
    """One sample document declared under ``[[models]]``."""

    name: str
    module: str
    text: str
    source: str = ""

    @property
    def stem(self) -> str:
        return re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", python_type_name(self.name)).lower()

    def discovered(self) -> DiscoveredType:
        return DiscoveredType(name=python_type_name(self.name), module=self.module or self.stem)


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError:
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(config_path)


def synthesis_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get("synthesis", {})
    return section if isinstance(section, dict) else {}


def scaffold_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get("scaffold", {})
    return section if isinstance(section, dict) else {}


def _normalize_name_list(value: TomlValue) -> list[str]:
    items: list[str] = []
    if value is None:
        return items
    if isinstance(value, str):
        items = [part.strip() for part in value.split(",") if part.strip()]
    elif isinstance(value, (list, tuple, set)):
        for item in value:
            if isinstance(item, str):
                items.extend([part.strip() for part in item.split(",") if part.strip()])
    return [item for item in items if item]


def _as_bool(value: TomlValue) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return False


def synthesis_config(section: TomlTable | None) -> SynthesisConfig:
    if not isinstance(section, dict):
        return SynthesisConfig()
    discriminator = section.get("discriminator")
    if isinstance(discriminator, str) and discriminator:
        return SynthesisConfig(discriminator=discriminator)
    return SynthesisConfig()


def fail_on_warnings(section: TomlTable | None) -> bool:
    if not isinstance(section, dict):
        return False
    return _as_bool(section.get("fail_on_warnings"))


def scaffold_paths(section: TomlTable | None) -> list[str]:
    if not isinstance(section, dict):
        return []
    return _normalize_name_list(section.get("paths"))


def model_sources(data: TomlTable, root: Path | None = None) -> list[ModelSource]:
    """Read every ``[[models]]`` entry, loading sample files relative to ``root``."""
    base = root if root is not None else Path.cwd()
    entries = data.get("models", [])
    if not isinstance(entries, list):
        raise ConfigError("'models' must be an array of tables")
    sources: list[ModelSource] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ConfigError(f"models[{index}] must be a table")
        name = entry.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ConfigError(f"models[{index}] is missing 'name'")
        module = entry.get("module", "")
        if not isinstance(module, str):
            raise ConfigError(f"models[{index}].module must be a string")
        inline = entry.get("json")
        sample = entry.get("sample")
        if isinstance(inline, str) and isinstance(sample, str):
            raise ConfigError(f"models[{index}] declares both 'json' and 'sample'")
        if isinstance(inline, str):
            sources.append(ModelSource(name=name.strip(), module=module, text=inline))
            continue
        if not isinstance(sample, str) or not sample:
            raise ConfigError(f"models[{index}] needs a 'sample' path or inline 'json'")
        path = Path(sample)
        if not path.is_absolute():
            path = base / path
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeError) as exc:
            raise SampleReadError(f"Failed to read {path}: {exc}") from exc
        sources.append(
            ModelSource(name=name.strip(), module=module, text=text, source=str(path))
        )
    return sources


def merge_payload(payload: TomlTable, defaults: TomlTable) -> TomlTable:
    merged = dict(defaults)
    for key, value in payload.items():
        if value is None:
            continue
        merged[key] = value
    return merged
