from __future__ import annotations

import keyword
import re
from typing import Iterable, List

_DISCRIMINATOR_MARKER = "@"


def normalize_identifier(name: str) -> str:
    """Turn a raw JSON key into a field identifier.

    Drops one leading ``@`` and upper-cases the first remaining character:
    ``"@type" -> "Type"``, ``"addressLocality" -> "AddressLocality"``.
    """
    if name.startswith(_DISCRIMINATOR_MARKER):
        name = name[len(_DISCRIMINATOR_MARKER):]
    return name[:1].upper() + name[1:]


def _camelize(value: str) -> str:
    parts = [p for p in re.split(r"[^a-zA-Z0-9]+", value) if p]
    return "".join(p[:1].upper() + p[1:] for p in parts)


def _legalize(value: str, fallback: str) -> str:
    cleaned = re.sub(r"[^a-zA-Z0-9_]", "_", value)
    if not cleaned.strip("_"):
        return fallback
    # pydantic treats leading underscores as private attributes.
    if cleaned[0].isdigit() or cleaned[0] == "_":
        return f"{fallback}{cleaned}"
    return cleaned


def python_field_name(identifier: str) -> str:
    name = _legalize(identifier, "F")
    if keyword.iskeyword(name) or keyword.issoftkeyword(name):
        name = f"{name}_"
    return name


def python_type_name(name: str) -> str:
    base = _camelize(name)
    if not base:
        return "Model"
    if base[0].isdigit():
        return f"Model{base}"
    if keyword.iskeyword(base):
        return f"{base}_"
    return base


def unique_field_names(identifiers: Iterable[str], reserved: Iterable[str] = ()) -> List[str]:
    """Legal Python names for one type's fields, suffixed on collision.

    Names in ``reserved`` (class names bound in the same module) get a
    trailing ``_`` so a field never shadows the type its annotation names.
    """
    taken = set(reserved)
    names: List[str] = []
    existing: set[str] = set()
    for identifier in identifiers:
        base = python_field_name(identifier)
        if base in taken:
            base = f"{base}_"
        name = base
        counter = 2
        while name in existing:
            name = f"{base}{counter}"
            counter += 1
        existing.add(name)
        names.append(name)
    return names
