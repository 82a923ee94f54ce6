from __future__ import annotations

from typing import Optional

from ldsynth.json_types import JSONArray
from ldsynth.synthesis.classify import classify_value, describe_value
from ldsynth.synthesis.model import FieldDescriptor, FieldKind, TypeRegistry, ValueKind
from ldsynth.synthesis.naming import normalize_identifier

_ELEMENT_KINDS = {
    ValueKind.STRING: FieldKind.STRING_ARRAY,
    ValueKind.NUMBER: FieldKind.NUMBER_ARRAY,
}


def resolve_array(
    registry: TypeRegistry,
    original_name: str,
    value: JSONArray,
    *,
    path: str = "",
) -> Optional[FieldDescriptor]:
    """Describe an array property by its first element.

    Only string and number elements are supported. Anything else, including
    an empty array, yields no field and a warning on the registry. Elements
    after the first are not checked.
    """
    if not value:
        registry.warn(f"{path}: skipped '{original_name}': empty array has no element type")
        return None
    first = value[0]
    kind = _ELEMENT_KINDS.get(classify_value(first))
    if kind is None:
        registry.warn(
            f"{path}: skipped '{original_name}': unsupported array element type "
            f"{describe_value(first)}"
        )
        return None
    return FieldDescriptor(
        original_name=original_name,
        identifier=normalize_identifier(original_name),
        kind=kind,
        path=path,
    )
