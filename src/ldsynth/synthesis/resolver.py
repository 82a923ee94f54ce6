"""Recursive resolution of JSON objects into field descriptors.

Nested objects that carry a string ``@type`` are hoisted into their own
TypeDefinition on the registry; the enclosing type then holds an optional
reference to it by name. Nested objects without a discriminator are flattened
into the enclosing type.

Routing is decided while walking: properties that precede ``@type`` inside a
nested object stay with the caller. Documents are not pre-scanned for the
discriminator.
"""

from __future__ import annotations

from typing import List, Optional

from ldsynth.json_types import JSONObject
from ldsynth.synthesis.arrays import resolve_array
from ldsynth.synthesis.classify import classify_value, describe_value
from ldsynth.synthesis.model import (
    FieldDescriptor,
    FieldKind,
    SynthesisConfig,
    TypeDefinition,
    TypeRegistry,
    ValueKind,
)
from ldsynth.synthesis.naming import normalize_identifier

_PRIMITIVE_KINDS = {
    ValueKind.STRING: FieldKind.STRING,
    ValueKind.NUMBER: FieldKind.NUMBER,
    ValueKind.BOOLEAN: FieldKind.BOOLEAN,
}

_DEFAULT_CONFIG = SynthesisConfig()


def resolve_object(
    registry: TypeRegistry,
    introducing_name: str,
    value: JSONObject,
    *,
    path: str = "$",
    wire_name: str = "",
    config: SynthesisConfig = _DEFAULT_CONFIG,
) -> List[FieldDescriptor]:
    """Resolve ``value`` into the fields it contributes to its caller.

    ``introducing_name`` is the normalized identifier of the property holding
    this object, or ``""`` for the document root; the root never hoists.
    ``wire_name`` is that property's raw key, used for the reference field.
    """
    collected: List[FieldDescriptor] = []
    pending: Optional[TypeDefinition] = None

    for key, child in value.items():
        child_path = f"{path}.{key}"
        built = _resolve_property(registry, key, child, path=child_path, config=config)

        if (
            pending is None
            and introducing_name
            and key == config.discriminator
        ):
            if isinstance(child, str):
                pending = registry.open_type(child)
            else:
                registry.warn(
                    f"{child_path}: '{key}' is {describe_value(child)}, not a string; "
                    f"'{introducing_name}' is not hoisted"
                )

        if pending is None:
            collected.extend(built)
        else:
            pending.fields.extend(built)

    if pending is not None:
        collected.append(
            FieldDescriptor(
                original_name=wire_name or introducing_name,
                identifier=introducing_name,
                kind=FieldKind.OBJECT_REFERENCE,
                reference=pending.name,
                path=path,
            )
        )
    return collected


def _resolve_property(
    registry: TypeRegistry,
    key: str,
    child: object,
    *,
    path: str,
    config: SynthesisConfig,
) -> List[FieldDescriptor]:
    kind = classify_value(child)
    identifier = normalize_identifier(key)
    if kind in _PRIMITIVE_KINDS:
        return [
            FieldDescriptor(
                original_name=key,
                identifier=identifier,
                kind=_PRIMITIVE_KINDS[kind],
                path=path,
            )
        ]
    if kind is ValueKind.ARRAY:
        descriptor = resolve_array(registry, key, child, path=path)
        return [] if descriptor is None else [descriptor]
    if kind is ValueKind.OBJECT:
        return resolve_object(
            registry,
            identifier,
            child,
            path=path,
            wire_name=key,
            config=config,
        )
    reason = describe_value(child)
    registry.warn(f"{path}: skipped '{key}': unsupported value {reason}")
    return [
        FieldDescriptor(
            original_name=key,
            identifier=identifier,
            kind=FieldKind.UNSUPPORTED,
            path=path,
            note=reason,
        )
    ]
