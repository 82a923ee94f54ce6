from __future__ import annotations

from ldsynth.synthesis.model import ValueKind


def classify_value(value: object) -> ValueKind:
    """Map one parsed JSON value to exactly one ValueKind.

    Total over any Python object: null and anything `json.loads` would not
    produce map to UNSUPPORTED.
    """
    # bool before numbers: bool is an int subclass.
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, list):
        return ValueKind.ARRAY
    if isinstance(value, dict):
        return ValueKind.OBJECT
    return ValueKind.UNSUPPORTED


def describe_value(value: object) -> str:
    if value is None:
        return "null"
    kind = classify_value(value)
    if kind is ValueKind.UNSUPPORTED:
        return type(value).__name__
    return kind.value
