from __future__ import annotations

from pathlib import Path
import sys


def _load():
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root / "src"))
    from ldsynth.synthesis.arrays import resolve_array
    from ldsynth.synthesis.model import FieldKind, TypeRegistry

    return resolve_array, FieldKind, TypeRegistry


def test_string_array_field() -> None:
    resolve_array, FieldKind, TypeRegistry = _load()
    registry = TypeRegistry()
    descriptor = resolve_array(registry, "sameAs", ["a", "b"], path="$.sameAs")
    assert descriptor is not None
    assert descriptor.kind is FieldKind.STRING_ARRAY
    assert descriptor.identifier == "SameAs"
    assert descriptor.wire_name == "sameAs"
    assert registry.warnings == []


def test_number_array_field() -> None:
    resolve_array, FieldKind, TypeRegistry = _load()
    descriptor = resolve_array(TypeRegistry(), "scores", [1, 2.5])
    assert descriptor is not None
    assert descriptor.kind is FieldKind.NUMBER_ARRAY


def test_unsupported_arrays_emit_no_field() -> None:
    resolve_array, _, TypeRegistry = _load()
    registry = TypeRegistry()
    assert resolve_array(registry, "empty", [], path="$.empty") is None
    assert resolve_array(registry, "objects", [{"x": 1}], path="$.objects") is None
    assert resolve_array(registry, "flags", [True, False], path="$.flags") is None
    assert resolve_array(registry, "nested", [["a"]], path="$.nested") is None
    assert resolve_array(registry, "nulls", [None], path="$.nulls") is None
    assert len(registry.warnings) == 5
    assert "empty array" in registry.warnings[0]
    assert "object" in registry.warnings[1]
    assert "boolean" in registry.warnings[2]
    assert registry.definitions == []


def test_only_first_element_is_inspected() -> None:
    resolve_array, FieldKind, TypeRegistry = _load()
    registry = TypeRegistry()
    descriptor = resolve_array(registry, "mixed", ["a", 1, {"x": 1}])
    assert descriptor is not None
    assert descriptor.kind is FieldKind.STRING_ARRAY
    assert resolve_array(registry, "mixed2", [{"x": 1}, "a"]) is None
