from __future__ import annotations

from pathlib import Path
import sys

import pytest


def _load():
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root / "src"))
    from ldsynth.exceptions import ParseError, SampleReadError, UnsupportedRootError
    from ldsynth.synthesis.driver import synthesize, synthesize_path
    from ldsynth.synthesis.model import FieldKind

    return synthesize, synthesize_path, FieldKind, ParseError, SampleReadError, UnsupportedRootError


def test_person_sample_end_to_end(person_sample_text: str) -> None:
    synthesize, _, FieldKind, *_ = _load()
    plan = synthesize(person_sample_text, "Person")

    assert [definition.name for definition in plan.definitions] == ["PostalAddress", "Person"]
    assert plan.root == "Person"
    assert plan.root_definition.name == "Person"
    assert plan.warnings == []

    postal = plan.definitions_named("PostalAddress")[0]
    for identifier in ("AddressLocality", "AddressRegion", "PostalCode", "StreetAddress"):
        assert postal.field_named(identifier).kind is FieldKind.STRING

    person = plan.root_definition
    assert person.field_named("SameAs").kind is FieldKind.STRING_ARRAY
    assert person.field_named("Colleague").kind is FieldKind.STRING_ARRAY
    assert person.field_named("Context").wire_name == "@context"
    assert person.field_named("Type").wire_name == "@type"
    address = person.field_named("Address")
    assert address.kind is FieldKind.OBJECT_REFERENCE
    assert address.reference == "PostalAddress"
    assert person.field_named("AddressLocality") is None


def test_wire_names_match_original_keys(person_sample_text: str) -> None:
    synthesize, *_ = _load()
    plan = synthesize(person_sample_text, "Person")
    for definition in plan.definitions:
        for field in definition.fields:
            assert field.wire_name == field.original_name


def test_each_run_uses_a_fresh_registry(person_sample_text: str) -> None:
    synthesize, *_ = _load()
    first = synthesize(person_sample_text, "Person")
    second = synthesize(person_sample_text, "Person")
    assert len(first.definitions) == len(second.definitions) == 2
    assert first.definitions[0] is not second.definitions[0]


def test_malformed_json_raises_parse_error() -> None:
    synthesize, _, _, ParseError, *_ = _load()
    with pytest.raises(ParseError) as excinfo:
        synthesize('{"name": }', "Person", source="broken.json")
    assert excinfo.value.line == 1
    assert excinfo.value.column > 0
    assert "broken.json" in str(excinfo.value)


def test_non_object_root_is_rejected() -> None:
    synthesize, *_, UnsupportedRootError = _load()
    with pytest.raises(UnsupportedRootError) as excinfo:
        synthesize("[1, 2]", "Person")
    assert excinfo.value.kind == "array"


def test_synthesize_path_reads_utf8(write_sample) -> None:
    _, synthesize_path, FieldKind, *_ = _load()
    path = write_sample('{"straße": "Hauptstraße 1", "floor": 2}')
    plan = synthesize_path(path, "Place")
    fields = plan.root_definition.fields
    assert fields[0].wire_name == "straße"
    assert fields[0].identifier == "Straße"
    assert fields[1].kind is FieldKind.NUMBER


def test_synthesize_path_missing_file(tmp_path: Path) -> None:
    _, synthesize_path, _, _, SampleReadError, _ = _load()
    with pytest.raises(SampleReadError):
        synthesize_path(tmp_path / "missing.json", "Person")


def test_empty_root_object_yields_empty_type() -> None:
    synthesize, *_ = _load()
    plan = synthesize("{}", "Empty")
    assert [definition.name for definition in plan.definitions] == ["Empty"]
    assert plan.root_definition.fields == []
