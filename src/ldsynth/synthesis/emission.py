from __future__ import annotations

import json
from typing import Iterable, List

import libcst as cst

from ldsynth.invariants import never
from ldsynth.synthesis.model import FieldDescriptor, FieldKind, SynthesisPlan, TypeDefinition
from ldsynth.synthesis.naming import python_type_name, unique_field_names

RENDER_KINDS = ("pydantic", "outline")

_GENERATED_HEADER = "# Generated by ldsynth from a JSON-LD sample. Do not edit."
# Module-level names a field attribute must not shadow.
_IMPORTED_NAMES = ("BaseModel", "ConfigDict", "Field", "List", "Optional")

_OUTLINE_TYPES = {
    FieldKind.STRING: "string",
    FieldKind.NUMBER: "number",
    FieldKind.BOOLEAN: "boolean",
    FieldKind.STRING_ARRAY: "[string]",
    FieldKind.NUMBER_ARRAY: "[number]",
}

_PYTHON_TYPES = {
    FieldKind.STRING: ("str", '""'),
    FieldKind.NUMBER: ("float", "0"),
    FieldKind.BOOLEAN: ("bool", "False"),
    FieldKind.STRING_ARRAY: ("List[str]", "default_factory=list"),
    FieldKind.NUMBER_ARRAY: ("List[float]", "default_factory=list"),
}


def render(plan: SynthesisPlan, kind: str = "pydantic") -> str:
    if kind == "outline":
        return render_outline(plan)
    if kind == "pydantic":
        return render_models(plan)
    raise ValueError(f"unknown render kind {kind!r}; expected one of {', '.join(RENDER_KINDS)}")


def outline_type(descriptor: FieldDescriptor) -> str:
    if descriptor.kind is FieldKind.OBJECT_REFERENCE:
        return f"optional {descriptor.reference}"
    if descriptor.kind in _OUTLINE_TYPES:
        return _OUTLINE_TYPES[descriptor.kind]
    never("no outline type for field kind", kind=descriptor.kind)


def render_outline(plan: SynthesisPlan) -> str:
    """Render ``plan`` as language-neutral ``type Name { ... }`` blocks."""
    blocks: List[str] = []
    for definition in plan.definitions:
        lines = [f"type {definition.name} {{"]
        for descriptor in definition.fields:
            if descriptor.kind is FieldKind.UNSUPPORTED:
                lines.append(f"  // skipped: {descriptor.original_name} ({descriptor.note})")
                continue
            lines.append(
                f"  {descriptor.identifier}: {outline_type(descriptor)}"
                f"  // wire-name: {descriptor.wire_name}"
            )
        lines.append("}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks) + "\n"


def _python_annotation(descriptor: FieldDescriptor) -> tuple[str, str]:
    if descriptor.kind is FieldKind.OBJECT_REFERENCE:
        return f"Optional[{python_type_name(descriptor.reference)}]", "None"
    if descriptor.kind in _PYTHON_TYPES:
        return _PYTHON_TYPES[descriptor.kind]
    never("no python type for field kind", kind=descriptor.kind)


def _typing_names(definitions: Iterable[TypeDefinition]) -> List[str]:
    names = set()
    for definition in definitions:
        for descriptor in definition.fields:
            if descriptor.kind is FieldKind.OBJECT_REFERENCE:
                names.add("Optional")
            elif descriptor.kind in (FieldKind.STRING_ARRAY, FieldKind.NUMBER_ARRAY):
                names.add("List")
    return sorted(names)


def _field_statement(attr: str, descriptor: FieldDescriptor) -> cst.SimpleStatementLine:
    annotation, default = _python_annotation(descriptor)
    value = f"Field({default}, alias={json.dumps(descriptor.wire_name)})"
    return cst.SimpleStatementLine(
        [
            cst.AnnAssign(
                target=cst.Name(attr),
                annotation=cst.Annotation(cst.parse_expression(annotation)),
                value=cst.parse_expression(value),
            )
        ]
    )


def _docstring_text(lines: Iterable[str]) -> str:
    text = " ".join(lines)
    return text.replace("\\", "\\\\").replace('"', "'")


def _class_def(definition: TypeDefinition, reserved: Iterable[str]) -> cst.ClassDef:
    doc_lines = [f"Synthesized type {definition.name}."]
    skipped = [
        f"{descriptor.original_name} ({descriptor.note})"
        for descriptor in definition.fields
        if descriptor.kind is FieldKind.UNSUPPORTED
    ]
    if skipped:
        doc_lines.append(f"Skipped: {', '.join(skipped)}.")
    docstring = cst.SimpleStatementLine(
        [cst.Expr(cst.SimpleString('"""' + _docstring_text(doc_lines) + '"""'))]
    )
    body: List[cst.BaseStatement] = [
        docstring,
        cst.parse_statement("model_config = ConfigDict(populate_by_name=True)"),
    ]
    supported = [
        descriptor for descriptor in definition.fields if descriptor.kind is not FieldKind.UNSUPPORTED
    ]
    names = unique_field_names((descriptor.identifier for descriptor in supported), reserved)
    for index, (attr, descriptor) in enumerate(zip(names, supported)):
        statement = _field_statement(attr, descriptor)
        if index == 0:
            statement = statement.with_changes(leading_lines=[cst.EmptyLine(indent=False)])
        body.append(statement)
    return cst.ClassDef(
        name=cst.Name(python_type_name(definition.name)),
        bases=[cst.Arg(cst.Name("BaseModel"))],
        body=cst.IndentedBlock(body=body),
        leading_lines=[cst.EmptyLine(), cst.EmptyLine()],
    )


def render_models(plan: SynthesisPlan) -> str:
    """Render ``plan`` as a Python module of pydantic models.

    Classes follow plan order (hoisted types, then the root); annotations are
    postponed so references between them resolve by name.
    """
    imports: List[cst.BaseStatement] = [
        cst.parse_statement("from __future__ import annotations"),
    ]
    typing_names = _typing_names(plan.definitions)
    if typing_names:
        imports.append(
            cst.parse_statement(f"from typing import {', '.join(typing_names)}").with_changes(
                leading_lines=[cst.EmptyLine()]
            )
        )
    imports.append(
        cst.parse_statement("from pydantic import BaseModel, ConfigDict, Field").with_changes(
            leading_lines=[cst.EmptyLine()]
        )
    )
    reserved = {python_type_name(definition.name) for definition in plan.definitions}
    reserved.update(_IMPORTED_NAMES)
    classes = [_class_def(definition, reserved) for definition in plan.definitions]
    module = cst.Module(
        body=[*imports, *classes],
        header=[cst.EmptyLine(comment=cst.Comment(_GENERATED_HEADER))],
    )
    return module.code
