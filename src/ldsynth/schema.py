from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from ldsynth.synthesis.model import SynthesisPlan


class FieldDTO(BaseModel):
    original_name: str
    identifier: str
    kind: str
    reference: Optional[str] = None
    path: str = ""


class TypeDefinitionDTO(BaseModel):
    name: str
    fields: List[FieldDTO]


class SynthesisPlanResponseDTO(BaseModel):
    root: str
    definitions: List[TypeDefinitionDTO]
    warnings: List[str] = []
    errors: List[str] = []


class DiscoveredTypeDTO(BaseModel):
    name: str
    module: str


class ScaffoldResponseDTO(BaseModel):
    types: List[DiscoveredTypeDTO]
    source: str
    warnings: List[str] = []


def plan_to_dto(plan: SynthesisPlan) -> SynthesisPlanResponseDTO:
    return SynthesisPlanResponseDTO(
        root=plan.root,
        definitions=[
            TypeDefinitionDTO(
                name=definition.name,
                fields=[
                    FieldDTO(
                        original_name=descriptor.original_name,
                        identifier=descriptor.identifier,
                        kind=descriptor.kind.value,
                        reference=descriptor.reference or None,
                        path=descriptor.path,
                    )
                    for descriptor in definition.fields
                ],
            )
            for definition in plan.definitions
        ],
        warnings=list(plan.warnings),
        errors=list(plan.errors),
    )
