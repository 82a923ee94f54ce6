from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field, create_model

from ldsynth.invariants import never
from ldsynth.synthesis.model import FieldDescriptor, FieldKind, SynthesisPlan, TypeDefinition
from ldsynth.synthesis.naming import python_type_name, unique_field_names
from ldsynth.synthesis.schedule import topological_schedule

MODEL_CONFIG = ConfigDict(populate_by_name=True)

_PRIMITIVES: Dict[FieldKind, Tuple[Any, Any]] = {
    FieldKind.STRING: (str, ""),
    FieldKind.NUMBER: (float, 0),
    FieldKind.BOOLEAN: (bool, False),
}


def _winning_definitions(plan: SynthesisPlan) -> Dict[str, TypeDefinition]:
    # Later definitions rebind earlier ones of the same name.
    winners: Dict[str, TypeDefinition] = {}
    for definition in plan.definitions:
        winners[python_type_name(definition.name)] = definition
    return winners


def _dependencies(definition: TypeDefinition) -> Set[str]:
    return {
        python_type_name(descriptor.reference)
        for descriptor in definition.fields
        if descriptor.kind is FieldKind.OBJECT_REFERENCE
    }


def _field_spec(
    descriptor: FieldDescriptor,
    models: Dict[str, type[BaseModel]],
) -> Tuple[Any, Any]:
    kind = descriptor.kind
    alias = descriptor.wire_name
    if kind in _PRIMITIVES:
        annotation, default = _PRIMITIVES[kind]
        return annotation, Field(default, alias=alias)
    if kind is FieldKind.STRING_ARRAY:
        return List[str], Field(default_factory=list, alias=alias)
    if kind is FieldKind.NUMBER_ARRAY:
        return List[float], Field(default_factory=list, alias=alias)
    if kind is FieldKind.OBJECT_REFERENCE:
        target = python_type_name(descriptor.reference)
        if target in models:
            return Optional[models[target]], Field(None, alias=alias)
        # Forward reference, resolved by model_rebuild.
        return Optional[target], Field(None, alias=alias)
    never("unknown field kind", kind=kind)


def build_model(
    definition: TypeDefinition,
    models: Dict[str, type[BaseModel]],
    reserved: Iterable[str] = (),
) -> type[BaseModel]:
    """Create one pydantic model.

    References to types already in ``models`` use the class itself; any other
    reference is left as a forward reference by name.
    """
    name = python_type_name(definition.name)
    fields: Dict[str, Any] = {}
    supported = [
        descriptor for descriptor in definition.fields if descriptor.kind is not FieldKind.UNSUPPORTED
    ]
    names = unique_field_names((descriptor.identifier for descriptor in supported), reserved)
    for attr, descriptor in zip(names, supported):
        fields[attr] = _field_spec(descriptor, models)
    return create_model(name, __config__=MODEL_CONFIG, **fields)


def build_models(plan: SynthesisPlan) -> Dict[str, type[BaseModel]]:
    """Build live pydantic models for every definition in ``plan``.

    Keys are the Python class names. Models are created dependencies first;
    self references and cycles closed by colliding names are created with
    forward references and rebuilt once every model exists. Serialize with
    ``model_dump(by_alias=True)`` to keep the wire names.
    """
    winners = _winning_definitions(plan)
    graph = {
        name: _dependencies(definition) - {name}
        for name, definition in winners.items()
    }
    schedule = topological_schedule(graph)
    models: Dict[str, type[BaseModel]] = {}
    deferred: List[str] = []
    for name in [*schedule.order, *schedule.remaining]:
        definition = winners.get(name)
        if definition is None:
            never("reference to an undefined type", name=name)
        if name in schedule.remaining or not _dependencies(definition).issubset(models):
            deferred.append(name)
        models[name] = build_model(definition, models, reserved=winners)
    for name in deferred:
        models[name].model_rebuild(force=True, _types_namespace=dict(models))
    return models


def root_model(plan: SynthesisPlan) -> type[BaseModel]:
    return build_models(plan)[python_type_name(plan.root)]
