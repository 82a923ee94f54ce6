"""Synthesis subpackage for ldsynth."""

from ldsynth.synthesis.arrays import resolve_array
from ldsynth.synthesis.classify import classify_value
from ldsynth.synthesis.driver import parse_document, synthesize, synthesize_path
from ldsynth.synthesis.emission import render, render_models, render_outline
from ldsynth.synthesis.model import (
    FieldDescriptor,
    FieldKind,
    SynthesisConfig,
    SynthesisPlan,
    TypeDefinition,
    TypeRegistry,
    ValueKind,
)
from ldsynth.synthesis.naming import normalize_identifier
from ldsynth.synthesis.resolver import resolve_object
from ldsynth.synthesis.runtime import build_models, root_model
from ldsynth.synthesis.schedule import ScheduleResult, topological_schedule

__all__ = [
    "FieldDescriptor",
    "FieldKind",
    "ScheduleResult",
    "SynthesisConfig",
    "SynthesisPlan",
    "TypeDefinition",
    "TypeRegistry",
    "ValueKind",
    "build_models",
    "classify_value",
    "normalize_identifier",
    "parse_document",
    "render",
    "render_models",
    "render_outline",
    "resolve_array",
    "resolve_object",
    "root_model",
    "synthesize",
    "synthesize_path",
    "topological_schedule",
]
