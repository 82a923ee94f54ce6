from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ValueKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    UNSUPPORTED = "unsupported"


class FieldKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING_ARRAY = "string_array"
    NUMBER_ARRAY = "number_array"
    OBJECT_REFERENCE = "object_reference"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class FieldDescriptor:
    original_name: str
    identifier: str
    kind: FieldKind
    reference: str = ""
    path: str = ""
    note: str = ""

    @property
    def wire_name(self) -> str:
        return self.original_name


@dataclass
class TypeDefinition:
    name: str
    fields: List[FieldDescriptor] = field(default_factory=list)

    def field_named(self, identifier: str) -> Optional[FieldDescriptor]:
        for descriptor in self.fields:
            if descriptor.identifier == identifier:
                return descriptor
        return None


@dataclass
class TypeRegistry:
    """Accumulator shared by one recursive walk of one document.

    Hoisted definitions are appended in discovery order and never nested
    inside one another. No deduplication by name is performed.
    """

    definitions: List[TypeDefinition] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def open_type(self, name: str) -> TypeDefinition:
        definition = TypeDefinition(name=name)
        self.definitions.append(definition)
        return definition

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def names(self) -> List[str]:
        return [definition.name for definition in self.definitions]


@dataclass(frozen=True)
class SynthesisPlan:
    root: str
    definitions: List[TypeDefinition] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def root_definition(self) -> TypeDefinition:
        # The root is always rendered last.
        return self.definitions[-1]

    def definitions_named(self, name: str) -> List[TypeDefinition]:
        return [definition for definition in self.definitions if definition.name == name]


@dataclass(frozen=True)
class SynthesisConfig:
    discriminator: str = "@type"
