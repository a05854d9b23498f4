"""Internal datatypes for schema parsing and code generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, TypeAlias, Union

from .json_types import JSONObject, JSONScalar


@dataclass(frozen=True)
class Constraints:
    """Validation keywords attached to a property."""

    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    # OAS 3.0 and Swagger use booleans, OAS 3.1 uses the bound itself.
    exclusive_minimum: Union[bool, float, None] = None
    exclusive_maximum: Union[bool, float, None] = None


@dataclass(frozen=True)
class Reference:
    """A ``$ref`` pointing at another named schema."""

    name: str


@dataclass(frozen=True)
class Primitive:
    """A scalar property such as ``string`` or ``integer``."""

    type_name: Optional[str]
    format: Optional[str] = None
    constraints: Constraints = field(default_factory=Constraints)


@dataclass(frozen=True)
class ArrayOf:
    """An array property; ``items`` is ``None`` when the items schema is unusable."""

    items: Optional[PropertySpec]
    constraints: Constraints = field(default_factory=Constraints)


@dataclass(frozen=True)
class InlineObject:
    """An anonymous object schema, also used for inline ``allOf`` branches."""

    properties: dict[str, PropertySpec] = field(default_factory=dict)
    required: frozenset[str] = frozenset()
    all_of: tuple[PropertySpec, ...] = ()


@dataclass(frozen=True)
class EnumMarker:
    """A property restricted to literal values without being a named enum schema."""

    type_name: Optional[str]
    format: Optional[str]
    values: tuple[JSONScalar, ...]
    constraints: Constraints = field(default_factory=Constraints)


PropertySpec: TypeAlias = Union[Reference, Primitive, ArrayOf, InlineObject, EnumMarker]


@dataclass(frozen=True)
class SchemaDefinition:
    """One named entry of the document's schema container."""

    name: str
    type_name: Optional[str]
    properties: dict[str, PropertySpec]
    required: frozenset[str]
    all_of: tuple[PropertySpec, ...]
    enum: Optional[tuple[JSONScalar, ...]]
    description: Optional[str]
    raw: JSONObject

    @property
    def is_enum(self) -> bool:
        """Whether the schema is an enumeration type rather than a class."""
        return self.enum is not None and not self.properties and not self.all_of


@dataclass(frozen=True)
class FlattenedSchema:
    """Effective properties and required names after ``allOf`` composition."""

    properties: dict[str, PropertySpec]
    required: frozenset[str]


@dataclass(frozen=True)
class GeneratedArtifact:
    """One unit of generated source code."""

    name: str
    code: str


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one generation request."""

    artifacts: tuple[GeneratedArtifact, ...]
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        """Whether the request completed without a batch-level failure."""
        return self.error is None


@dataclass(frozen=True)
class FieldDef:
    """Represents a single Java field."""

    name: str
    source_name: str
    java_type: str
    annotations: tuple[str, ...] = ()


@dataclass(frozen=True)
class ClassDef:
    """Represents a generated Java class."""

    name: str
    package: str
    validation_package: str
    fields: tuple[FieldDef, ...]
    annotations: tuple[str, ...]
    excerpt: tuple[str, ...]
    description: Optional[str]
    accessors: bool
    referenced_types: frozenset[str] = frozenset()


@dataclass(frozen=True)
class EnumConstant:
    """One constant of a generated Java enum."""

    name: str
    literal: str
    annotations: tuple[str, ...] = ()


@dataclass(frozen=True)
class EnumDef:
    """Represents a generated Java enum."""

    name: str
    package: str
    constants: tuple[EnumConstant, ...]
    description: Optional[str]
