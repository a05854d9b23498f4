"""Convert schema definitions into Java class and enum definitions."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Set
from typing import Optional, Union

from .java_source import qualified_name, render_class, render_enum
from .loader import stringify_keys
from .merger import flatten
from .model_types import (
    ArrayOf,
    ClassDef,
    Constraints,
    EnumConstant,
    EnumDef,
    EnumMarker,
    FieldDef,
    Primitive,
    PropertySpec,
    SchemaDefinition,
)
from .naming import (
    enum_constant_name,
    java_string_literal,
    literal_text,
    to_camel_case,
    to_pascal_case,
    unique_name,
)
from .options import GenerationOptions
from .resolver import property_references
from .type_mapper import boxed_type, property_type

logger = logging.getLogger(__name__)

EXCERPT_LINE_LIMIT = 10

_UUID_PATTERN = (
    "^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)
_NUMERIC_TYPES = frozenset({"integer", "number"})
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_LONG_MIN = -(2**63)
_LONG_MAX = 2**63 - 1


def emit(
    name: str,
    all_schemas: Mapping[str, SchemaDefinition],
    options: GenerationOptions,
) -> str:
    """Generate Java source for one named schema.

    Args:
        name (str): Schema name to generate.
        all_schemas (Mapping[str, SchemaDefinition]): Every schema in the document.
        options (GenerationOptions): Emission policy.

    Returns:
        str: Java source, or a one-line comment when the schema does not exist.
    """
    schema = all_schemas.get(name)
    if schema is None:
        logger.warning("Schema %r not found; emitting placeholder", name)
        return not_found_comment(name)

    if schema.is_enum:
        return render_enum(build_enum_def(schema, options))
    return render_class(build_class_def(schema, all_schemas, options))


def not_found_comment(name: str) -> str:
    """Return the placeholder emitted for a missing schema."""
    return f"// Schema {name} not found."


def build_enum_def(schema: SchemaDefinition, options: GenerationOptions) -> EnumDef:
    """Build an enum definition from a schema-level ``enum``."""
    enum_name = to_pascal_case(schema.name)
    json_property = qualified_name("JsonProperty", {enum_name})
    used_names: set[str] = set()
    constants: list[EnumConstant] = []
    for value in schema.enum or ():
        literal = literal_text(value)
        annotations: tuple[str, ...] = ()
        if options.use_json_annotations:
            annotations = (f"@{json_property}({java_string_literal(literal)})",)
        constants.append(
            EnumConstant(
                name=unique_name(enum_constant_name(value), used_names),
                literal=literal,
                annotations=annotations,
            )
        )
    return EnumDef(
        name=enum_name,
        package=options.package_name,
        constants=tuple(constants),
        description=schema.description,
    )


def build_class_def(
    schema: SchemaDefinition,
    all_schemas: Mapping[str, SchemaDefinition],
    options: GenerationOptions,
) -> ClassDef:
    """Build a class definition from a schema after flattening its composition."""
    flattened = flatten(schema, all_schemas)
    class_name = to_pascal_case(schema.name)
    referenced_types = frozenset(
        to_pascal_case(name)
        for prop in flattened.properties.values()
        for name in property_references(prop)
    )
    local_names = referenced_types | {class_name}
    validation_package = f"{options.validation_api.value}.validation.constraints"

    used_names: set[str] = set()
    fields: list[FieldDef] = []
    for source_name, prop in flattened.properties.items():
        required = source_name in flattened.required
        annotations = _field_annotations(source_name, prop, required, options)
        fields.append(
            FieldDef(
                name=unique_name(to_camel_case(source_name), used_names),
                source_name=source_name,
                java_type=_field_type(
                    prop, required=required, options=options, local_names=local_names
                ),
                annotations=tuple(
                    _qualify(annotation, local_names, validation_package)
                    for annotation in annotations
                ),
            )
        )

    class_annotations: list[str] = []
    if options.use_lombok:
        class_annotations.append(f"@{qualified_name('Data', local_names)}")
    if options.use_json_annotations:
        include = qualified_name("JsonInclude", local_names)
        class_annotations.append(f"@{include}({include}.Include.NON_NULL)")

    return ClassDef(
        name=class_name,
        package=options.package_name,
        validation_package=validation_package,
        fields=tuple(fields),
        annotations=tuple(class_annotations),
        excerpt=schema_excerpt(schema),
        description=schema.description,
        accessors=options.generate_accessors and not options.use_lombok,
        referenced_types=referenced_types,
    )


def schema_excerpt(schema: SchemaDefinition) -> tuple[str, ...]:
    """Return the first lines of the pretty-printed source schema."""
    text = json.dumps(stringify_keys(schema.raw), indent=2, ensure_ascii=False, default=str)
    return tuple(text.splitlines()[:EXCERPT_LINE_LIMIT])


def _field_type(
    prop: PropertySpec,
    *,
    required: bool,
    options: GenerationOptions,
    local_names: Set[str],
) -> str:
    java_type = property_type(prop, options, local_names=local_names)
    if options.use_optional and not required:
        return f"{qualified_name('Optional', local_names)}<{boxed_type(java_type)}>"
    return java_type


def _qualify(annotation: str, local_names: Set[str], validation_package: str) -> str:
    name, paren, arguments = annotation[1:].partition("(")
    return f"@{qualified_name(name, local_names, validation_package)}{paren}{arguments}"


def _field_annotations(
    source_name: str,
    prop: PropertySpec,
    required: bool,
    options: GenerationOptions,
) -> tuple[str, ...]:
    annotations: list[str] = []
    if options.use_validation_annotations:
        annotations.extend(validation_annotations(prop, required=required))
    if options.use_json_annotations:
        annotations.append(f"@JsonProperty({java_string_literal(source_name)})")
    return tuple(annotations)


def validation_annotations(prop: PropertySpec, *, required: bool) -> list[str]:
    """Return Bean Validation annotations for a property.

    Annotation names are unqualified; imports are derived when rendering.
    """
    annotations: list[str] = []
    if required:
        annotations.append("@NotNull")

    if isinstance(prop, ArrayOf):
        size = _size_annotation(prop.constraints.min_items, prop.constraints.max_items)
        if size is not None:
            annotations.append(size)
        return annotations

    if not isinstance(prop, (Primitive, EnumMarker)):
        return annotations

    constraints = prop.constraints
    if prop.type_name == "string":
        size = _size_annotation(constraints.min_length, constraints.max_length)
        if size is not None:
            annotations.append(size)
        if constraints.pattern:
            annotations.append(f"@Pattern(regexp = {java_string_literal(constraints.pattern)})")
        if prop.format == "email":
            annotations.append("@Email")
        if prop.format == "uuid":
            annotations.append(f"@Pattern(regexp = {java_string_literal(_UUID_PATTERN)})")
    elif prop.type_name in _NUMERIC_TYPES:
        annotations.extend(_bound_annotations(constraints))
    return annotations


def _size_annotation(minimum: Optional[int], maximum: Optional[int]) -> Optional[str]:
    if minimum is not None and maximum is not None:
        return f"@Size(min = {minimum}, max = {maximum})"
    if minimum is not None:
        return f"@Size(min = {minimum})"
    if maximum is not None:
        return f"@Size(max = {maximum})"
    return None


def _bound_annotations(constraints: Constraints) -> list[str]:
    return [
        *_bound(constraints.minimum, constraints.exclusive_minimum, "Min", "DecimalMin"),
        *_bound(constraints.maximum, constraints.exclusive_maximum, "Max", "DecimalMax"),
    ]


def _bound(
    value: Optional[float],
    exclusive: Union[bool, float, None],
    integral_name: str,
    decimal_name: str,
) -> list[str]:
    annotations: list[str] = []
    if value is not None:
        if exclusive is True:
            annotations.append(_exclusive_decimal(decimal_name, value))
        elif _is_integral(value) and _LONG_MIN <= value <= _LONG_MAX:
            annotations.append(f"@{integral_name}({_long_literal(value)})")
        else:
            annotations.append(f"@{decimal_name}({java_string_literal(literal_text(value))})")
    if exclusive is not None and not isinstance(exclusive, bool):
        annotations.append(_exclusive_decimal(decimal_name, exclusive))
    return annotations


def _exclusive_decimal(name: str, value: float) -> str:
    return f"@{name}(value = {java_string_literal(literal_text(value))}, inclusive = false)"


def _is_integral(value: float) -> bool:
    return isinstance(value, int) or value.is_integer()


def _long_literal(value: float) -> str:
    number = int(value)
    if _INT_MIN <= number <= _INT_MAX:
        return str(number)
    return f"{number}L"
