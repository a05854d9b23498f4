"""Map OpenAPI types and formats to Java type names."""

from __future__ import annotations

from collections.abc import Set
from typing import Optional

from .java_source import qualified_name
from .model_types import ArrayOf, EnumMarker, InlineObject, PropertySpec, Reference
from .naming import to_pascal_case
from .options import DateType, GenerationOptions

OBJECT_TYPE = "Object"

_DATE_FORMATS = frozenset({"date-time", "date"})

# OpenAPI format -> (boxed, primitive)
_INTEGER_TYPES: dict[Optional[str], tuple[str, str]] = {
    "int64": ("Long", "long"),
}
_NUMBER_TYPES: dict[Optional[str], tuple[str, str]] = {
    "double": ("Double", "double"),
    "float": ("Float", "float"),
}

_BOXED: dict[str, str] = {
    "int": "Integer",
    "long": "Long",
    "float": "Float",
    "double": "Double",
    "boolean": "Boolean",
}


def map_type(
    schema_type: Optional[str],
    schema_format: Optional[str],
    options: GenerationOptions,
    items: Optional[PropertySpec] = None,
    *,
    local_names: Set[str] = frozenset(),
) -> str:
    """Return the Java type name for an OpenAPI ``type``/``format`` pair.

    Args:
        schema_type (Optional[str]): OpenAPI ``type`` value.
        schema_format (Optional[str]): OpenAPI ``format`` refinement.
        options (GenerationOptions): Date and boxing policy.
        items (Optional[PropertySpec]): Item schema when ``schema_type`` is ``array``.
        local_names (Set[str]): Generated class names that library types must not shadow.

    Returns:
        str: Java type name, never empty.
    """
    if schema_type == "string":
        if schema_format in _DATE_FORMATS and options.date_type is DateType.OFFSET_DATE_TIME:
            return qualified_name("OffsetDateTime", local_names)
        return "String"
    if schema_type == "integer":
        boxed, primitive = _INTEGER_TYPES.get(schema_format, ("Integer", "int"))
        return boxed if options.use_boxed_primitives else primitive
    if schema_type == "number":
        if schema_format not in _NUMBER_TYPES:
            return qualified_name("BigDecimal", local_names)
        boxed, primitive = _NUMBER_TYPES[schema_format]
        return boxed if options.use_boxed_primitives else primitive
    if schema_type == "boolean":
        return "Boolean" if options.use_boxed_primitives else "boolean"
    if schema_type == "array":
        element = _element_type(items, options, local_names)
        return f"{qualified_name('List', local_names)}<{element}>"
    if schema_type == "object" or not schema_type:
        return OBJECT_TYPE
    return to_pascal_case(schema_type)


def property_type(
    prop: PropertySpec,
    options: GenerationOptions,
    *,
    local_names: Set[str] = frozenset(),
) -> str:
    """Return the Java type for a parsed property variant.

    References use the referenced schema's class name directly. Inline enums
    are typed by their base type; they do not produce enum classes.
    """
    if isinstance(prop, Reference):
        return to_pascal_case(prop.name)
    if isinstance(prop, ArrayOf):
        return map_type("array", None, options, prop.items, local_names=local_names)
    if isinstance(prop, InlineObject):
        return OBJECT_TYPE
    if isinstance(prop, EnumMarker):
        return map_type(prop.type_name or "string", prop.format, options, local_names=local_names)
    return map_type(prop.type_name, prop.format, options, local_names=local_names)


def boxed_type(java_type: str) -> str:
    """Return the wrapper class for a primitive spelling, or the type unchanged.

    Generic arguments such as ``List<X>`` and ``Optional<X>`` cannot be primitives.
    """
    return _BOXED.get(java_type, java_type)


def _element_type(
    items: Optional[PropertySpec],
    options: GenerationOptions,
    local_names: Set[str],
) -> str:
    if items is None:
        return OBJECT_TYPE
    return boxed_type(property_type(items, options, local_names=local_names))
