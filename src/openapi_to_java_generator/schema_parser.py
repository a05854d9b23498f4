"""Convert raw schema mappings into typed property variants."""

from __future__ import annotations

from typing import Optional, Union

from .json_types import JSONObject, JSONScalar, JSONValue
from .model_types import (
    ArrayOf,
    Constraints,
    EnumMarker,
    InlineObject,
    Primitive,
    PropertySpec,
    Reference,
    SchemaDefinition,
)


def ref_name(ref: str) -> Optional[str]:
    """Return the schema name a ``$ref`` string points at.

    Local (``#/components/schemas/Pet``, ``#/definitions/Pet``) and
    file-qualified (``common.yaml#/Pet``) references both resolve to their
    last path segment.
    """
    name = ref.rsplit("/", maxsplit=1)[-1]
    name = name.replace("~1", "/").replace("~0", "~")
    return name or None


def parse_schema_definition(name: str, raw: JSONObject) -> SchemaDefinition:
    """Build a ``SchemaDefinition`` from one entry of the schema container."""
    enum = _enum_values(raw.get("enum"))
    description = raw.get("description")
    return SchemaDefinition(
        name=name,
        type_name=_type_name(raw.get("type")),
        properties=_parse_properties(raw.get("properties")),
        required=_required_names(raw.get("required")),
        all_of=_parse_all_of(raw.get("allOf")),
        enum=enum,
        description=description if isinstance(description, str) else None,
        raw=raw,
    )


def parse_property(raw: JSONValue) -> PropertySpec:
    """Resolve a property, array-item, or composition-branch schema to its variant."""
    if not isinstance(raw, dict):
        return InlineObject()

    ref = raw.get("$ref")
    if isinstance(ref, str):
        name = ref_name(ref)
        if name is not None:
            return Reference(name=name)

    type_name = _type_name(raw.get("type"))
    schema_format = raw.get("format") if isinstance(raw.get("format"), str) else None
    constraints = _constraints(raw)

    enum = _enum_values(raw.get("enum"))
    if enum is not None:
        return EnumMarker(
            type_name=type_name,
            format=schema_format,
            values=enum,
            constraints=constraints,
        )

    if type_name == "array" or (type_name is None and "items" in raw):
        items = raw.get("items")
        return ArrayOf(
            items=parse_property(items) if isinstance(items, dict) else None,
            constraints=constraints,
        )

    if type_name is None or type_name == "object":
        properties = _parse_properties(raw.get("properties"))
        all_of = _parse_all_of(raw.get("allOf"))
        # `allOf: [{$ref: X}]` is the usual way to annotate a reference.
        if not properties and len(all_of) == 1 and isinstance(all_of[0], Reference):
            return all_of[0]
        return InlineObject(
            properties=properties,
            required=_required_names(raw.get("required")),
            all_of=all_of,
        )

    return Primitive(type_name=type_name, format=schema_format, constraints=constraints)


def _parse_properties(raw: JSONValue) -> dict[str, PropertySpec]:
    if not isinstance(raw, dict):
        return {}
    return {
        name: parse_property(prop)
        for name, prop in raw.items()
        if isinstance(name, str) and isinstance(prop, dict)
    }


def _parse_all_of(raw: JSONValue) -> tuple[PropertySpec, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(parse_property(item) for item in raw if isinstance(item, dict))


def _required_names(raw: JSONValue) -> frozenset[str]:
    if not isinstance(raw, list):
        return frozenset()
    return frozenset(name for name in raw if isinstance(name, str))


def _type_name(raw: JSONValue) -> Optional[str]:
    if isinstance(raw, str) and raw:
        return raw
    if isinstance(raw, list):
        # OAS 3.1 nullable form, e.g. ["string", "null"].
        for member in raw:
            if isinstance(member, str) and member != "null":
                return member
    return None


def _enum_values(raw: JSONValue) -> Optional[tuple[JSONScalar, ...]]:
    if not isinstance(raw, list):
        return None
    return tuple(value for value in raw if not isinstance(value, (dict, list)))


def _constraints(raw: JSONObject) -> Constraints:
    return Constraints(
        min_length=_int_or_none(raw.get("minLength")),
        max_length=_int_or_none(raw.get("maxLength")),
        pattern=raw.get("pattern") if isinstance(raw.get("pattern"), str) else None,
        min_items=_int_or_none(raw.get("minItems")),
        max_items=_int_or_none(raw.get("maxItems")),
        minimum=_number_or_none(raw.get("minimum")),
        maximum=_number_or_none(raw.get("maximum")),
        exclusive_minimum=_exclusive_marker(raw.get("exclusiveMinimum")),
        exclusive_maximum=_exclusive_marker(raw.get("exclusiveMaximum")),
    )


def _int_or_none(value: JSONValue) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _number_or_none(value: JSONValue) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _exclusive_marker(value: JSONValue) -> Union[bool, float, None]:
    if isinstance(value, bool):
        return value
    return _number_or_none(value)
