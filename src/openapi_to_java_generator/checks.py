"""Document checks: structural validation, dangling references, schema listing."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Optional

from openapi_python_client.schema import OpenAPI
from pydantic import ValidationError

from .json_types import JSONValue, SchemaDocument
from .loader import document_version, extract_schemas, raw_schema_container
from .model_types import ArrayOf, EnumMarker, InlineObject, Primitive, PropertySpec, Reference

logger = logging.getLogger(__name__)

_REF_PREFIXES: tuple[str, ...] = ("#/components/schemas/", "#/definitions/")


@dataclass(frozen=True)
class ValidationIssue:
    """One structural problem reported by the OpenAPI validator."""

    location: str
    message: str


@dataclass(frozen=True)
class MissingSchema:
    """A ``$ref`` whose target schema is not defined in the document."""

    path: str
    schema: str


@dataclass(frozen=True)
class PropertySummary:
    """Display row for one schema property."""

    name: str
    type: str
    required: bool


@dataclass(frozen=True)
class SchemaSummary:
    """Display row for one schema definition."""

    name: str
    description: Optional[str]
    properties: tuple[PropertySummary, ...]


def validate_document(document: SchemaDocument) -> list[ValidationIssue]:
    """Validate an OpenAPI 3.x document against the OpenAPI object model.

    Swagger 2.0 documents are not structurally validated and yield no issues.
    """
    version = document_version(document)
    if document.get("openapi") is None:
        logger.info("Skipping structural validation for non-OpenAPI-3 document (%s)", version)
        return []
    try:
        OpenAPI.model_validate(dict(document))
    except ValidationError as exc:
        return [
            ValidationIssue(
                location=".".join(str(part) for part in error["loc"]) or "$",
                message=error["msg"],
            )
            for error in exc.errors()
        ]
    return []


def find_missing_schemas(document: SchemaDocument) -> list[MissingSchema]:
    """Return every local schema reference whose target is undefined.

    Entries are unique per ``(path, schema)`` and listed in document order.
    """
    defined = {name for name in raw_schema_container(document) if isinstance(name, str)}
    missing: list[MissingSchema] = []
    seen: set[tuple[str, str]] = set()
    for path, ref in _iter_refs(document, ""):
        for prefix in _REF_PREFIXES:
            if not ref.startswith(prefix):
                continue
            schema = ref[len(prefix) :]
            if schema and schema not in defined and (path, schema) not in seen:
                seen.add((path, schema))
                missing.append(MissingSchema(path=path, schema=schema))
    return missing


def list_schemas(document: SchemaDocument) -> list[SchemaSummary]:
    """Summarize the document's schemas for display."""
    summaries: list[SchemaSummary] = []
    for name, schema in extract_schemas(document).items():
        summaries.append(
            SchemaSummary(
                name=name,
                description=schema.description,
                properties=tuple(
                    PropertySummary(
                        name=prop_name,
                        type=display_type(prop),
                        required=prop_name in schema.required,
                    )
                    for prop_name, prop in schema.properties.items()
                ),
            )
        )
    return summaries


def display_type(prop: Optional[PropertySpec]) -> str:
    """Short human-readable type of a property."""
    if isinstance(prop, Reference):
        return prop.name
    if isinstance(prop, ArrayOf):
        return f"List<{display_type(prop.items)}>"
    if isinstance(prop, EnumMarker):
        return "enum"
    if isinstance(prop, InlineObject):
        return "object"
    if isinstance(prop, Primitive):
        if prop.format == "int64":
            return "long"
        return prop.type_name or "Object"
    return "Object"


def _iter_refs(node: JSONValue, path: str) -> Iterator[tuple[str, str]]:
    if isinstance(node, list):
        for index, item in enumerate(node):
            yield from _iter_refs(item, f"{path}/{index}" if path else str(index))
        return
    if not isinstance(node, Mapping):
        return
    ref = node.get("$ref")
    if isinstance(ref, str):
        yield path, ref
    for key, value in node.items():
        if key == "$ref":
            continue
        yield from _iter_refs(value, f"{path}/{key}" if path else str(key))
