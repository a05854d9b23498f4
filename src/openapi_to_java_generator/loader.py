"""Specification document loading and schema container extraction."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Optional

import yaml

from .json_types import JSONObject, JSONValue, SchemaDocument
from .model_types import SchemaDefinition
from .naming import literal_text
from .schema_parser import parse_schema_definition

logger = logging.getLogger(__name__)


class ParseError(RuntimeError):
    """Raised when specification text cannot be parsed into a document."""


class _SpecLoader(yaml.SafeLoader):
    """Safe loader that only reads ``true``/``false`` as booleans, like YAML 1.2."""


_BOOL_TAG = "tag:yaml.org,2002:bool"
_SpecLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_SpecLoader.add_implicit_resolver(
    _BOOL_TAG, re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"), list("tTfF")
)


def parse_document(text: str) -> SchemaDocument:
    """Parse JSON or YAML specification text into a document mapping.

    Args:
        text (str): Raw specification text.

    Returns:
        SchemaDocument: Parsed document root.
    """
    try:
        payload: JSONValue = json.loads(text)
    except ValueError:
        try:
            payload = stringify_keys(yaml.load(text, Loader=_SpecLoader))
        except yaml.YAMLError as exc:
            raise ParseError(f"Specification is neither valid JSON nor valid YAML: {exc}") from exc

    if not isinstance(payload, dict):
        raise ParseError(
            f"Specification must deserialize to a mapping, got {type(payload).__name__}"
        )
    return payload


def load_document(path: Path) -> SchemaDocument:
    """Read and parse a specification file."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ParseError(f"Failed to read specification file {path}: {exc}") from exc
    return parse_document(text)


def raw_schema_container(document: SchemaDocument) -> JSONObject:
    """Return the raw schema mapping for Swagger 2.0 or OpenAPI 3.x documents."""
    container: JSONValue = None
    if document.get("swagger"):
        container = document.get("definitions")
    elif document.get("openapi"):
        components = document.get("components")
        if isinstance(components, dict):
            container = components.get("schemas")
    if not isinstance(container, dict):
        return {}
    return container


def extract_schemas(document: SchemaDocument) -> dict[str, SchemaDefinition]:
    """Extract named schema definitions from a parsed document.

    Args:
        document (SchemaDocument): Parsed document root; it is never mutated.

    Returns:
        dict[str, SchemaDefinition]: Schemas keyed by name, in document order.
    """
    schemas: dict[str, SchemaDefinition] = {}
    for name, raw_schema in raw_schema_container(document).items():
        if not isinstance(name, str):
            continue
        if not isinstance(raw_schema, dict):
            logger.warning(
                "Skipping schema %r: expected a mapping, got %s", name, type(raw_schema).__name__
            )
            continue
        schemas[name] = parse_schema_definition(name, raw_schema)
    logger.debug("Extracted %d schema definitions", len(schemas))
    return schemas


def document_version(document: SchemaDocument) -> Optional[str]:
    """Return the declared ``swagger`` or ``openapi`` version string, if any."""
    for key in ("openapi", "swagger"):
        version = document.get(key)
        if isinstance(version, (str, int, float)) and not isinstance(version, bool):
            return str(version).strip() or None
    return None


def stringify_keys(value: Any) -> Any:
    """Return ``value`` with every mapping key rendered as a string.

    YAML mapping keys such as ``200`` or ``2024-01-01`` load as numbers and
    dates; schema and property names are always strings.
    """
    if isinstance(value, dict):
        return {
            key if isinstance(key, str) else literal_text(key): stringify_keys(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [stringify_keys(item) for item in value]
    return value
