"""Dependency closure over schema references."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping

from .merger import composition_references, flatten
from .model_types import ArrayOf, PropertySpec, Reference, SchemaDefinition

logger = logging.getLogger(__name__)


def resolve(
    selected_names: Iterable[str],
    all_schemas: Mapping[str, SchemaDefinition],
) -> list[str]:
    """Return the selected schemas plus everything they reference, sorted by name.

    The walk is depth-first from each selected name in the given order. It
    follows ``$ref`` values on flattened properties, inside array items, and
    on ``allOf`` branches. Names without a schema are skipped, and each schema
    is visited once, so reference cycles terminate.

    Args:
        selected_names (Iterable[str]): Schema names requested by the caller.
        all_schemas (Mapping[str, SchemaDefinition]): Every schema in the document.

    Returns:
        list[str]: Deduplicated schema names present in ``all_schemas``.
    """
    visited: set[str] = set()
    for start in selected_names:
        stack = [start]
        while stack:
            name = stack.pop()
            if name in visited:
                continue
            schema = all_schemas.get(name)
            if schema is None:
                logger.debug("Skipping unresolved schema reference %r", name)
                continue
            visited.add(name)
            # Reversed so the first dependency is expanded first.
            stack.extend(reversed(list(schema_dependencies(schema, all_schemas))))

    logger.debug("Resolved %d schema(s) for generation", len(visited))
    return sorted(visited)


def schema_dependencies(
    schema: SchemaDefinition,
    all_schemas: Mapping[str, SchemaDefinition],
) -> Iterator[str]:
    """Yield names referenced by a schema's composition and flattened properties."""
    yield from composition_references(schema)
    for prop in flatten(schema, all_schemas).properties.values():
        yield from property_references(prop)


def property_references(prop: PropertySpec) -> Iterator[str]:
    """Yield the schema names a property refers to, looking through nested arrays."""
    while isinstance(prop, ArrayOf):
        if prop.items is None:
            return
        prop = prop.items
    if isinstance(prop, Reference):
        yield prop.name
