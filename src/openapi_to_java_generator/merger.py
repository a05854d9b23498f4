"""Flatten ``allOf`` composition into one effective property set."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .model_types import FlattenedSchema, InlineObject, PropertySpec, Reference, SchemaDefinition


@dataclass
class _MergeState:
    properties: dict[str, PropertySpec] = field(default_factory=dict)
    required: set[str] = field(default_factory=set)
    visited: set[str] = field(default_factory=set)


def flatten(
    schema: SchemaDefinition,
    all_schemas: Mapping[str, SchemaDefinition],
) -> FlattenedSchema:
    """Merge a schema's ``allOf`` branches and own properties.

    Branches are merged depth-first in ``allOf`` order and the schema's own
    ``properties`` last, so later definitions of a property name replace
    earlier ones. Each referenced schema is expanded at most once, which also
    stops circular compositions. Unresolved references are skipped. The input
    schemas are never modified.

    Args:
        schema (SchemaDefinition): Schema to flatten.
        all_schemas (Mapping[str, SchemaDefinition]): Every schema in the document.

    Returns:
        FlattenedSchema: Merged properties and the union of required names.
    """
    state = _MergeState(visited={schema.name})
    _merge(schema.all_of, schema.properties, schema.required, all_schemas, state)
    return FlattenedSchema(properties=state.properties, required=frozenset(state.required))


def _merge(
    all_of: tuple[PropertySpec, ...],
    properties: Mapping[str, PropertySpec],
    required: frozenset[str],
    all_schemas: Mapping[str, SchemaDefinition],
    state: _MergeState,
) -> None:
    for branch in all_of:
        if isinstance(branch, Reference):
            target = all_schemas.get(branch.name)
            if target is None or branch.name in state.visited:
                continue
            state.visited.add(branch.name)
            _merge(target.all_of, target.properties, target.required, all_schemas, state)
        elif isinstance(branch, InlineObject):
            _merge(branch.all_of, branch.properties, branch.required, all_schemas, state)

    state.properties.update(properties)
    state.required.update(required)


def composition_references(
    schema: SchemaDefinition,
) -> list[str]:
    """Return every schema name referenced from ``allOf`` branches, inline ones included."""
    names: list[str] = []
    pending: list[PropertySpec] = list(schema.all_of)
    while pending:
        branch = pending.pop(0)
        if isinstance(branch, Reference):
            names.append(branch.name)
        elif isinstance(branch, InlineObject):
            pending.extend(branch.all_of)
    return names
