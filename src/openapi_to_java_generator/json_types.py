"""JSON-compatible typing aliases for parsed specification documents."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeAlias, Union

JSONScalar: TypeAlias = Union[str, int, float, bool, None]
JSONValue: TypeAlias = Union[JSONScalar, list["JSONValue"], Mapping[str, "JSONValue"]]
JSONObject: TypeAlias = Mapping[str, JSONValue]
SchemaDocument: TypeAlias = Mapping[str, JSONValue]
