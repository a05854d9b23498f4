"""Generation options and their validation."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .json_types import JSONObject
from .naming import is_valid_package_name


class OptionsError(RuntimeError):
    """Raised when generation options are invalid or unsupported."""


class DateType(StrEnum):
    """Representation of ``date`` and ``date-time`` strings."""

    OFFSET_DATE_TIME = "OffsetDateTime"
    STRING = "String"


class EnumStyle(StrEnum):
    """Representation of schema-level enums."""

    ENUM = "enum"
    STRING = "String"


class JsonLibrary(StrEnum):
    """JSON serialization annotation flavour."""

    JACKSON = "jackson"
    GSON = "gson"


class ValidationApi(StrEnum):
    """Bean Validation namespace used for constraint annotations."""

    JAKARTA = "jakarta"
    JAVAX = "javax"


class GenerationOptions(BaseModel):
    """Per-request configuration of the class emitter."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    package_name: str = Field("com.generated.models", alias="packageName")
    use_lombok: bool = Field(True, alias="useLombok")
    use_json_annotations: bool = Field(True, alias="useJackson")
    json_library: JsonLibrary = Field(JsonLibrary.JACKSON, alias="jsonLibrary")
    date_type: DateType = Field(DateType.OFFSET_DATE_TIME, alias="dateType")
    use_boxed_primitives: bool = Field(True, alias="useBoxedPrimitives")
    generate_accessors: bool = Field(True, alias="generateHelpers")
    use_optional: bool = Field(False, alias="useOptional")
    enum_style: EnumStyle = Field(EnumStyle.ENUM, alias="enumType")
    use_validation_annotations: bool = Field(True, alias="useValidationAnnotations")
    validation_api: ValidationApi = Field(ValidationApi.JAKARTA, alias="validationApi")

    @field_validator("package_name")
    @classmethod
    def _check_package_name(cls, value: str) -> str:
        value = value.strip()
        if not is_valid_package_name(value):
            raise ValueError(f"not a valid Java package name: {value!r}")
        return value

    @field_validator("json_library")
    @classmethod
    def _check_json_library(cls, value: JsonLibrary) -> JsonLibrary:
        if value is not JsonLibrary.JACKSON:
            raise ValueError(f"{value.value} annotations are not supported yet")
        return value

    @field_validator("enum_style")
    @classmethod
    def _check_enum_style(cls, value: EnumStyle) -> EnumStyle:
        if value is not EnumStyle.ENUM:
            raise ValueError("string-constant enums are not supported yet")
        return value


def build_options(values: JSONObject) -> GenerationOptions:
    """Validate a mapping of option values.

    Both snake_case field names and the editor's camelCase names are accepted.
    """
    try:
        return GenerationOptions.model_validate(dict(values))
    except ValidationError as exc:
        raise OptionsError(f"Invalid generation options: {exc}") from exc


def load_options(path: Path) -> GenerationOptions:
    """Load generation options from a YAML or JSON file."""
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle)
    except OSError as exc:
        raise OptionsError(f"Failed to read options file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise OptionsError(f"Failed to parse options file {path}: {exc}") from exc

    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise OptionsError(f"Options file {path} must contain a mapping, got {type(payload)!r}")
    return build_options(payload)
