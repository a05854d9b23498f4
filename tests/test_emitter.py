"""Unit tests for Java class and enum emission."""

from __future__ import annotations

from datetime import date

from openapi_to_java_generator.emitter import EXCERPT_LINE_LIMIT, emit, schema_excerpt
from openapi_to_java_generator.loader import extract_schemas
from openapi_to_java_generator.model_types import SchemaDefinition
from openapi_to_java_generator.options import GenerationOptions, ValidationApi
from .fixture_helpers import fixture_schemas

DEFAULTS = GenerationOptions()

_CATEGORY_WITH_ACCESSORS = """\
package com.generated.models;

import com.fasterxml.jackson.annotation.JsonInclude;
import com.fasterxml.jackson.annotation.JsonProperty;

/*
 * Original schema (excerpt):
 * {
 *   "type": "object",
 *   "properties": {
 *     "id": {
 *       "type": "integer"
 *     },
 *     "name": {
 *       "type": "string"
 *     }
 *   }
 */
@JsonInclude(JsonInclude.Include.NON_NULL)
public class Category {

    @JsonProperty("id")
    private Integer id;

    @JsonProperty("name")
    private String name;

    public Integer getId() {
        return id;
    }

    public void setId(Integer id) {
        this.id = id;
    }

    public String getName() {
        return name;
    }

    public void setName(String name) {
        this.name = name;
    }
}
"""

_ORDER_STATUS_ENUM = """\
package com.generated.models;

import com.fasterxml.jackson.annotation.JsonProperty;

/**
 * Order status
 */
public enum OrderStatus {
    @JsonProperty("placed")
    PLACED,
    @JsonProperty("approved")
    APPROVED,
    @JsonProperty("in-transit")
    IN_TRANSIT,
    @JsonProperty("delivered")
    DELIVERED
}
"""


def _schemas(raw: dict[str, object]) -> dict[str, SchemaDefinition]:
    return extract_schemas({"openapi": "3.1.0", "components": {"schemas": raw}})


def _emit_property(prop: dict[str, object], *, required: bool = False) -> str:
    schema: dict[str, object] = {"type": "object", "properties": {"value": prop}}
    if required:
        schema["required"] = ["value"]
    return emit("Holder", _schemas({"Holder": schema}), DEFAULTS)


def test_class_with_accessors_matches_expected_source() -> None:
    """Accessors are emitted when the data-class shorthand is off."""
    options = GenerationOptions(use_lombok=False, use_validation_annotations=False)
    code = emit("Category", fixture_schemas("petstore.yaml"), options)
    assert code == _CATEGORY_WITH_ACCESSORS


def test_enum_matches_expected_source() -> None:
    """Schema-level enums become Java enums with JSON names preserved."""
    code = emit("OrderStatus", fixture_schemas("petstore.yaml"), DEFAULTS)
    assert code == _ORDER_STATUS_ENUM


def test_enum_literals_round_trip_through_annotations() -> None:
    """Constant names are sanitized while annotation literals stay exact."""
    schemas = _schemas({"Mixed": {"enum": ["a b", "x.y", "Hello", 1, True, "a-b", "a_b"]}})
    code = emit("Mixed", schemas, DEFAULTS)
    for constant, literal in [
        ("A_B", "a b"),
        ("X_Y", "x.y"),
        ("HELLO", "Hello"),
        ("_1", "1"),
        ("TRUE", "true"),
        ("A_B_2", "a-b"),
        ("A_B_3", "a_b"),
    ]:
        assert f'    @JsonProperty("{literal}")\n    {constant}' in code


def test_enum_without_json_annotations_has_no_imports() -> None:
    """Disabling JSON annotations removes member annotations and imports."""
    options = GenerationOptions(use_json_annotations=False)
    code = emit("OrderStatus", fixture_schemas("petstore.yaml"), options)
    assert "import" not in code
    assert "@JsonProperty" not in code
    assert "    PLACED,\n    APPROVED,\n    IN_TRANSIT,\n    DELIVERED\n}" in code


def test_default_options_pet_class() -> None:
    """Default options produce a Lombok class with Jackson and validation annotations."""
    code = emit("Pet", fixture_schemas("petstore.yaml"), DEFAULTS)

    assert code.startswith("package com.generated.models;\n\n")
    for import_line in [
        "import com.fasterxml.jackson.annotation.JsonInclude;",
        "import com.fasterxml.jackson.annotation.JsonProperty;",
        "import jakarta.validation.constraints.NotNull;",
        "import jakarta.validation.constraints.Size;",
        "import java.util.List;",
        "import lombok.Data;",
    ]:
        assert import_line in code
    assert "@Data\n@JsonInclude(JsonInclude.Include.NON_NULL)\npublic class Pet {" in code
    assert '    @JsonProperty("id")\n    private Long id;' in code
    assert (
        "    @NotNull\n"
        "    @Size(min = 1, max = 64)\n"
        '    @JsonProperty("name")\n'
        "    private String name;"
    ) in code
    assert "    @NotNull\n    @Size(min = 1)\n" in code
    assert "    private List<String> photoUrls;" in code
    assert "    private Category category;" in code
    assert "    private List<Tag> tags;" in code
    assert "    private String status;" in code
    assert "getId()" not in code


def test_imports_are_sorted_and_unique() -> None:
    """The import block is deduplicated and sorted."""
    code = emit("Pet", fixture_schemas("petstore.yaml"), DEFAULTS)
    imports = [line for line in code.splitlines() if line.startswith("import ")]
    assert imports == sorted(set(imports))


def test_lombok_takes_precedence_over_accessors() -> None:
    """Both toggles on never produces hand-written accessors."""
    options = GenerationOptions(use_lombok=True, generate_accessors=True)
    code = emit("Category", fixture_schemas("petstore.yaml"), options)
    assert "@Data" in code
    assert "public Integer getId()" not in code
    assert "setName(" not in code


def test_optional_wraps_only_non_required_fields() -> None:
    """Optional wrappers apply to non-required fields and use boxed types."""
    options = GenerationOptions(use_optional=True, use_boxed_primitives=False)
    code = emit("Pet", fixture_schemas("petstore.yaml"), options)
    assert "    private Optional<Long> id;" in code
    assert "    private String name;" in code
    assert "    private List<String> photoUrls;" in code
    assert "import java.util.Optional;" in code


def test_order_types_and_imports() -> None:
    """Dates, decimals, and enum references map to their Java types."""
    code = emit("Order", fixture_schemas("petstore.yaml"), DEFAULTS)
    assert "    private OffsetDateTime shipDate;" in code
    assert "    private BigDecimal price;" in code
    assert "    private OrderStatus status;" in code
    assert "    private Boolean complete;" in code
    assert "import java.time.OffsetDateTime;" in code
    assert "import java.math.BigDecimal;" in code
    assert "    @Min(1)\n    @Max(100)\n" in code


def test_string_dates_skip_time_import() -> None:
    """String date policy keeps dates as ``String``."""
    options = GenerationOptions(date_type="String")
    code = emit("Order", fixture_schemas("petstore.yaml"), options)
    assert "    private String shipDate;" in code
    assert "OffsetDateTime" not in code


def test_user_validation_annotations() -> None:
    """Format and pattern constraints produce the matching annotations."""
    code = emit("User", fixture_schemas("petstore.yaml"), DEFAULTS)
    uuid_pattern = (
        "^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
    )
    assert f'    @Pattern(regexp = "{uuid_pattern}")\n' in code
    assert '    @NotNull\n    @Email\n    @JsonProperty("email")\n' in code
    assert '    @Pattern(regexp = "^\\\\w+$")\n' in code
    assert '    @DecimalMin("0.5")\n' in code
    assert '    @JsonProperty("last_login")\n    private OffsetDateTime lastLogin;' in code
    assert "import jakarta.validation.constraints.Email;" in code
    assert "import jakarta.validation.constraints.Pattern;" in code


def test_javax_validation_namespace() -> None:
    """The validation namespace follows the selected API."""
    options = GenerationOptions(validation_api=ValidationApi.JAVAX)
    code = emit("Pet", fixture_schemas("petstore.yaml"), options)
    assert "import javax.validation.constraints.NotNull;" in code
    assert "jakarta" not in code


def test_validation_annotations_can_be_disabled() -> None:
    """No constraint annotations or imports when validation is off."""
    options = GenerationOptions(use_validation_annotations=False)
    code = emit("Pet", fixture_schemas("petstore.yaml"), options)
    assert "@NotNull" not in code
    assert "validation.constraints" not in code


def test_string_size_variants() -> None:
    """Length bounds produce min-only and max-only size constraints."""
    assert "@Size(min = 2)\n" in _emit_property({"type": "string", "minLength": 2})
    assert "@Size(max = 8)\n" in _emit_property({"type": "string", "maxLength": 8})


def test_array_size_constraint() -> None:
    """Item-count bounds produce size constraints on lists."""
    code = _emit_property({"type": "array", "maxItems": 3, "items": {"type": "string"}})
    assert "    @Size(max = 3)\n" in code


def test_exclusive_bounds() -> None:
    """Boolean and numeric exclusive markers produce exclusive decimal bounds."""
    code = _emit_property(
        {
            "type": "number",
            "minimum": 0,
            "exclusiveMinimum": True,
            "maximum": 10,
            "exclusiveMaximum": True,
        }
    )
    assert '@DecimalMin(value = "0", inclusive = false)' in code
    assert '@DecimalMax(value = "10", inclusive = false)' in code

    code = _emit_property({"type": "integer", "exclusiveMinimum": 5})
    assert '@DecimalMin(value = "5", inclusive = false)' in code
    assert "@Min(" not in code


def test_large_integer_bound_uses_long_literal() -> None:
    """Bounds outside the ``int`` range get a long suffix."""
    code = _emit_property({"type": "integer", "format": "int64", "maximum": 9999999999})
    assert "@Max(9999999999L)" in code


def test_bounds_beyond_long_range_use_decimal_annotations() -> None:
    """Integral bounds that do not fit a ``long`` are written as decimal strings."""
    code = _emit_property({"type": "number", "maximum": 1.0e30, "minimum": -1.0e19})
    assert '@DecimalMax("1000000000000000019884624838656")' in code
    assert '@DecimalMin("-10000000000000000000")' in code
    assert "@Max(" not in code
    assert "@Min(" not in code


def test_field_names_are_java_identifiers() -> None:
    """Property names are camel-cased, keyword-safe, and unique."""
    schemas = _schemas(
        {
            "Odd": {
                "properties": {
                    "user_name": {"type": "string"},
                    "userName": {"type": "string"},
                    "class": {"type": "string"},
                    "X-Rate-Limit": {"type": "integer"},
                }
            }
        }
    )
    code = emit("Odd", schemas, DEFAULTS)
    assert '    @JsonProperty("user_name")\n    private String userName;' in code
    assert '    @JsonProperty("userName")\n    private String userName_2;' in code
    assert '    @JsonProperty("class")\n    private String class_;' in code
    assert '    @JsonProperty("X-Rate-Limit")\n    private Integer xRateLimit;' in code


def test_schema_named_like_annotation_does_not_import_it() -> None:
    """A referenced schema called ``Data`` is not confused with Lombok's annotation."""
    schemas = _schemas(
        {
            "Holder": {"properties": {"payload": {"$ref": "#/components/schemas/Data"}}},
            "Data": {"properties": {"value": {"type": "string"}}},
        }
    )
    code = emit("Holder", schemas, GenerationOptions(use_lombok=False))
    assert "    private Data payload;" in code
    assert "import lombok.Data;" not in code


def test_schema_named_like_lombok_annotation_is_qualified() -> None:
    """With Lombok on, ``@Data`` is spelled out next to a generated ``Data`` type."""
    schemas = _schemas(
        {
            "Holder": {"properties": {"payload": {"$ref": "#/components/schemas/Data"}}},
            "Data": {"properties": {"value": {"type": "string"}}},
        }
    )
    class_header = "@lombok.Data\n@JsonInclude(JsonInclude.Include.NON_NULL)\npublic class {} {{"
    holder = emit("Holder", schemas, DEFAULTS)
    assert class_header.format("Holder") in holder
    assert "    private Data payload;" in holder
    assert "import lombok.Data;" not in holder

    data = emit("Data", schemas, DEFAULTS)
    assert class_header.format("Data") in data
    assert "import lombok.Data;" not in data


def test_schemas_named_like_library_types_are_not_imported() -> None:
    """Library types sharing a generated class name are fully qualified."""
    schemas = _schemas(
        {
            "List": {"properties": {"value": {"type": "string"}}},
            "JsonProperty": {"enum": ["a"]},
            "Catalog": {
                "required": ["entry"],
                "properties": {
                    "entry": {"$ref": "#/components/schemas/List"},
                    "names": {"type": "array", "items": {"type": "string"}},
                    "kind": {"$ref": "#/components/schemas/JsonProperty"},
                },
            },
        }
    )
    catalog = emit("Catalog", schemas, GenerationOptions(use_optional=True))
    assert "import java.util.List;" not in catalog
    assert "import com.fasterxml.jackson.annotation.JsonProperty;" not in catalog
    assert "    private List entry;" in catalog
    assert "    private Optional<java.util.List<String>> names;" in catalog
    assert '    @com.fasterxml.jackson.annotation.JsonProperty("entry")' in catalog
    assert "    private Optional<JsonProperty> kind;" in catalog

    enum_code = emit("JsonProperty", schemas, DEFAULTS)
    assert "import" not in enum_code
    assert '    @com.fasterxml.jackson.annotation.JsonProperty("a")\n    A' in enum_code


def test_schema_named_like_validation_annotation_is_qualified() -> None:
    """Validation annotations use their package when a generated type shares the name."""
    schemas = _schemas(
        {
            "Size": {"properties": {"value": {"type": "string"}}},
            "Box": {
                "required": ["size"],
                "properties": {
                    "size": {"$ref": "#/components/schemas/Size"},
                    "label": {"type": "string", "maxLength": 5},
                },
            },
        }
    )
    code = emit("Box", schemas, DEFAULTS)
    assert "    @jakarta.validation.constraints.Size(max = 5)" in code
    assert "import jakarta.validation.constraints.Size;" not in code
    assert "import jakarta.validation.constraints.NotNull;" in code


def test_missing_schema_yields_comment() -> None:
    """Emitting an unknown name returns a one-line comment instead of raising."""
    assert emit("Ghost", fixture_schemas("petstore.yaml"), DEFAULTS) == (
        "// Schema Ghost not found."
    )


def test_emission_is_idempotent() -> None:
    """Identical inputs produce byte-identical code."""
    schemas = fixture_schemas("petstore.yaml")
    assert emit("Customer", schemas, DEFAULTS) == emit("Customer", schemas, DEFAULTS)


def test_composed_class_uses_merged_fields() -> None:
    """``allOf`` classes contain the flattened fields with merged required names."""
    code = emit("Customer", fixture_schemas("petstore.yaml"), DEFAULTS)
    assert (
        "    @NotNull\n"
        "    @Size(max = 20)\n"
        '    @JsonProperty("name")\n'
        "    private String name;"
    ) in code
    assert '    @NotNull\n    @JsonProperty("address")\n    private Address address;' in code


def test_excerpt_is_truncated_and_comment_safe() -> None:
    """The schema excerpt is limited and cannot close the comment early."""
    properties = {f"field{index}": {"type": "string"} for index in range(20)}
    schemas = _schemas(
        {"Wide": {"type": "object", "description": "ends */ here", "properties": properties}}
    )
    excerpt = schema_excerpt(schemas["Wide"])
    assert len(excerpt) == EXCERPT_LINE_LIMIT
    code = emit("Wide", schemas, DEFAULTS)
    assert code.count("*/") == 2
    assert "ends *\\/ here" in code


def test_backslash_u_in_comments_is_not_a_unicode_escape() -> None:
    """Backslashes before ``u`` in descriptions are doubled so javac accepts the file."""
    schemas = _schemas(
        {
            "Path": {
                "description": r"Stored under C:\users\x, see \\unc",
                "properties": {"value": {"type": "string"}},
            }
        }
    )
    code = emit("Path", schemas, DEFAULTS)
    assert r" * Stored under C:\\users\x, see \\unc" in code


def test_excerpt_handles_non_string_keys() -> None:
    """Date and number keys in a raw schema are rendered as strings."""
    schemas = _schemas(
        {
            "Stamp": {
                "type": "object",
                "example": {date(2024, 1, 1): 5, 200: "ok"},
                "properties": {"value": {"type": "string"}},
            }
        }
    )
    excerpt = "\n".join(schema_excerpt(schemas["Stamp"]))
    assert '"2024-01-01": 5' in excerpt
    assert '"200": "ok"' in excerpt
    assert "public class Stamp {" in emit("Stamp", schemas, DEFAULTS)
