"""Render Java class and enum definitions as source text."""

from __future__ import annotations

import re
from collections.abc import Iterable, Set
from typing import Optional

from .model_types import ClassDef, EnumDef, FieldDef
from .naming import capitalize

INDENT = "    "

# Dotted names are already qualified and never need an import.
_TYPE_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_.]*")
_ANNOTATION_NAME_RE = re.compile(r"@([A-Za-z_][A-Za-z0-9_.]*)")
_UNICODE_ESCAPE_RE = re.compile(r"(\\+)u")

_TYPE_IMPORTS: dict[str, str] = {
    "BigDecimal": "java.math.BigDecimal",
    "List": "java.util.List",
    "OffsetDateTime": "java.time.OffsetDateTime",
    "Optional": "java.util.Optional",
}

_ANNOTATION_IMPORTS: dict[str, str] = {
    "Data": "lombok.Data",
    "JsonInclude": "com.fasterxml.jackson.annotation.JsonInclude",
    "JsonProperty": "com.fasterxml.jackson.annotation.JsonProperty",
}

_VALIDATION_ANNOTATIONS: frozenset[str] = frozenset(
    {"DecimalMax", "DecimalMin", "Email", "Max", "Min", "NotNull", "Pattern", "Size"}
)


def qualified_name(
    simple_name: str,
    local_names: Set[str],
    validation_package: Optional[str] = None,
) -> str:
    """Return a library name, fully qualified when a generated type shares it.

    Args:
        simple_name (str): Library type or annotation name, e.g. ``List``.
        local_names (Set[str]): Class names declared by or referenced from the unit.
        validation_package (Optional[str]): Package of the validation annotations.

    Returns:
        str: ``simple_name`` unchanged, or its qualified spelling on a clash.
    """
    if simple_name not in local_names:
        return simple_name
    if simple_name in _TYPE_IMPORTS:
        return _TYPE_IMPORTS[simple_name]
    if simple_name in _ANNOTATION_IMPORTS:
        return _ANNOTATION_IMPORTS[simple_name]
    if validation_package is not None and simple_name in _VALIDATION_ANNOTATIONS:
        return f"{validation_package}.{simple_name}"
    return simple_name


def render_class(class_def: ClassDef) -> str:
    """Render a class definition as a Java compilation unit.

    Args:
        class_def (ClassDef): Class definition to render.

    Returns:
        str: Java source code ending with a newline.
    """
    lines = _header(class_def.package, _class_imports(class_def))
    lines.append("/*")
    lines.append(" * Original schema (excerpt):")
    lines.extend(_comment_line(line) for line in class_def.excerpt)
    lines.append(" */")
    lines.extend(_javadoc(class_def.description))
    lines.extend(class_def.annotations)
    lines.append(f"public class {class_def.name} {{")

    for field in class_def.fields:
        lines.append("")
        lines.extend(f"{INDENT}{annotation}" for annotation in field.annotations)
        lines.append(f"{INDENT}private {field.java_type} {field.name};")

    if class_def.accessors:
        for field in class_def.fields:
            lines.append("")
            lines.extend(_accessor_lines(field))

    lines.append("}")
    return "\n".join(lines) + "\n"


def render_enum(enum_def: EnumDef) -> str:
    """Render an enum definition as a Java compilation unit."""
    imports = _imports_for(
        type_names=(),
        annotations=[a for constant in enum_def.constants for a in constant.annotations],
        validation_package=None,
        local_names={enum_def.name},
    )
    lines = _header(enum_def.package, imports)
    lines.extend(_javadoc(enum_def.description))
    lines.append(f"public enum {enum_def.name} {{")

    constant_blocks: list[str] = []
    for constant in enum_def.constants:
        block = [f"{INDENT}{annotation}" for annotation in constant.annotations]
        block.append(f"{INDENT}{constant.name}")
        constant_blocks.append("\n".join(block))
    if constant_blocks:
        lines.append(",\n".join(constant_blocks))

    lines.append("}")
    return "\n".join(lines) + "\n"


def _header(package: str, imports: list[str]) -> list[str]:
    lines = [f"package {package};", ""]
    if imports:
        lines.extend(f"import {name};" for name in imports)
        lines.append("")
    return lines


def _class_imports(class_def: ClassDef) -> list[str]:
    annotations = list(class_def.annotations)
    for field in class_def.fields:
        annotations.extend(field.annotations)
    return _imports_for(
        type_names=[field.java_type for field in class_def.fields],
        annotations=annotations,
        validation_package=class_def.validation_package,
        local_names={class_def.name, *class_def.referenced_types},
    )


def _imports_for(
    *,
    type_names: Iterable[str],
    annotations: Iterable[str],
    validation_package: Optional[str],
    local_names: Set[str],
) -> list[str]:
    imports: set[str] = set()
    for type_name in type_names:
        for name in _TYPE_NAME_RE.findall(type_name):
            if name in _TYPE_IMPORTS and name not in local_names:
                imports.add(_TYPE_IMPORTS[name])
    for annotation in annotations:
        # Only the annotation's own name; argument literals never need imports.
        for name in _ANNOTATION_NAME_RE.findall(_strip_string_literals(annotation)):
            if name in local_names:
                continue
            if name in _ANNOTATION_IMPORTS:
                imports.add(_ANNOTATION_IMPORTS[name])
            elif validation_package is not None and name in _VALIDATION_ANNOTATIONS:
                imports.add(f"{validation_package}.{name}")
    return sorted(imports)


def _strip_string_literals(code: str) -> str:
    return re.sub(r'"(?:\\.|[^"\\])*"', '""', code)


def _accessor_lines(field: FieldDef) -> list[str]:
    suffix = capitalize(field.name)
    return [
        f"{INDENT}public {field.java_type} get{suffix}() {{",
        f"{INDENT}{INDENT}return {field.name};",
        f"{INDENT}}}",
        "",
        f"{INDENT}public void set{suffix}({field.java_type} {field.name}) {{",
        f"{INDENT}{INDENT}this.{field.name} = {field.name};",
        f"{INDENT}}}",
    ]


def _comment_line(text: str) -> str:
    safe_text = text.replace("*/", "*\\/")
    safe_text = _UNICODE_ESCAPE_RE.sub(_inert_unicode_escape, safe_text)
    return f" * {safe_text}".rstrip()


def _javadoc(description: Optional[str]) -> list[str]:
    if not description or not description.strip():
        return []
    return ["/**", *(_comment_line(line) for line in description.strip().splitlines()), " */"]


def _inert_unicode_escape(match: re.Match[str]) -> str:
    # javac reads \u escapes even inside comments; only an odd backslash run starts one.
    backslashes = match.group(1)
    if len(backslashes) % 2:
        backslashes += "\\"
    return f"{backslashes}u"
