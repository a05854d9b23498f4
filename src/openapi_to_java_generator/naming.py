"""Naming helpers for Java identifiers."""

from __future__ import annotations

import re

from .json_types import JSONScalar

_JAVA_KEYWORDS: frozenset[str] = frozenset(
    {
        "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char",
        "class", "const", "continue", "default", "do", "double", "else", "enum",
        "extends", "false", "final", "finally", "float", "for", "goto", "if",
        "implements", "import", "instanceof", "int", "interface", "long", "native",
        "new", "null", "package", "private", "protected", "public", "return",
        "short", "static", "strictfp", "super", "switch", "synchronized", "this",
        "throw", "throws", "transient", "true", "try", "void", "volatile", "while",
        "var", "record", "yield",
    }
)  # fmt: skip

_WORD_SPLIT_RE = re.compile(r"[^0-9a-zA-Z]+")
_ENUM_SANITIZE_RE = re.compile(r"[^a-zA-Z0-9_]")
_PACKAGE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


def _words(raw: str) -> list[str]:
    return [word for word in _WORD_SPLIT_RE.split(raw) if word]


def to_pascal_case(raw: str) -> str:
    """Convert a schema or type name to a Java class name.

    Separators are dropped and the first letter of each word is upper-cased;
    the remaining letters keep their case, so ``petStatus`` and ``pet_status``
    both become ``PetStatus``.
    """
    text = "".join(word[0].upper() + word[1:] for word in _words(raw))
    if not text:
        return "Model"
    if text[0].isdigit():
        text = f"_{text}"
    return text


def to_camel_case(raw: str) -> str:
    """Convert a property name to a Java field name."""
    words = _words(raw)
    if not words:
        return "value"
    text = "".join(word[0].upper() + word[1:] for word in words)
    text = text[0].lower() + text[1:]
    if text[0].isdigit():
        text = f"_{text}"
    if text in _JAVA_KEYWORDS:
        text = f"{text}_"
    return text


def capitalize(name: str) -> str:
    """Upper-case the first character, as used for accessor names."""
    return name[:1].upper() + name[1:]


def literal_text(value: JSONScalar) -> str:
    """Render a JSON scalar the way it appears in serialized JSON."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def enum_constant_name(value: JSONScalar) -> str:
    """Convert an enum literal into an upper-case Java constant name."""
    text = _ENUM_SANITIZE_RE.sub("_", literal_text(value)).upper()
    if not text:
        return "_"
    if text[0].isdigit():
        text = f"_{text}"
    return text


def unique_name(candidate: str, used_names: set[str]) -> str:
    """Return ``candidate`` or a numbered variant not yet in ``used_names``."""
    if candidate not in used_names:
        used_names.add(candidate)
        return candidate
    suffix = 2
    while f"{candidate}_{suffix}" in used_names:
        suffix += 1
    name = f"{candidate}_{suffix}"
    used_names.add(name)
    return name


def is_valid_package_name(name: str) -> bool:
    """Whether ``name`` is a dotted Java package name without reserved words."""
    if not _PACKAGE_RE.match(name):
        return False
    return not any(part in _JAVA_KEYWORDS for part in name.split("."))


def java_string_literal(text: str) -> str:
    """Quote ``text`` as a Java string literal."""
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'
