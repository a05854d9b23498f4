"""Filesystem writers for generated Java sources."""

from __future__ import annotations

import re
import zipfile
from collections.abc import Iterable
from pathlib import Path

from .model_types import GeneratedArtifact

SOURCE_EXTENSION = "java"

_SPEC_SUFFIX_RE = re.compile(r"\.(json|yaml|yml)$")


class WriteError(RuntimeError):
    """Raised when output files cannot be written."""


def artifact_filename(artifact: GeneratedArtifact) -> str:
    """Return the file or archive member name for an artifact."""
    return f"{artifact.name}.{SOURCE_EXTENSION}"


def default_archive_name(spec_name: str) -> str:
    """Return the archive name used for a specification file name."""
    return f"{_SPEC_SUFFIX_RE.sub('', spec_name)}-models.zip"


def write_artifacts(*, output_dir: Path, artifacts: Iterable[GeneratedArtifact]) -> list[Path]:
    """Write one source file per artifact into a new directory.

    Args:
        output_dir (Path): Directory to create; it must not exist yet.
        artifacts (Iterable[GeneratedArtifact]): Artifacts to write.

    Returns:
        list[Path]: Paths of the written files.
    """
    if output_dir.exists():
        raise WriteError(f"Output directory already exists: {output_dir}")
    try:
        output_dir.mkdir(parents=True)
    except OSError as exc:
        raise WriteError(f"Failed to create output directory {output_dir}: {exc}") from exc

    written: list[Path] = []
    for artifact in artifacts:
        path = output_dir / artifact_filename(artifact)
        _write_file(path, artifact.code)
        written.append(path)
    return written


def write_archive(*, archive_path: Path, artifacts: Iterable[GeneratedArtifact]) -> None:
    """Bundle artifacts into a zip archive.

    Args:
        archive_path (Path): Archive file to create or replace.
        artifacts (Iterable[GeneratedArtifact]): Artifacts to add as members.
    """
    try:
        archive_path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for artifact in artifacts:
                archive.writestr(artifact_filename(artifact), artifact.code)
    except OSError as exc:
        raise WriteError(f"Failed to write archive {archive_path}: {exc}") from exc


def _write_file(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise WriteError(f"Failed to write file {path}: {exc}") from exc
