"""High-level generator orchestration."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .emitter import emit
from .loader import ParseError, extract_schemas, load_document, parse_document
from .model_types import GeneratedArtifact, GenerationResult, SchemaDefinition
from .options import GenerationOptions
from .resolver import resolve
from .writer import WriteError, write_archive, write_artifacts

logger = logging.getLogger(__name__)


def generate(
    spec_text: str,
    selected_names: Iterable[str],
    options: Optional[GenerationOptions] = None,
) -> GenerationResult:
    """Generate Java sources for the selected schemas and their dependencies.

    Unparseable specification text fails the whole request; a selected name
    without a schema only produces a placeholder artifact for that name.

    Args:
        spec_text (str): JSON or YAML specification text.
        selected_names (Iterable[str]): Schema names to generate.
        options (Optional[GenerationOptions]): Emission policy; defaults apply when omitted.

    Returns:
        GenerationResult: Artifacts sorted by name, or the parse error message.
    """
    try:
        document = parse_document(spec_text)
    except ParseError as exc:
        logger.error("Generation failed: %s", exc)
        return GenerationResult(artifacts=(), error=str(exc))
    return GenerationResult(
        artifacts=generate_artifacts(
            extract_schemas(document),
            selected_names,
            options or GenerationOptions(),
        )
    )


def generate_artifacts(
    all_schemas: Mapping[str, SchemaDefinition],
    selected_names: Iterable[str],
    options: GenerationOptions,
) -> tuple[GeneratedArtifact, ...]:
    """Emit one artifact per schema in the closure of ``selected_names``."""
    selected = list(selected_names)
    names = set(resolve(selected, all_schemas))
    # Missing selections still get a "not found" placeholder.
    names.update(name for name in selected if name not in all_schemas)

    artifacts: list[GeneratedArtifact] = []
    for name in sorted(names):
        logger.debug("Emitting %s", name)
        artifacts.append(GeneratedArtifact(name=name, code=emit(name, all_schemas, options)))
    return tuple(artifacts)


@dataclass(frozen=True)
class GenerationRun:
    """Artifacts of one CLI generation and where they were written."""

    artifacts: tuple[GeneratedArtifact, ...]
    written_files: tuple[Path, ...]
    archive_path: Optional[Path]


def run_generation(
    *,
    input_path: Path,
    selected_names: Optional[Iterable[str]],
    options: GenerationOptions,
    output_dir: Optional[Path] = None,
    archive_path: Optional[Path] = None,
) -> GenerationRun:
    """Generate from a specification file and write the results.

    Args:
        input_path (Path): Path to the JSON or YAML specification.
        selected_names (Optional[Iterable[str]]): Schemas to generate; ``None`` selects all.
        options (GenerationOptions): Emission policy.
        output_dir (Optional[Path]): Directory for one ``.java`` file per artifact.
        archive_path (Optional[Path]): Zip archive to bundle the artifacts into.

    Returns:
        GenerationRun: Generated artifacts and written paths.
    """
    all_schemas = extract_schemas(load_document(input_path))
    names = list(all_schemas) if selected_names is None else list(selected_names)
    artifacts = generate_artifacts(all_schemas, names, options)

    written: tuple[Path, ...] = ()
    if output_dir is not None:
        written = tuple(write_artifacts(output_dir=output_dir, artifacts=artifacts))
    if archive_path is not None:
        write_archive(archive_path=archive_path, artifacts=artifacts)

    return GenerationRun(artifacts=artifacts, written_files=written, archive_path=archive_path)


__all__ = [
    "GenerationRun",
    "ParseError",
    "WriteError",
    "generate",
    "generate_artifacts",
    "run_generation",
]
