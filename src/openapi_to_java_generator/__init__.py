"""OpenAPI to Java model generator package."""

from __future__ import annotations

from .cli import main
from .generator import GenerationRun, generate, run_generation
from .model_types import GeneratedArtifact, GenerationResult
from .options import GenerationOptions

__all__ = [
    "GeneratedArtifact",
    "GenerationOptions",
    "GenerationResult",
    "GenerationRun",
    "generate",
    "main",
    "run_generation",
]
