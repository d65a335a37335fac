"""Narration script drafts built from a fixed segment template."""

from .assembler import (
    ScriptAssemblyError,
    base_segments,
    build_draft,
    draft_to_markdown,
    format_seconds,
)

__all__ = [
    "ScriptAssemblyError",
    "base_segments",
    "build_draft",
    "draft_to_markdown",
    "format_seconds",
]
