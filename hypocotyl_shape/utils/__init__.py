"""Run bookkeeping helpers (no numeric code)."""

from .manifest import build_manifest
from .progress import iter_progress, progress_print
from .run_context import SCHEMA_VERSION, RunContext, StageTiming

__all__ = [
    "SCHEMA_VERSION",
    "RunContext",
    "StageTiming",
    "build_manifest",
    "iter_progress",
    "progress_print",
]
