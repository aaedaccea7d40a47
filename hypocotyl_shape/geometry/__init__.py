"""Contour tracing and normalization helpers."""

from .contour_extraction import extract_contour, extract_contour_with_config
from .contour_models import NormalizedContour
from .contour_utils import (
    REFERENCE_POLICIES,
    find_reference_index,
    reindex_contour,
    resample_contour_uniform,
    select_largest_boundary,
    trace_boundaries,
)

__all__ = [
    "NormalizedContour",
    "REFERENCE_POLICIES",
    "extract_contour",
    "extract_contour_with_config",
    "find_reference_index",
    "reindex_contour",
    "resample_contour_uniform",
    "select_largest_boundary",
    "trace_boundaries",
]
