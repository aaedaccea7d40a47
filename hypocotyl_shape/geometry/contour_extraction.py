"""Extract a fixed-length, canonically indexed contour from a binary mask."""

from __future__ import annotations

from typing import Optional

import numpy as np

from hypocotyl_shape.config import ContourExtractConfig
from hypocotyl_shape.errors import InvalidSampleCount
from hypocotyl_shape.geometry.contour_models import NormalizedContour
from hypocotyl_shape.geometry.contour_utils import (
    find_reference_index,
    reindex_contour,
    resample_contour_uniform,
    select_largest_boundary,
    trace_boundaries,
)


def _check_sample_count(max_size: object) -> int:
    if isinstance(max_size, bool) or not isinstance(max_size, (int, np.integer)):
        raise InvalidSampleCount(f"max_size must be an integer, got {max_size!r}")
    if max_size < 3:
        raise InvalidSampleCount(f"max_size must be >= 3, got {max_size}")
    return int(max_size)


def _frozen(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


def extract_contour(
    mask: np.ndarray,
    max_size: int,
    *,
    reference_policy: str = "top_left",
) -> NormalizedContour:
    """
    Extract the normalized contour of the largest region in a mask.

    The outer boundary with the most traced points is resampled to
    ``max_size`` points evenly spaced by arc length around the closed
    outline, then rotated (never reversed) so the point picked by
    ``reference_policy`` comes first.

    Args:
        mask: 2-D binary mask, nonzero pixels are foreground
        max_size: Number of points in the resampled outline (>= 3)
        reference_policy: Which extreme point starts the outline

    Returns:
        NormalizedContour with the traced and resampled outlines

    Raises:
        InvalidSampleCount: max_size is not an integer >= 3
        NoForegroundFound: the mask has no foreground boundary
    """
    max_size = _check_sample_count(max_size)

    boundary = select_largest_boundary(trace_boundaries(mask))
    resampled = resample_contour_uniform(boundary, max_size)

    start = find_reference_index(resampled, reference_policy)
    interp_outline = reindex_contour(resampled, start)

    return NormalizedContour(
        outline=_frozen(boundary),
        interp_outline=_frozen(np.ascontiguousarray(interp_outline)),
        max_size=max_size,
        reference_policy=reference_policy,
        reference_index=start,
    )


def extract_contour_with_config(
    mask: np.ndarray, config: Optional[ContourExtractConfig] = None
) -> NormalizedContour:
    """Run ``extract_contour`` with settings from a config object."""
    if config is None:
        config = ContourExtractConfig()
    config.validate()
    return extract_contour(
        mask, config.max_size, reference_policy=config.reference_policy
    )
