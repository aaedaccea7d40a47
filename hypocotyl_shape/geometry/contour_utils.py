"""Utilities for boundary tracing, arc-length resampling, and reindexing."""

from __future__ import annotations

from typing import List, Sequence

import cv2
import numpy as np

from hypocotyl_shape.config import REFERENCE_POLICIES
from hypocotyl_shape.errors import NoForegroundFound

# Coordinates are compared at this precision when picking the reference point
_REFERENCE_DECIMALS = 6


def mask_to_uint8(mask: np.ndarray) -> np.ndarray:
    """Return a fresh 0/255 uint8 copy of a 2-D mask (nonzero = foreground)."""
    mask = np.asarray(mask)
    if mask.ndim != 2:
        raise ValueError(f"Mask must be 2-D, got shape {mask.shape}")
    return (mask != 0).astype(np.uint8) * 255


def trace_boundaries(mask: np.ndarray) -> List[np.ndarray]:
    """
    Trace the outer boundary of every foreground region in a mask.

    Holes are not traced. Every boundary pixel is kept, so the number of
    points reflects the size of the region's perimeter.

    Args:
        mask: 2-D array, nonzero pixels are foreground

    Returns:
        List of (M, 2) float arrays of (x, y) coordinates, in trace order
    """
    mask_uint8 = mask_to_uint8(mask)
    if mask_uint8.size == 0:
        return []

    contours, _ = cv2.findContours(
        mask_uint8, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_NONE
    )
    return [c.reshape(-1, 2).astype(np.float64) for c in contours]


def select_largest_boundary(boundaries: Sequence[np.ndarray]) -> np.ndarray:
    """
    Pick the boundary with the most traced points.

    Ties go to the boundary found first.
    """
    if not boundaries:
        raise NoForegroundFound("Mask has no foreground boundary")
    return max(boundaries, key=len)


def closed_arc_length(contour: np.ndarray) -> np.ndarray:
    """
    Cumulative arc length around a closed contour.

    Returns:
        Array of length N + 1; the last entry is the full perimeter,
        including the closing segment back to the first point.
    """
    contour_closed = np.vstack([contour, contour[0:1]])
    distances = np.sqrt(np.sum(np.diff(contour_closed, axis=0) ** 2, axis=1))
    return np.concatenate([[0.0], np.cumsum(distances)])


def resample_contour_uniform(
    contour: np.ndarray,
    num_points: int,
) -> np.ndarray:
    """
    Resample contour to exactly num_points uniformly spaced by arc length.

    The contour is treated as closed, so the last sample stops one spacing
    short of the starting point.

    Args:
        contour: Input contour (N, 2)
        num_points: Target number of vertices

    Returns:
        Resampled contour (num_points, 2)
    """
    contour = np.asarray(contour, dtype=np.float64)
    if len(contour) < 1:
        raise ValueError("Contour must have at least 1 point")

    contour_closed = np.vstack([contour, contour[0:1]])
    cumulative = closed_arc_length(contour)
    perimeter = cumulative[-1]

    if perimeter == 0:
        # Degenerate contour, return duplicated first point
        return np.tile(contour[0:1], (num_points, 1))

    # Target arc lengths for new points
    target_lengths = np.linspace(0, perimeter, num_points, endpoint=False)

    resampled = np.zeros((num_points, 2), dtype=np.float64)
    resampled[:, 0] = np.interp(target_lengths, cumulative, contour_closed[:, 0])
    resampled[:, 1] = np.interp(target_lengths, cumulative, contour_closed[:, 1])

    return resampled


def find_reference_index(points: np.ndarray, policy: str = "top_left") -> int:
    """
    Index of the canonical starting point of a closed point sequence.

    Policies name the extreme corner to prefer, vertical axis first
    (``top_left`` is the smallest y, then the smallest x, in image
    coordinates). ``trace_start`` keeps the current start. Exact ties go to
    the lowest index.
    """
    if policy not in REFERENCE_POLICIES:
        raise ValueError(f"Unknown reference policy: {policy}")
    if policy == "trace_start" or len(points) == 0:
        return 0

    rounded = np.round(np.asarray(points, dtype=np.float64), _REFERENCE_DECIMALS)
    x = rounded[:, 0]
    y = rounded[:, 1]

    vertical, horizontal = policy.split("_")
    y_key = y if vertical == "top" else -y
    x_key = x if horizontal == "left" else -x

    # lexsort is stable and sorts by the last key first
    return int(np.lexsort((x_key, y_key))[0])


def reindex_contour(points: np.ndarray, start_index: int) -> np.ndarray:
    """Rotate a closed point sequence so start_index becomes row 0."""
    return np.roll(points, -int(start_index), axis=0)
