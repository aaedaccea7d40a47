"""Data models for normalized hypocotyl contours."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np


@dataclass(frozen=True)
class NormalizedContour:
    """Traced outline plus its fixed-length, reindexed resampling.

    ``outline`` is the boundary as traced from the mask, ``(M, 2)`` in
    ``(x, y)`` pixel coordinates. ``interp_outline`` holds ``max_size``
    points spaced evenly by arc length around the closed outline, rotated
    so the reference point chosen by ``reference_policy`` is row 0.
    """

    outline: np.ndarray
    interp_outline: np.ndarray
    max_size: int
    reference_policy: str = "top_left"
    reference_index: int = 0

    def __post_init__(self):
        if self.outline.ndim != 2 or self.outline.shape[1] != 2:
            raise ValueError("outline must be (M, 2)")
        if self.interp_outline.ndim != 2 or self.interp_outline.shape[1] != 2:
            raise ValueError("interp_outline must be (N, 2)")
        if len(self.interp_outline) != self.max_size:
            raise ValueError(
                f"Point count {len(self.interp_outline)} != max_size {self.max_size}"
            )

    @property
    def perimeter(self) -> float:
        """Closed polygon length of the traced outline."""
        closed = np.vstack([self.outline, self.outline[0:1]])
        return float(np.sum(np.hypot(*np.diff(closed, axis=0).T)))

    @property
    def area(self) -> float:
        """Shoelace area enclosed by the traced outline."""
        x = self.outline[:, 0]
        y = self.outline[:, 1]
        return float(0.5 * abs(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))))

    @property
    def centroid(self) -> Tuple[float, float]:
        """Mean position of the resampled points."""
        cx, cy = self.interp_outline.mean(axis=0)
        return float(cx), float(cy)

    def to_vector(self) -> np.ndarray:
        """Flatten ``interp_outline`` into x coordinates followed by y coordinates."""
        return np.concatenate(
            [self.interp_outline[:, 0], self.interp_outline[:, 1]]
        ).astype(np.float64)

    def to_dict(self) -> Dict[str, object]:
        """Return a JSON-serializable dict."""
        return {
            "outline": self.outline.tolist(),
            "interp_outline": self.interp_outline.tolist(),
            "max_size": self.max_size,
            "reference_policy": self.reference_policy,
            "reference_index": self.reference_index,
        }
