"""Array renderers for contour and PCA diagnostics (no file output)."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

import cv2
import numpy as np

from hypocotyl_shape.analysis import PCAResult
from hypocotyl_shape.config import ReportConfig
from hypocotyl_shape.geometry import NormalizedContour

_COLORMAPS = {
    "cool": cv2.COLORMAP_COOL,
    "jet": cv2.COLORMAP_JET,
    "viridis": cv2.COLORMAP_VIRIDIS,
}

_OUTLINE_COLOR: Tuple[int, int, int] = (255, 0, 255)
_REFERENCE_COLOR: Tuple[int, int, int] = (0, 255, 0)


def _upscale(image: np.ndarray, scale: int) -> np.ndarray:
    if scale == 1:
        return image
    height, width = image.shape[:2]
    return cv2.resize(
        image, (width * scale, height * scale), interpolation=cv2.INTER_NEAREST
    )


def _to_uint8(matrix: np.ndarray) -> np.ndarray:
    lo = float(np.min(matrix))
    hi = float(np.max(matrix))
    if hi - lo <= 0:
        return np.zeros(matrix.shape, dtype=np.uint8)
    return np.round((matrix - lo) / (hi - lo) * 255.0).astype(np.uint8)


def render_matrix(
    matrix: np.ndarray, *, colormap: str = "cool", scale: int = 1
) -> np.ndarray:
    """
    Render a numeric matrix as a scaled-color RGB image (one pixel per entry).

    Returns:
        uint8 array of shape (rows * scale, cols * scale, 3)
    """
    matrix = np.atleast_2d(np.asarray(matrix, dtype=np.float64))
    if matrix.ndim != 2:
        raise ValueError(f"Matrix must be 2-D, got shape {matrix.shape}")
    if matrix.size == 0:
        raise ValueError("Matrix is empty")

    gray = _to_uint8(matrix)
    if colormap == "gray":
        rgb = cv2.cvtColor(gray, cv2.COLOR_GRAY2RGB)
    elif colormap in _COLORMAPS:
        bgr = cv2.applyColorMap(gray, _COLORMAPS[colormap])
        rgb = cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)
    else:
        raise ValueError(f"Unknown colormap: {colormap}")
    return _upscale(rgb, scale)


def render_contour_overlay(
    mask: np.ndarray,
    contour: NormalizedContour,
    *,
    scale: int = 4,
    thickness: int = 1,
) -> np.ndarray:
    """
    Draw the resampled outline over the mask, with the reference point marked.

    Returns:
        uint8 RGB array of shape (H * scale, W * scale, 3)
    """
    mask = np.asarray(mask)
    if mask.ndim != 2:
        raise ValueError(f"Mask must be 2-D, got shape {mask.shape}")

    base = np.where(mask != 0, 128, 0).astype(np.uint8)
    canvas = cv2.cvtColor(_upscale(base, scale), cv2.COLOR_GRAY2RGB)

    # Pixel centers map to the middle of each upscaled block
    points = np.round((contour.interp_outline + 0.5) * scale).astype(np.int32)
    cv2.polylines(
        canvas, [points.reshape(-1, 1, 2)], True, _OUTLINE_COLOR, thickness
    )
    start = (int(points[0, 0]), int(points[0, 1]))
    cv2.circle(canvas, start, max(2, scale // 2), _REFERENCE_COLOR, -1)
    return canvas


def render_pca_panels(
    result: PCAResult, config: Optional[ReportConfig] = None
) -> Dict[str, np.ndarray]:
    """Render the matrices of a PCA run as named RGB panels."""
    if config is None:
        config = ReportConfig()
    config.validate()

    panels = {
        "raw": result.input_data,
        "mean_centered": result.mean_centered,
        "covariance": result.covariance_matrix,
        "eigen_values": result.eigen_values,
        "eigen_vectors": result.eigen_vectors,
        "scores": result.scores,
    }
    return {
        name: render_matrix(matrix, colormap=config.colormap, scale=config.scale)
        for name, matrix in panels.items()
    }
