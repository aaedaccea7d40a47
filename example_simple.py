"""
Simple example of contour normalization and shape PCA on synthetic seedlings.
Run from the repository root:
  python example_simple.py
"""

import numpy as np

from hypocotyl_shape import ContourExtractConfig, PipelineConfig, ShapePCAConfig
from hypocotyl_shape import run_shape_analysis
from hypocotyl_shape.reporting import render_contour_overlay, render_pca_panels


def synthetic_hypocotyls(num_frames=8, size=96):
    """Masks of a stem that lengthens and bends a little each frame."""
    yy, xx = np.mgrid[:size, :size]
    masks = []
    for frame in range(num_frames):
        length = 30 + 5 * frame
        bend = 0.01 * frame
        top = size - 8 - length
        center_x = size / 2 + bend * (yy - top) ** 2 / 10.0
        mask = (np.abs(xx - center_x) <= 4) & (yy >= top) & (yy < size - 8)
        masks.append(mask)
    return masks


def run_example():
    """Extract contours from a synthetic time-lapse and reduce them with PCA."""
    masks = synthetic_hypocotyls()
    config = PipelineConfig(
        contour=ContourExtractConfig(max_size=100, reference_policy="bottom_left"),
        pca=ShapePCAConfig(num_components=3, reference_check=True),
    )

    run = run_shape_analysis(masks, config, progress=True)

    overlay = render_contour_overlay(masks[-1], run.contours[-1], scale=4)
    panels = render_pca_panels(run.pca, config.report)

    print(f"Shape matrix: {run.shape_matrix.shape}")
    print(f"Explained variance (%): {np.round(run.pca.explained, 2)}")
    print(f"Reconstruction MSE: {run.pca.reconstruction_error():.4f}")
    print(f"Overlay image: {overlay.shape}, panels: {sorted(panels)}")
    return run


if __name__ == "__main__":
    run_example()
