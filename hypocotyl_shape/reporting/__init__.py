"""Optional diagnostic rendering for contours and PCA results."""

from .renderers import render_contour_overlay, render_matrix, render_pca_panels

__all__ = ["render_contour_overlay", "render_matrix", "render_pca_panels"]
