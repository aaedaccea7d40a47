"""Exception types raised by the contour and PCA kernels."""

from __future__ import annotations


class ShapeAnalysisError(ValueError):
    """Base class for invalid input to the shape kernels."""


class NoForegroundFound(ShapeAnalysisError):
    """The mask has no foreground boundary to trace."""


class InvalidSampleCount(ShapeAnalysisError):
    """The requested number of contour samples cannot form a polygon."""


class InsufficientComponents(ShapeAnalysisError):
    """More principal components were requested than the data can support."""


class DimensionMismatch(ShapeAnalysisError):
    """Shape vectors do not share a single dimensionality."""
