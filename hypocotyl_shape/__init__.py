"""Hypocotyl contour normalization and shape PCA."""

from .analysis import PCAResult, ReferencePCA, compute_pca, compute_reference_pca
from .config import ContourExtractConfig, PipelineConfig, ReportConfig, ShapePCAConfig
from .errors import (
    DimensionMismatch,
    InsufficientComponents,
    InvalidSampleCount,
    NoForegroundFound,
    ShapeAnalysisError,
)
from .geometry import NormalizedContour, extract_contour
from .pipeline import (
    ShapeAnalysisRun,
    build_shape_matrix,
    extract_contours,
    run_shape_analysis,
)

__version__ = "0.1.0"

__all__ = [
    "ContourExtractConfig",
    "DimensionMismatch",
    "InsufficientComponents",
    "InvalidSampleCount",
    "NoForegroundFound",
    "NormalizedContour",
    "PCAResult",
    "PipelineConfig",
    "ReferencePCA",
    "ReportConfig",
    "ShapeAnalysisError",
    "ShapeAnalysisRun",
    "ShapePCAConfig",
    "build_shape_matrix",
    "compute_pca",
    "compute_reference_pca",
    "extract_contour",
    "extract_contours",
    "run_shape_analysis",
]
