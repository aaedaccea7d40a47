"""Principal component analysis over flattened contours."""

from .pca_models import PCAResult, ReferencePCA
from .shape_pca import (
    as_shape_matrix,
    compute_pca,
    compute_pca_with_config,
    compute_reference_pca,
)

__all__ = [
    "PCAResult",
    "ReferencePCA",
    "as_shape_matrix",
    "compute_pca",
    "compute_pca_with_config",
    "compute_reference_pca",
]
