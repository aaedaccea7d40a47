"""Principal component analysis of rasterized shape vectors."""

from __future__ import annotations

from typing import Optional, Sequence, Union

import numpy as np
from scipy import linalg

from hypocotyl_shape.config import ShapePCAConfig
from hypocotyl_shape.errors import DimensionMismatch, InsufficientComponents
from hypocotyl_shape.analysis.pca_models import PCAResult, ReferencePCA

ShapeMatrixLike = Union[np.ndarray, Sequence[Sequence[float]]]


def as_shape_matrix(data: ShapeMatrixLike) -> np.ndarray:
    """
    Coerce input into a float (N, d) matrix without touching the caller's data.

    Raises:
        DimensionMismatch: rows differ in length or the input is not 2-D
    """
    if not isinstance(data, np.ndarray) or data.dtype == object:
        data = list(data)
        if any(np.ndim(row) != 1 for row in data):
            raise DimensionMismatch("Each shape vector must be a 1-D sequence")
        lengths = {len(row) for row in data}
        if len(lengths) > 1:
            raise DimensionMismatch(
                f"Shape vectors have inconsistent lengths: {sorted(lengths)}"
            )
    matrix = np.array(data, dtype=np.float64)
    if matrix.ndim != 2:
        raise DimensionMismatch(f"Shape matrix must be 2-D, got shape {matrix.shape}")
    if not np.all(np.isfinite(matrix)):
        raise ValueError("Shape matrix contains non-finite values")
    return matrix


def _check_components(num_components: object, n_rows: int, n_cols: int) -> int:
    if isinstance(num_components, bool) or not isinstance(
        num_components, (int, np.integer)
    ):
        raise InsufficientComponents(
            f"num_components must be an integer, got {num_components!r}"
        )
    limit = min(n_rows - 1, n_cols)
    if num_components < 1 or num_components > limit:
        raise InsufficientComponents(
            f"num_components={num_components} outside [1, {limit}] "
            f"for {n_rows} observations of dimension {n_cols}"
        )
    return int(num_components)


def _fix_signs(vectors: np.ndarray) -> np.ndarray:
    """Flip each column so its largest-magnitude entry is positive."""
    if vectors.size == 0:
        return vectors
    rows = np.argmax(np.abs(vectors), axis=0)
    signs = np.sign(vectors[rows, np.arange(vectors.shape[1])])
    signs[signs == 0] = 1.0
    return vectors * signs


def _frozen(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


def compute_pca(data: ShapeMatrixLike, num_components: int) -> PCAResult:
    """
    Reduce shape vectors to their leading principal components.

    The covariance is normalized by N, matching a population estimate.
    Eigenpairs come back largest first; tiny negative eigenvalues from
    round-off are clamped to zero. Each eigenvector's sign is fixed so its
    largest-magnitude entry is positive.

    Args:
        data: (N, d) matrix, one flattened shape per row
        num_components: Number of components k, 1 <= k <= min(N - 1, d)

    Returns:
        PCAResult with the mean, covariance, eigenpairs, scores and
        reconstruction

    Raises:
        DimensionMismatch: rows of data differ in length
        InsufficientComponents: num_components is outside the rank bound
    """
    raw = as_shape_matrix(data)
    n_rows, n_cols = raw.shape
    k = _check_components(num_components, n_rows, n_cols)

    mean_vector = raw.mean(axis=0, keepdims=True)
    centered = raw - mean_vector

    covariance = (centered.T @ centered) / n_rows
    covariance = (covariance + covariance.T) / 2.0

    values, vectors = linalg.eigh(covariance, subset_by_index=[n_cols - k, n_cols - 1])
    values = np.clip(values[::-1], 0.0, None)
    vectors = _fix_signs(vectors[:, ::-1])

    scores = centered @ vectors
    reconstruction = scores @ vectors.T + mean_vector

    return PCAResult(
        input_data=_frozen(raw),
        mean_vector=_frozen(mean_vector),
        mean_centered=_frozen(centered),
        covariance_matrix=_frozen(covariance),
        eigen_vectors=_frozen(np.ascontiguousarray(vectors)),
        eigen_values=_frozen(np.diag(values)),
        scores=_frozen(scores),
        reconstruction=_frozen(reconstruction),
    )


def compute_pca_with_config(
    data: ShapeMatrixLike, config: Optional[ShapePCAConfig] = None
) -> PCAResult:
    """Run ``compute_pca`` with settings from a config object."""
    if config is None:
        config = ShapePCAConfig()
    config.validate()
    return compute_pca(data, config.num_components)


def compute_reference_pca(data: ShapeMatrixLike, num_components: int) -> ReferencePCA:
    """
    PCA by SVD of the centered data, reported the way statistics packages do.

    Variances use the N - 1 normalization, so ``latent`` equals the
    eigenvalues from ``compute_pca`` scaled by N / (N - 1). ``latent``,
    ``explained`` and ``tsquared`` cover the full space, not only the
    ``num_components`` retained in ``coeff`` and ``score``.
    """
    raw = as_shape_matrix(data)
    n_rows, n_cols = raw.shape
    k = _check_components(num_components, n_rows, n_cols)

    mu = raw.mean(axis=0)
    centered = raw - mu
    u, s, vt = np.linalg.svd(centered, full_matrices=False)

    full_coeff = _fix_signs(vt.T)
    full_score = centered @ full_coeff
    coeff = full_coeff[:, :k]
    score = full_score[:, :k]
    latent = s**2 / (n_rows - 1)

    total = float(np.sum(latent))
    explained = 100.0 * latent / total if total > 0 else np.zeros_like(latent)

    # Hotelling's T^2 over every component above the rank tolerance; centering
    # leaves at most N - 1 of them
    tol = max(n_rows, n_cols) * np.finfo(np.float64).eps * (s[0] if s.size else 0.0)
    keep = (s > tol) & (np.arange(s.size) < n_rows - 1)
    tsquared = np.sum(full_score[:, keep] ** 2 / latent[keep], axis=1)

    return ReferencePCA(
        coeff=coeff,
        score=score,
        latent=latent,
        tsquared=tsquared,
        explained=explained,
        mu=mu,
    )
