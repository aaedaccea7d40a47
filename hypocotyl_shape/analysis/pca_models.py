"""Result containers for shape PCA."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import numpy as np

from hypocotyl_shape.errors import DimensionMismatch


@dataclass(frozen=True)
class PCAResult:
    """Everything computed by one PCA call.

    ``eigen_values`` is a (k, k) diagonal matrix in descending order and
    ``eigen_vectors`` holds the matching unit eigenvectors as columns.
    """

    input_data: np.ndarray  # (N, d)
    mean_vector: np.ndarray  # (1, d)
    mean_centered: np.ndarray  # (N, d)
    covariance_matrix: np.ndarray  # (d, d)
    eigen_vectors: np.ndarray  # (d, k)
    eigen_values: np.ndarray  # (k, k)
    scores: np.ndarray  # (N, k)
    reconstruction: np.ndarray  # (N, d)

    @property
    def num_components(self) -> int:
        return int(self.eigen_vectors.shape[1])

    @property
    def latent(self) -> np.ndarray:
        """Retained eigenvalues as a 1-D array."""
        return np.diag(self.eigen_values).copy()

    @property
    def explained(self) -> np.ndarray:
        """Percent of total variance carried by each retained component."""
        total = float(np.trace(self.covariance_matrix))
        if total <= 0:
            return np.zeros(self.num_components)
        return 100.0 * self.latent / total

    @property
    def tsquared(self) -> np.ndarray:
        """Hotelling's T-squared per observation over the retained components."""
        latent = self.latent
        keep = latent > 0
        return np.sum(self.scores[:, keep] ** 2 / latent[keep], axis=1)

    def reconstruction_error(self) -> float:
        """Mean squared error between the input and its reconstruction."""
        return float(np.mean((self.input_data - self.reconstruction) ** 2))

    def project(self, data: np.ndarray) -> np.ndarray:
        """Project new shape vectors into the retained component space."""
        data = np.atleast_2d(np.asarray(data, dtype=np.float64))
        if data.shape[1] != self.mean_vector.shape[1]:
            raise DimensionMismatch(
                f"Expected {self.mean_vector.shape[1]} columns, got {data.shape[1]}"
            )
        return (data - self.mean_vector) @ self.eigen_vectors

    def reconstruct(self, scores: np.ndarray) -> np.ndarray:
        """Map component scores back to shape vectors."""
        scores = np.atleast_2d(np.asarray(scores, dtype=np.float64))
        if scores.shape[1] != self.num_components:
            raise DimensionMismatch(
                f"Expected {self.num_components} scores per row, got {scores.shape[1]}"
            )
        return scores @ self.eigen_vectors.T + self.mean_vector

    def to_dict(self) -> Dict[str, object]:
        """Return a JSON-serializable dict."""
        return {
            "input_data": self.input_data.tolist(),
            "mean_vector": self.mean_vector.tolist(),
            "mean_centered": self.mean_centered.tolist(),
            "covariance_matrix": self.covariance_matrix.tolist(),
            "eigen_vectors": self.eigen_vectors.tolist(),
            "eigen_values": self.eigen_values.tolist(),
            "scores": self.scores.tolist(),
            "reconstruction": self.reconstruction.tolist(),
        }


@dataclass(frozen=True)
class ReferencePCA:
    """PCA computed by singular value decomposition, for cross-checking.

    ``latent``, ``explained`` and ``tsquared`` cover every component;
    ``coeff`` and ``score`` only the retained ones.
    """

    coeff: np.ndarray  # (d, k)
    score: np.ndarray  # (N, k)
    latent: np.ndarray  # (min(N, d),)
    tsquared: np.ndarray  # (N,)
    explained: np.ndarray  # (min(N, d),)
    mu: np.ndarray  # (d,)

    def to_dict(self) -> Dict[str, object]:
        """Return a JSON-serializable dict."""
        return {
            "coeff": self.coeff.tolist(),
            "score": self.score.tolist(),
            "latent": self.latent.tolist(),
            "tsquared": self.tsquared.tolist(),
            "explained": self.explained.tolist(),
            "mu": self.mu.tolist(),
        }
