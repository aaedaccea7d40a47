"""Batch contour extraction and PCA over a stack of hypocotyl masks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from hypocotyl_shape.analysis import (
    PCAResult,
    ReferencePCA,
    compute_pca_with_config,
    compute_reference_pca,
)
from hypocotyl_shape.config import PipelineConfig
from hypocotyl_shape.errors import DimensionMismatch
from hypocotyl_shape.geometry import NormalizedContour, extract_contour_with_config
from hypocotyl_shape.utils import RunContext, build_manifest, iter_progress


@dataclass(frozen=True)
class ShapeAnalysisRun:
    """Outputs of ``run_shape_analysis``."""

    contours: List[NormalizedContour]
    shape_matrix: np.ndarray
    pca: PCAResult
    reference: Optional[ReferencePCA]
    manifest: Dict[str, Any]


def extract_contours(
    masks: Sequence[np.ndarray],
    config: Optional[PipelineConfig] = None,
    *,
    context: Optional[RunContext] = None,
    progress: bool = False,
) -> List[NormalizedContour]:
    """Extract a normalized contour from every mask, in order."""
    config = config or PipelineConfig()
    contours = []
    for index, mask in enumerate(
        iter_progress(masks, desc="contours", total=len(masks), enabled=progress)
    ):
        contour = extract_contour_with_config(mask, config.contour)
        if context is not None:
            context.log(
                "debug",
                "contour_extracted",
                frame=index,
                traced_points=len(contour.outline),
                reference_index=contour.reference_index,
            )
        contours.append(contour)
    return contours


def build_shape_matrix(contours: Sequence[NormalizedContour]) -> np.ndarray:
    """Stack flattened contours into an (N, 2 * max_size) matrix."""
    if not contours:
        raise ValueError("At least one contour is required")
    rows = [contour.to_vector() for contour in contours]
    lengths = {len(row) for row in rows}
    if len(lengths) > 1:
        raise DimensionMismatch(
            f"Contours have different sample counts: {sorted(lengths)}"
        )
    return np.vstack(rows)


def run_shape_analysis(
    masks: Sequence[np.ndarray],
    config: Optional[PipelineConfig] = None,
    *,
    context: Optional[RunContext] = None,
    progress: bool = False,
) -> ShapeAnalysisRun:
    """
    Run contour extraction and PCA over a sequence of masks.

    Args:
        masks: Binary masks, one per frame or seedling
        config: Pipeline settings (defaults used when omitted)
        context: Run context for logs and stage timings
        progress: Show a tqdm bar while extracting contours

    Returns:
        ShapeAnalysisRun with contours, shape matrix, PCA and manifest
    """
    config = config or PipelineConfig()
    config.validate()
    if context is None:
        context = RunContext(config=config)
    elif context.config is None:
        context.config = config

    context.log("info", "run_start", masks=len(masks))

    with context.time_block("extract_contours"):
        contours = extract_contours(
            masks, config, context=context, progress=progress
        )

    with context.time_block("build_shape_matrix"):
        shape_matrix = build_shape_matrix(contours)
    context.log(
        "info",
        "shape_matrix_built",
        rows=shape_matrix.shape[0],
        cols=shape_matrix.shape[1],
    )

    with context.time_block("pca"):
        pca = compute_pca_with_config(shape_matrix, config.pca)

    warnings: List[str] = []
    reference = None
    if config.pca.reference_check:
        with context.time_block("reference_pca"):
            reference = compute_reference_pca(shape_matrix, config.pca.num_components)
        n_rows = shape_matrix.shape[0]
        expected = reference.latent[: pca.num_components] * (n_rows - 1) / n_rows
        if not np.allclose(pca.latent, expected, rtol=1e-6, atol=1e-9):
            warnings.append("eigenvalues disagree with SVD reference")
            context.log("warning", "reference_mismatch")

    error = pca.reconstruction_error()
    context.log(
        "info",
        "pca_complete",
        components=pca.num_components,
        reconstruction_mse=f"{error:.6g}",
    )

    manifest = build_manifest(
        context,
        outputs={
            "num_contours": len(contours),
            "shape_matrix_shape": list(shape_matrix.shape),
            "num_components": pca.num_components,
            "explained": [float(v) for v in pca.explained],
            "reconstruction_mse": error,
        },
        warnings=warnings,
    )

    return ShapeAnalysisRun(
        contours=contours,
        shape_matrix=shape_matrix,
        pca=pca,
        reference=reference,
        manifest=manifest,
    )
