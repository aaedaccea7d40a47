"""Tests for batch contour extraction and shape analysis runs (pure Python)."""

from __future__ import annotations

import json
import unittest

import numpy as np

from hypocotyl_shape.config import ContourExtractConfig, PipelineConfig, ShapePCAConfig
from hypocotyl_shape.errors import (
    DimensionMismatch,
    InsufficientComponents,
    InvalidSampleCount,
    NoForegroundFound,
)
from hypocotyl_shape.geometry import extract_contour
from hypocotyl_shape.pipeline import (
    build_shape_matrix,
    extract_contours,
    run_shape_analysis,
)
from hypocotyl_shape.utils import RunContext


def _ellipse_mask(rx: int, ry: int, size: int = 64) -> np.ndarray:
    yy, xx = np.mgrid[:size, :size]
    center = size // 2
    return ((xx - center) / rx) ** 2 + ((yy - center) / ry) ** 2 <= 1.0


def _seedling_stack():
    """Elongating, thinning ellipses standing in for time-lapse frames."""
    axes = [(6, 10), (6, 13), (5, 16), (5, 19), (4, 22), (4, 25)]
    return [_ellipse_mask(rx, ry) for rx, ry in axes]


def _config() -> PipelineConfig:
    return PipelineConfig(
        contour=ContourExtractConfig(max_size=32),
        pca=ShapePCAConfig(num_components=2, reference_check=True),
    )


class TestShapeMatrix(unittest.TestCase):
    def test_rows_are_flattened_contours(self) -> None:
        contours = [extract_contour(m, 10) for m in _seedling_stack()[:3]]
        matrix = build_shape_matrix(contours)
        self.assertEqual(matrix.shape, (3, 20))
        np.testing.assert_array_equal(matrix[1, :10], contours[1].interp_outline[:, 0])
        np.testing.assert_array_equal(matrix[1, 10:], contours[1].interp_outline[:, 1])

    def test_mixed_sample_counts(self) -> None:
        masks = _seedling_stack()
        contours = [extract_contour(masks[0], 10), extract_contour(masks[1], 12)]
        with self.assertRaises(DimensionMismatch):
            build_shape_matrix(contours)

    def test_empty(self) -> None:
        with self.assertRaises(ValueError):
            build_shape_matrix([])


class TestExtractContours(unittest.TestCase):
    def test_order_and_count(self) -> None:
        masks = _seedling_stack()
        contours = extract_contours(masks, _config())
        self.assertEqual(len(contours), len(masks))
        heights = [np.ptp(c.interp_outline[:, 1]) for c in contours]
        self.assertEqual(heights, sorted(heights))

    def test_logs_per_frame(self) -> None:
        ctx = RunContext(quiet=True)
        extract_contours(_seedling_stack()[:2], _config(), context=ctx)
        frames = [entry["frame"] for entry in ctx.logs]
        self.assertEqual(frames, [0, 1])

    def test_empty_frame_propagates(self) -> None:
        masks = [_ellipse_mask(5, 8), np.zeros((64, 64), dtype=bool)]
        with self.assertRaises(NoForegroundFound):
            extract_contours(masks, _config())


class TestRunShapeAnalysis(unittest.TestCase):
    def setUp(self) -> None:
        self.ctx = RunContext(label="unit", quiet=True)
        self.run = run_shape_analysis(_seedling_stack(), _config(), context=self.ctx)

    def test_outputs(self) -> None:
        self.assertEqual(len(self.run.contours), 6)
        self.assertEqual(self.run.shape_matrix.shape, (6, 64))
        self.assertEqual(self.run.pca.num_components, 2)
        self.assertIsNotNone(self.run.reference)

    def test_manifest(self) -> None:
        manifest = self.run.manifest
        json.dumps(manifest)
        self.assertEqual(manifest["run_id"], self.ctx.run_id)
        self.assertEqual(manifest["outputs"]["shape_matrix_shape"], [6, 64])
        self.assertEqual(manifest["warnings"], [])
        self.assertEqual(manifest["context"]["config"]["contour"]["max_size"], 32)

    def test_stages_timed(self) -> None:
        stages = [timing.stage for timing in self.ctx.stages]
        self.assertEqual(
            stages,
            ["extract_contours", "build_shape_matrix", "pca", "reference_pca"],
        )

    def test_log_messages(self) -> None:
        messages = [entry["message"] for entry in self.ctx.logs]
        self.assertEqual(messages[0], "run_start")
        self.assertIn("shape_matrix_built", messages)
        self.assertEqual(messages[-1], "pca_complete")

    def test_default_context_created(self) -> None:
        run = run_shape_analysis(
            _seedling_stack()[:4],
            PipelineConfig(
                contour=ContourExtractConfig(max_size=16),
                pca=ShapePCAConfig(num_components=1),
            ),
        )
        self.assertIsNone(run.reference)
        self.assertEqual(run.manifest["outputs"]["num_components"], 1)

    def test_invalid_config_rejected(self) -> None:
        bad = PipelineConfig(contour=ContourExtractConfig(reference_policy="nope"))
        with self.assertRaises(ValueError):
            run_shape_analysis(_seedling_stack(), bad, context=self.ctx)

    def test_config_errors_keep_their_types(self) -> None:
        small = PipelineConfig(contour=ContourExtractConfig(max_size=2))
        with self.assertRaises(InvalidSampleCount):
            run_shape_analysis(_seedling_stack(), small, context=self.ctx)
        zero = PipelineConfig(pca=ShapePCAConfig(num_components=0))
        with self.assertRaises(InsufficientComponents):
            run_shape_analysis(_seedling_stack(), zero, context=self.ctx)


if __name__ == "__main__":
    unittest.main()
