"""Tests for RunContext and manifest utilities (pure Python)."""

from __future__ import annotations

import json
import unittest

from hypocotyl_shape.config import PipelineConfig
from hypocotyl_shape.utils.manifest import build_manifest
from hypocotyl_shape.utils.progress import iter_progress
from hypocotyl_shape.utils.run_context import SCHEMA_VERSION, RunContext


class TestRunContext(unittest.TestCase):
    def test_log_line_format(self) -> None:
        ctx = RunContext(run_id="abc", quiet=True)
        line = ctx.log("info", "frame_done", frame=3, area=12.5)
        self.assertEqual(
            line, "[hypocotyl] run_id=abc level=info msg=frame_done area=12.5 frame=3"
        )
        self.assertEqual(
            ctx.logs[-1],
            {"level": "info", "message": "frame_done", "frame": 3, "area": 12.5},
        )

    def test_to_dict_json_safe(self) -> None:
        ctx = RunContext(label="plate_1")
        ctx.config = PipelineConfig()
        payload = ctx.to_dict()
        json.dumps(payload)
        self.assertEqual(payload["schema_version"], SCHEMA_VERSION)
        self.assertIn("config", payload)

    def test_to_dict_fields(self) -> None:
        ctx = RunContext(run_id="abc", label="plate_1")
        self.assertEqual(
            set(ctx.to_dict()),
            {"run_id", "label", "created_utc", "schema_version"},
        )

    def test_non_serializable_label(self) -> None:
        ctx = RunContext(label=object())
        with self.assertRaises(ValueError):
            ctx.to_dict()

    def test_time_block_records(self) -> None:
        ctx = RunContext()
        with ctx.time_block("stage_a"):
            pass
        self.assertEqual(len(ctx.stages), 1)
        self.assertEqual(ctx.stages[0].stage, "stage_a")
        self.assertGreaterEqual(ctx.stages[0].elapsed_ms, 0.0)

    def test_time_block_records_on_error(self) -> None:
        ctx = RunContext()
        with self.assertRaises(RuntimeError):
            with ctx.time_block("failing"):
                raise RuntimeError("boom")
        self.assertEqual(ctx.stages[0].stage, "failing")


class TestManifestSchema(unittest.TestCase):
    def test_manifest_contains_required_keys(self) -> None:
        ctx = RunContext()
        manifest = build_manifest(ctx, outputs={}, warnings=[], errors=[])
        for key in (
            "manifest_version",
            "run_id",
            "created_utc",
            "context",
            "stages",
            "outputs",
            "warnings",
            "errors",
        ):
            self.assertIn(key, manifest)

    def test_run_id_consistency(self) -> None:
        ctx = RunContext()
        manifest = build_manifest(ctx)
        self.assertEqual(manifest["run_id"], ctx.run_id)

    def test_outputs_made_json_safe(self) -> None:
        manifest = build_manifest(
            RunContext(), outputs={"shape": (3, 4), "obj": object()}
        )
        json.dumps(manifest)
        self.assertIsInstance(manifest["outputs"]["obj"], str)


class TestProgress(unittest.TestCase):
    def test_disabled_returns_iterable(self) -> None:
        items = [1, 2, 3]
        self.assertIs(iter_progress(items, enabled=False), items)

    def test_enabled_yields_all(self) -> None:
        self.assertEqual(list(iter_progress(range(4), desc="t", total=4)), [0, 1, 2, 3])


if __name__ == "__main__":
    unittest.main()
