"""Manifest helpers for recording run metadata."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from hypocotyl_shape.utils.run_context import RunContext


def _safe_json(value: Any) -> Any:
    """Ensure value is JSON-serializable; fallback to string."""
    try:
        json.dumps(value)
        return value
    except TypeError:
        return str(value)


def build_manifest(
    context: RunContext,
    outputs: Optional[Dict[str, Any]] = None,
    warnings: Optional[List[str]] = None,
    errors: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """Build the run manifest payload."""
    return {
        "manifest_version": context.schema_version,
        "run_id": context.run_id,
        "created_utc": context.created_utc,
        "context": context.to_dict(),
        "stages": [stage.to_dict() for stage in context.stages],
        "outputs": {key: _safe_json(value) for key, value in (outputs or {}).items()},
        "warnings": warnings or [],
        "errors": errors or [],
    }
