"""Configuration models for hypocotyl contour extraction and shape PCA."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping

import numpy as np

from hypocotyl_shape.errors import InsufficientComponents, InvalidSampleCount


REFERENCE_POLICIES = (
    "top_left",
    "top_right",
    "bottom_left",
    "bottom_right",
    "trace_start",
)
_VALID_COLORMAPS = {"cool", "jet", "viridis", "gray"}


def _is_integer(value: object) -> bool:
    return not isinstance(value, bool) and isinstance(value, (int, np.integer))


@dataclass
class ContourExtractConfig:
    """Configuration for extracting a normalized contour from a mask."""

    max_size: int = 800
    reference_policy: str = "top_left"

    def validate(self) -> None:
        """Validate configuration values."""
        if not _is_integer(self.max_size):
            raise InvalidSampleCount("max_size must be an integer")
        if self.max_size < 3:
            raise InvalidSampleCount("max_size must be >= 3")
        if self.reference_policy not in REFERENCE_POLICIES:
            raise ValueError(
                f"reference_policy must be one of {sorted(REFERENCE_POLICIES)}"
            )

    def to_dict(self) -> Dict[str, object]:
        """Return a JSON-serializable dict."""
        return {
            "max_size": int(self.max_size),
            "reference_policy": self.reference_policy,
        }


@dataclass
class ShapePCAConfig:
    """Configuration for PCA over rasterized shape vectors."""

    num_components: int = 3
    reference_check: bool = False

    def validate(self) -> None:
        """Validate configuration values."""
        if not _is_integer(self.num_components):
            raise InsufficientComponents("num_components must be an integer")
        if self.num_components < 1:
            raise InsufficientComponents("num_components must be >= 1")

    def to_dict(self) -> Dict[str, object]:
        """Return a JSON-serializable dict."""
        return {
            "num_components": int(self.num_components),
            "reference_check": self.reference_check,
        }


@dataclass
class ReportConfig:
    """Configuration for rendering diagnostic panels."""

    colormap: str = "cool"
    line_thickness: int = 1
    scale: int = 4

    def validate(self) -> None:
        """Validate configuration values."""
        if self.colormap not in _VALID_COLORMAPS:
            raise ValueError(f"colormap must be one of {sorted(_VALID_COLORMAPS)}")
        if self.line_thickness < 1:
            raise ValueError("line_thickness must be >= 1")
        if self.scale < 1:
            raise ValueError("scale must be >= 1")

    def to_dict(self) -> Dict[str, object]:
        """Return a JSON-serializable dict."""
        return {
            "colormap": self.colormap,
            "line_thickness": self.line_thickness,
            "scale": self.scale,
        }


@dataclass
class PipelineConfig:
    """Root configuration for a contour-to-PCA run."""

    contour: ContourExtractConfig = field(default_factory=ContourExtractConfig)
    pca: ShapePCAConfig = field(default_factory=ShapePCAConfig)
    report: ReportConfig = field(default_factory=ReportConfig)

    def validate(self) -> None:
        """Validate configuration values across groups."""
        self.contour.validate()
        self.pca.validate()
        self.report.validate()

    def to_dict(self) -> Dict[str, object]:
        """Return a JSON-serializable dict matching the canonical schema."""
        return {
            "contour": self.contour.to_dict(),
            "pca": self.pca.to_dict(),
            "report": self.report.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, object]]) -> "PipelineConfig":
        """Rebuild a config from a ``to_dict`` payload."""
        groups = {
            "contour": ContourExtractConfig,
            "pca": ShapePCAConfig,
            "report": ReportConfig,
        }
        unknown = set(data) - set(groups)
        if unknown:
            raise ValueError(f"Unknown config groups: {sorted(unknown)}")

        kwargs = {}
        for name, group_cls in groups.items():
            values = dict(data.get(name, {}))
            valid_keys = set(group_cls().to_dict())
            invalid = set(values) - valid_keys
            if invalid:
                raise ValueError(f"{name} has invalid keys: {sorted(invalid)}")
            kwargs[name] = group_cls(**values)
        return cls(**kwargs)
