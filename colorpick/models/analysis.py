from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple

from colorpick.models.color import ColorRGB
from colorpick.models.common import as_dict, as_enum, as_int, clamp_int


@dataclass(frozen=True)
class Region:
    """
    Two arbitrary corners of a rectangular selection.

    Iteration always goes through normalized(), the raw corners are kept only
    so callers can echo back what the user dragged.
    """
    x1: int
    y1: int
    x2: int
    y2: int

    def normalized(self) -> Tuple[int, int, int, int]:
        """Returns (min_x, min_y, max_x, max_y)."""
        return (
            min(self.x1, self.x2),
            min(self.y1, self.y2),
            max(self.x1, self.x2),
            max(self.y1, self.y2),
        )


@dataclass(frozen=True)
class AnalyzePoint:
    x: int
    y: int
    similarity: int
    rgb: ColorRGB


@dataclass(frozen=True)
class AnalyzeConfig:
    max_points: int = 10
    tolerance: int = 10
    spacing: int = 5

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "AnalyzeConfig":
        d = as_dict(d)
        return AnalyzeConfig(
            max_points=clamp_int(as_int(d.get("max_points", 10), 10), 1, 20),
            tolerance=clamp_int(as_int(d.get("tolerance", 10), 10), 0, 255),
            spacing=clamp_int(as_int(d.get("spacing", 5), 5), 1, 1000),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "max_points": int(self.max_points),
            "tolerance": int(self.tolerance),
            "spacing": int(self.spacing),
        }


class AutoPickMode(str, Enum):
    GRID_3X3 = "grid_3x3"
    GRID_4X4 = "grid_4x4"
    CROSS = "cross"
    CIRCLE = "circle"
    DIAMOND = "diamond"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AutoPickConfig:
    mode: AutoPickMode = AutoPickMode.GRID_3X3
    spacing: int = 10

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "AutoPickConfig":
        d = as_dict(d)
        return AutoPickConfig(
            mode=as_enum(d.get("mode"), AutoPickMode, AutoPickMode.GRID_3X3),
            spacing=clamp_int(as_int(d.get("spacing", 10), 10), 1, 1000),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"mode": self.mode.value, "spacing": int(self.spacing)}
