from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol, Sequence

from colorpick.models.color import PackedColor, pack_rgba


class PixelSource(Protocol):
    """
    Read-only pixel accessor bound to one image.

    get_color() is only called with 0 <= x < width and 0 <= y < height;
    callers do the bounds check.
    """

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def get_color(self, x: int, y: int) -> PackedColor: ...


def in_bounds(source: PixelSource, x: int, y: int) -> bool:
    return 0 <= x < source.width and 0 <= y < source.height


@dataclass(frozen=True)
class FramePixelSource:
    """
    BGRA 原始字节帧（mss.ScreenShot.raw 的格式）：
    - width/height: 帧尺寸
    - raw: 长度至少为 width*height*4
    """
    width: int
    height: int
    raw: bytes

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"invalid frame size: {self.width}x{self.height}")
        need = self.width * self.height * 4
        if len(self.raw) < need:
            raise ValueError(f"frame buffer too short: {len(self.raw)} < {need}")

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_color(self, x: int, y: int) -> PackedColor:
        idx = (y * self.width + x) * 4
        raw = self.raw
        b = raw[idx + 0]
        g = raw[idx + 1]
        r = raw[idx + 2]
        a = raw[idx + 3]
        return pack_rgba(r, g, b, a)


class GridPixelSource:
    """
    Pixel source over rows of already-packed colors (rows[y][x]).
    """

    def __init__(self, rows: Sequence[Sequence[PackedColor]]) -> None:
        self._rows: List[List[PackedColor]] = [list(r) for r in rows]
        self._height = len(self._rows)
        self._width = len(self._rows[0]) if self._rows else 0
        for y, row in enumerate(self._rows):
            if len(row) != self._width:
                raise ValueError(f"ragged row {y}: {len(row)} != {self._width}")

    @staticmethod
    def filled(width: int, height: int, color: PackedColor) -> "GridPixelSource":
        return GridPixelSource([[color] * width for _ in range(height)])

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def get_color(self, x: int, y: int) -> PackedColor:
        return self._rows[y][x]

    def set_color(self, x: int, y: int, color: PackedColor) -> None:
        self._rows[y][x] = color
