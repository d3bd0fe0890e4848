from __future__ import annotations

from typing import Tuple

from colorpick.models.color import colors_within, unpack_rgb
from colorpick.pick.source import PixelSource, in_bounds

# 8 个方向（行优先），乘以 spacing 得到邻居偏移
NEIGHBOR_DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
)


def similarity_count(
    source: PixelSource,
    x: int,
    y: int,
    *,
    spacing: int,
    tolerance: int,
) -> int:
    """
    Number of the 8 neighbors at distance `spacing` whose color is within
    `tolerance` of (x, y) on every channel. Neighbors outside the image are
    skipped, so edge pixels simply have fewer chances to score.
    """
    if spacing < 1:
        raise ValueError(f"spacing must be >= 1, got {spacing}")

    center = unpack_rgb(source.get_color(x, y))
    count = 0
    for dx, dy in NEIGHBOR_DIRECTIONS:
        nx = x + dx * spacing
        ny = y + dy * spacing
        if not in_bounds(source, nx, ny):
            continue
        if colors_within(center, unpack_rgb(source.get_color(nx, ny)), tolerance):
            count += 1
    return count
