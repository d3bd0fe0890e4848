from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from colorpick.analysis.grouping import ColorGroup, ColorGrouper
from colorpick.analysis.selector import select_points
from colorpick.analysis.similarity import similarity_count
from colorpick.models.analysis import AnalyzeConfig, AnalyzePoint, Region
from colorpick.models.color import ColorMode, format_color, unpack_rgb
from colorpick.pick.source import PixelSource, in_bounds
from colorpick.store.record_store import RecordSink

log = logging.getLogger(__name__)


@dataclass
class RegionAnalysis:
    """
    Intermediate result of one pass over a region (no records written yet).
    """
    sampled: int
    groups: List[ColorGroup]
    selected: List[AnalyzePoint]


def scan_region(region: Region, config: AnalyzeConfig, source: PixelSource) -> RegionAnalysis:
    """
    Walk the region on a `spacing` grid (x outer, y inner, inclusive bounds),
    score each in-bounds sample and group the ones with similarity > 0, then
    run the selector over the groups.
    """
    if config.spacing < 1:
        raise ValueError(f"spacing must be >= 1, got {config.spacing}")

    min_x, min_y, max_x, max_y = region.normalized()
    step = int(config.spacing)
    grouper = ColorGrouper(config.tolerance)
    sampled = 0

    for x in range(min_x, max_x + 1, step):
        for y in range(min_y, max_y + 1, step):
            if not in_bounds(source, x, y):
                continue
            sampled += 1
            sim = similarity_count(source, x, y, spacing=step, tolerance=config.tolerance)
            if sim > 0:
                grouper.offer(AnalyzePoint(x=x, y=y, similarity=sim, rgb=unpack_rgb(source.get_color(x, y))))

    groups = grouper.groups
    selected = select_points(groups, config.max_points)
    return RegionAnalysis(sampled=sampled, groups=groups, selected=selected)


def analyze_region(
    region: Region,
    config: AnalyzeConfig,
    source: PixelSource,
    sink: RecordSink,
    *,
    color_mode: "ColorMode | str" = ColorMode.HEX,
) -> int:
    """
    Scan `region`, then hand each selected point to `sink.add` in selection
    order (anchor first). Returns the number of points emitted.
    """
    result = scan_region(region, config, source)
    log.debug(
        "region %s: sampled=%d groups=%d selected=%d",
        region.normalized(), result.sampled, len(result.groups), len(result.selected),
    )

    for p in result.selected:
        c_native = source.get_color(p.x, p.y)
        sink.add(p.x, p.y, format_color(c_native, color_mode), c_native)
    return len(result.selected)
