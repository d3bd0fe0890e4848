from __future__ import annotations

import logging
import math
from typing import Callable, Dict, List, Tuple

from colorpick.events.notices import Notice, NoticeCode, Notify, emit
from colorpick.models.analysis import AutoPickConfig, AutoPickMode
from colorpick.models.color import ColorMode, format_color
from colorpick.pick.source import PixelSource, in_bounds
from colorpick.store.record_store import RecordSlotStore

log = logging.getLogger(__name__)

Offset = Tuple[int, int]

CIRCLE_ANGLES = (0, 45, 90, 135, 180, 225, 270, 315)
DIAMOND_UNITS: Tuple[Offset, ...] = (
    (0, -2), (-1, -1), (1, -1), (-2, 0), (2, 0), (-1, 1), (1, 1), (0, 2),
)


def _round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def _grid(lo: int, hi: int, spacing: int) -> List[Offset]:
    out: List[Offset] = []
    for i in range(lo, hi + 1):
        for j in range(lo, hi + 1):
            if i == 0 and j == 0:
                continue
            out.append((i * spacing, j * spacing))
    return out


def grid_3x3_offsets(spacing: int) -> List[Offset]:
    return _grid(-1, 1, spacing)


def grid_4x4_offsets(spacing: int) -> List[Offset]:
    # base sits at (-1..2) index 1, so the grid extends one step further right/down
    return _grid(-1, 2, spacing)


def cross_offsets(spacing: int) -> List[Offset]:
    out: List[Offset] = []
    for d in (-2, -1, 1, 2):
        out.append((d * spacing, 0))
        out.append((0, d * spacing))
    return out


def circle_offsets(spacing: int) -> List[Offset]:
    out: List[Offset] = []
    for angle in CIRCLE_ANGLES:
        rad = math.radians(angle)
        out.append((_round_half_up(spacing * math.cos(rad)), _round_half_up(spacing * math.sin(rad))))
    return out


def diamond_offsets(spacing: int) -> List[Offset]:
    return [(dx * spacing, dy * spacing) for dx, dy in DIAMOND_UNITS]


PATTERNS: Dict[AutoPickMode, Callable[[int], List[Offset]]] = {
    AutoPickMode.GRID_3X3: grid_3x3_offsets,
    AutoPickMode.GRID_4X4: grid_4x4_offsets,
    AutoPickMode.CROSS: cross_offsets,
    AutoPickMode.CIRCLE: circle_offsets,
    AutoPickMode.DIAMOND: diamond_offsets,
}


def pattern_offsets(config: AutoPickConfig) -> List[Offset]:
    if config.spacing < 1:
        raise ValueError(f"spacing must be >= 1, got {config.spacing}")
    return PATTERNS[config.mode](int(config.spacing))


def auto_pick(
    store: RecordSlotStore,
    source: PixelSource,
    config: AutoPickConfig,
    *,
    color_mode: "ColorMode | str" = ColorMode.HEX,
    notify: Notify | None = None,
) -> int:
    """
    以第一条记录为基准点，按 config.mode 生成候选点；
    超出图片范围的点直接丢弃，其余取色后追加到 store。

    Returns the number of records actually stored.
    """
    records = store.records
    if not records:
        emit(notify, Notice(code=NoticeCode.NO_BASE_POINT, msg="请先取一个基准点"))
        return 0

    base = records[0]
    added = 0
    for dx, dy in pattern_offsets(config):
        x = base.x + dx
        y = base.y + dy
        if not in_bounds(source, x, y):
            continue
        c_native = source.get_color(x, y)
        if store.add(x, y, format_color(c_native, color_mode), c_native) is not None:
            added += 1

    log.debug("auto pick %s from (%d,%d): %d stored", config.mode.value, base.x, base.y, added)
    return added
