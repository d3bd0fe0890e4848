# colorpick/app/session.py
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from colorpick.analysis.analyzer import analyze_region
from colorpick.analysis.autopick import auto_pick
from colorpick.events.notices import Notify
from colorpick.logging_context import log_context, new_corr_id
from colorpick.models.analysis import AnalyzeConfig, AutoPickConfig, Region
from colorpick.models.color import ColorMode, PackedColor, format_color
from colorpick.models.record import Record
from colorpick.pick.source import PixelSource, in_bounds
from colorpick.store.record_store import RecordSlotStore

log = logging.getLogger(__name__)

UNSET = -1


class PickSession:
    """
    One picking session:

    - active image (PixelSource), replaceable at any time
    - selected area (two corners, -1 when unset)
    - RecordSlotStore owned by this session only
    - color_mode used for every display string written to the store

    Not thread-safe; all calls are expected from the same thread.
    """

    def __init__(
        self,
        source: Optional[PixelSource] = None,
        *,
        color_mode: "ColorMode | str" = ColorMode.HEX,
        notify: Optional[Notify] = None,
        name: str = "default",
    ) -> None:
        self.name = name
        self._source = source
        self._color_mode = ColorMode.parse(color_mode)
        self._notify = notify
        self._store = RecordSlotStore(notify=notify)
        self._area = (UNSET, UNSET, UNSET, UNSET)

    # ---------- properties ----------

    @property
    def source(self) -> Optional[PixelSource]:
        return self._source

    @property
    def store(self) -> RecordSlotStore:
        return self._store

    @property
    def records(self) -> List[Record]:
        return self._store.records

    @property
    def color_mode(self) -> ColorMode:
        return self._color_mode

    def set_color_mode(self, mode: "ColorMode | str", *, refetch: bool = True) -> None:
        self._color_mode = ColorMode.parse(mode)
        if refetch:
            self.refetch_records()

    def subscribe(self, fn: Callable[[List[Record]], None]) -> Callable[[], None]:
        return self._store.subscribe(fn)

    # ---------- image ----------

    def set_source(self, source: PixelSource, *, refetch: bool = True) -> None:
        """
        切换/替换当前图片；默认重新读取已记录点的颜色。
        """
        self._source = source
        if refetch:
            self.refetch_records()

    # ---------- area ----------

    @property
    def area(self) -> Optional[Region]:
        if not self.has_area:
            return None
        return Region(*self._area)

    @property
    def has_area(self) -> bool:
        return all(v != UNSET for v in self._area)

    def update_area(self, x1: int, y1: int, x2: int, y2: int) -> None:
        self._area = (int(x1), int(y1), int(x2), int(y2))

    def reset_area(self) -> None:
        self._area = (UNSET, UNSET, UNSET, UNSET)

    # ---------- operations ----------

    def analyze_area(self, config: AnalyzeConfig) -> int:
        region = self.area
        if region is None or self._source is None:
            log.info("analyze skipped: area=%s source=%s", region, self._source is not None)
            return 0

        with log_context(corr_id=new_corr_id(), session=self.name, action="analyze"):
            n = analyze_region(region, config, self._source, self._store, color_mode=self._color_mode)
            log.info("analyze %s -> %d points (store=%d)", region.normalized(), n, len(self._store))
            return n

    def auto_pick(self, config: AutoPickConfig) -> int:
        if self._source is None:
            log.info("auto pick skipped: no source")
            return 0

        with log_context(corr_id=new_corr_id(), session=self.name, action="auto_pick"):
            n = auto_pick(
                self._store,
                self._source,
                config,
                color_mode=self._color_mode,
                notify=self._notify,
            )
            log.info("auto pick %s spacing=%d -> %d points", config.mode.value, config.spacing, n)
            return n

    def add_record(
        self,
        x: int,
        y: int,
        c: str,
        c_native: PackedColor,
        key: Optional[str] = None,
    ) -> Optional[Record]:
        return self._store.add(x, y, c, c_native, key)

    def pick_at(self, x: int, y: int, key: Optional[str] = None) -> Optional[Record]:
        """
        Sample (x, y) from the active image and record it. Out-of-bounds
        coordinates are ignored.
        """
        src = self._source
        if src is None or not in_bounds(src, x, y):
            return None
        c_native = src.get_color(x, y)
        return self._store.add(x, y, format_color(c_native, self._color_mode), c_native, key)

    def remove_record(self, key: Optional[str] = None) -> None:
        self._store.remove(key)

    def refetch_records(self) -> int:
        if self._source is None:
            return 0
        with log_context(session=self.name, action="refetch"):
            n = self._store.refetch(self._source, color_mode=self._color_mode)
            log.debug("refetched %d records", n)
            return n
