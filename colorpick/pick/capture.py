from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

import mss

from colorpick.pick.source import FramePixelSource

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rect:
    left: int
    top: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height

    def intersect(self, other: "Rect") -> "Rect":
        left = max(self.left, other.left)
        top = max(self.top, other.top)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        return Rect(left=left, top=top, width=max(0, right - left), height=max(0, bottom - top))


class ScreenCapture:
    """
    Screen grabs via mss, one mss.mss() per thread (threading.local).

    The result of a grab is a FramePixelSource, i.e. a snapshot that the
    analysis code can read without touching the screen again.
    """

    def __init__(self) -> None:
        self._local = threading.local()

    def _get_sct(self) -> mss.base.MSSBase:
        sct = getattr(self._local, "sct", None)
        if sct is None:
            sct = mss.mss()
            self._local.sct = sct
        return sct

    def close_current_thread(self) -> None:
        sct = getattr(self._local, "sct", None)
        if sct is not None:
            sct.close()
            self._local.sct = None

    def get_monitor_rect(self, monitor_key: str = "all") -> Rect:
        """
        monitor_key: "all" | "primary" | "monitor_N"; unknown keys fall back to "all".
        """
        monitors = self._get_sct().monitors
        key = (monitor_key or "all").strip().lower()

        idx = 0
        if key == "primary":
            idx = 1 if len(monitors) > 1 else 0
        elif key.startswith("monitor_"):
            try:
                idx = max(0, int(key.split("_", 1)[1]))
            except ValueError:
                idx = 0
        if idx >= len(monitors):
            idx = 0

        m = monitors[idx]
        return Rect(left=int(m["left"]), top=int(m["top"]), width=int(m["width"]), height=int(m["height"]))

    def grab_source(self, rect: Rect, *, monitor_key: str = "all") -> FramePixelSource:
        """
        截取 rect（虚拟屏绝对坐标），先裁剪到 monitor 范围内。
        """
        clipped = rect.intersect(self.get_monitor_rect(monitor_key))
        if clipped.width <= 0 or clipped.height <= 0:
            raise ValueError(f"capture rect outside monitor {monitor_key}: {rect}")

        box = {"left": clipped.left, "top": clipped.top, "width": clipped.width, "height": clipped.height}
        img = self._get_sct().grab(box)
        log.debug("grabbed %dx%d at (%d,%d)", img.width, img.height, clipped.left, clipped.top)
        return FramePixelSource(width=int(img.width), height=int(img.height), raw=bytes(img.raw))
