# File: colorpick/events/notices.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

log = logging.getLogger(__name__)


class NoticeCode(str, Enum):
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    NO_BASE_POINT = "NO_BASE_POINT"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Notice:
    """
    Non-fatal condition reported back to the caller. The operation that
    produced it has already degraded (nothing mutated / fewer points).
    """
    code: NoticeCode
    msg: str
    detail: str = ""


Notify = Callable[[Notice], None]


def emit(notify: Optional[Notify], notice: Notice) -> None:
    log.warning("%s: %s %s", notice.code.value, notice.msg, notice.detail)
    if notify is None:
        return
    try:
        notify(notice)
    except Exception:
        log.exception("notice listener failed (code=%s)", notice.code.value)
