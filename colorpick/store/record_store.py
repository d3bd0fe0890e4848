# File: colorpick/store/record_store.py
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Protocol

from colorpick.events.notices import Notice, NoticeCode, Notify, emit
from colorpick.models.color import ColorMode, PackedColor, format_color
from colorpick.models.common import as_dict
from colorpick.models.record import Record
from colorpick.pick.source import PixelSource, in_bounds

log = logging.getLogger(__name__)

MAX_RECORDS = 20


class RecordSink(Protocol):
    def add(
        self,
        x: int,
        y: int,
        c: str,
        c_native: PackedColor,
        key: Optional[str] = None,
    ) -> Optional[Record]: ...


class RecordSlotStore:
    """
    有序的取点记录，最多 MAX_RECORDS 条。

    Key numbering is deliberately asymmetric:
    - add() numbers slots 1-based ("1", "2", ...), filling gaps with placeholders;
    - remove(key) renumbers the survivors 0-based ("0", "1", ...).
    Callers rely on both, so neither side is normalized.
    """

    def __init__(self, *, notify: Optional[Notify] = None) -> None:
        self._records: List[Record] = []
        self._notify = notify
        self._listeners: List[Callable[[List[Record]], None]] = []

    # ---------- read side ----------

    @property
    def records(self) -> List[Record]:
        return list(self._records)

    @property
    def capacity(self) -> int:
        return MAX_RECORDS

    def is_full(self) -> bool:
        return len(self._records) >= MAX_RECORDS

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(list(self._records))

    def get(self, key: str) -> Optional[Record]:
        for r in self._records:
            if r.key == key:
                return r
        return None

    # ---------- listeners ----------

    def subscribe(self, fn: Callable[[List[Record]], None]) -> Callable[[], None]:
        self._listeners.append(fn)

        def _unsub() -> None:
            try:
                self._listeners.remove(fn)
            except ValueError:
                pass

        return _unsub

    def _emit_changed(self) -> None:
        snapshot = self.records
        for fn in list(self._listeners):
            try:
                fn(snapshot)
            except Exception:
                log.exception("record listener failed")

    # ---------- mutations ----------

    def add(
        self,
        x: int,
        y: int,
        c: str,
        c_native: PackedColor,
        key: Optional[str] = None,
    ) -> Optional[Record]:
        """
        Returns the stored record, or None when the store is full
        (a CAPACITY_EXCEEDED notice is emitted and nothing changes).
        """
        if self.is_full():
            emit(self._notify, Notice(
                code=NoticeCode.CAPACITY_EXCEEDED,
                msg=f"最多只能记录 {MAX_RECORDS} 个点",
                detail=f"rejected ({x},{y})",
            ))
            return None

        if not key:
            rec = Record(key=str(len(self._records) + 1), x=int(x), y=int(y), c=c, c_native=int(c_native))
            self._records.append(rec)
            self._emit_changed()
            return rec

        index = self._slot_index(key)
        if index >= MAX_RECORDS:
            emit(self._notify, Notice(
                code=NoticeCode.CAPACITY_EXCEEDED,
                msg=f"最多只能记录 {MAX_RECORDS} 个点",
                detail=f"slot {key} is beyond capacity",
            ))
            return None

        # fill missing lower slots so numbering stays dense
        while len(self._records) < index:
            self._records.append(Record.placeholder(str(len(self._records) + 1)))

        rec = Record(key=key, x=int(x), y=int(y), c=c, c_native=int(c_native))
        if index < len(self._records):
            self._records[index] = rec
        else:
            self._records.append(rec)
        self._emit_changed()
        return rec

    @staticmethod
    def _slot_index(key: str) -> int:
        try:
            n = int(key)
        except (TypeError, ValueError) as e:
            raise ValueError(f"slot key must be a positive integer string, got {key!r}") from e
        if n < 1:
            raise ValueError(f"slot key must be >= 1, got {key!r}")
        return n - 1

    def remove(self, key: Optional[str] = None) -> None:
        """
        remove(key): drop matching records, renumber survivors "0".."n-1".
        remove():    clear everything.
        """
        if key:
            survivors = [r for r in self._records if r.key != key]
            self._records = [
                Record(key=str(i), x=r.x, y=r.y, c=r.c, c_native=r.c_native)
                for i, r in enumerate(survivors)
            ]
        else:
            self._records = []
        self._emit_changed()

    def refetch(self, source: PixelSource, *, color_mode: "ColorMode | str" = ColorMode.HEX) -> int:
        """
        Re-read every record's pixel from `source` (e.g. after the image was
        replaced) keeping key and coordinates. Records whose coordinates fall
        outside the new image (placeholders included) are left untouched.

        Returns the number of records updated.
        """
        updated = 0
        for i, r in enumerate(self._records):
            if not in_bounds(source, r.x, r.y):
                continue
            c_native = source.get_color(r.x, r.y)
            self._records[i] = Record(
                key=r.key,
                x=r.x,
                y=r.y,
                c=format_color(c_native, color_mode),
                c_native=c_native,
            )
            updated += 1
        if updated:
            self._emit_changed()
        return updated

    # ---------- snapshot ----------

    def to_dict(self) -> Dict[str, Any]:
        return {"records": [r.to_dict() for r in self._records]}

    def load_dict(self, d: Dict[str, Any]) -> None:
        items = as_dict(d).get("records", [])
        records = [Record.from_dict(x) for x in items if isinstance(x, dict)] if isinstance(items, list) else []
        self._records = records[:MAX_RECORDS]
        self._emit_changed()
