from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from colorpick.models.common import as_dict, as_int, as_str

PLACEHOLDER_COORD = -1
PLACEHOLDER_NATIVE = -1
PLACEHOLDER_COLOR = "-1"


@dataclass(frozen=True)
class Record:
    """
    A recorded sample point.

    - key: slot key (string-encoded index)
    - c: display string produced by format_color
    - c_native: packed 0xRRGGBBAA color read from the image
    """
    key: str
    x: int
    y: int
    c: str
    c_native: int

    @staticmethod
    def placeholder(key: str) -> "Record":
        return Record(
            key=key,
            x=PLACEHOLDER_COORD,
            y=PLACEHOLDER_COORD,
            c=PLACEHOLDER_COLOR,
            c_native=PLACEHOLDER_NATIVE,
        )

    @property
    def is_placeholder(self) -> bool:
        return self.x == PLACEHOLDER_COORD and self.y == PLACEHOLDER_COORD

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "Record":
        d = as_dict(d)
        return Record(
            key=as_str(d.get("key", "")),
            x=as_int(d.get("x", PLACEHOLDER_COORD), PLACEHOLDER_COORD),
            y=as_int(d.get("y", PLACEHOLDER_COORD), PLACEHOLDER_COORD),
            c=as_str(d.get("c", PLACEHOLDER_COLOR), PLACEHOLDER_COLOR),
            c_native=as_int(d.get("c_native", PLACEHOLDER_NATIVE), PLACEHOLDER_NATIVE),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "x": int(self.x),
            "y": int(self.y),
            "c": self.c,
            "c_native": int(self.c_native),
        }
