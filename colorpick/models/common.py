from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Type, TypeVar

E = TypeVar("E", bound=Enum)


def as_dict(v: Any) -> Dict[str, Any]:
    return v if isinstance(v, dict) else {}


def as_str(v: Any, default: str = "") -> str:
    if v is None:
        return default
    if isinstance(v, str):
        return v
    return str(v)


def as_int(v: Any, default: int = 0) -> int:
    if v is None:
        return default
    try:
        return int(v)
    except (TypeError, ValueError):
        return default


def as_bool(v: Any, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, int):
        return v != 0
    if isinstance(v, str):
        s = v.strip().lower()
        if s in ("1", "true", "yes", "on"):
            return True
        if s in ("0", "false", "no", "off"):
            return False
    return default


def clamp_int(v: int, lo: int, hi: int) -> int:
    if v < lo:
        return lo
    if v > hi:
        return hi
    return v


def as_enum(v: Any, enum_cls: Type[E], default: E) -> E:
    """
    按 value 或 name（不区分大小写）解析枚举；无法识别时返回 default。
    """
    if isinstance(v, enum_cls):
        return v
    s = as_str(v).strip().lower()
    if not s:
        return default
    for member in enum_cls:
        if str(member.value).lower() == s or member.name.lower() == s:
            return member
    return default
