from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from colorpick.models.common import as_enum

# Packed colors are 32-bit ints laid out as 0xRRGGBBAA.
PackedColor = int


@dataclass(frozen=True)
class ColorRGB:
    r: int = 0
    g: int = 0
    b: int = 0

    @staticmethod
    def from_packed(c: PackedColor) -> "ColorRGB":
        return ColorRGB(
            r=(c >> 24) & 0xFF,
            g=(c >> 16) & 0xFF,
            b=(c >> 8) & 0xFF,
        )

    @property
    def hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


def unpack_rgb(c: PackedColor) -> ColorRGB:
    return ColorRGB.from_packed(c)


def pack_rgba(r: int, g: int, b: int, a: int = 0xFF) -> PackedColor:
    return ((r & 0xFF) << 24) | ((g & 0xFF) << 16) | ((b & 0xFF) << 8) | (a & 0xFF)


def colors_within(a: ColorRGB, b: ColorRGB, tolerance: int) -> bool:
    """
    Per-channel comparison: every |Δr|, |Δg|, |Δb| must be <= tolerance.
    """
    return (
        abs(a.r - b.r) <= tolerance
        and abs(a.g - b.g) <= tolerance
        and abs(a.b - b.b) <= tolerance
    )


class ColorMode(str, Enum):
    HEX = "hex"          # #RRGGBB
    HEX_0X = "hex_0x"    # 0xRRGGBB
    RGB = "rgb"          # rgb(r,g,b)
    NATIVE = "native"    # packed int as decimal

    def __str__(self) -> str:
        return self.value

    @staticmethod
    def parse(v: Any) -> "ColorMode":
        return as_enum(v, ColorMode, ColorMode.HEX)


def format_color(c: PackedColor, mode: "ColorMode | str" = ColorMode.HEX) -> str:
    mode = ColorMode.parse(mode)
    rgb = unpack_rgb(c)
    if mode is ColorMode.HEX_0X:
        return f"0x{rgb.r:02X}{rgb.g:02X}{rgb.b:02X}"
    if mode is ColorMode.RGB:
        return f"rgb({rgb.r},{rgb.g},{rgb.b})"
    if mode is ColorMode.NATIVE:
        return str(int(c))
    return rgb.hex
