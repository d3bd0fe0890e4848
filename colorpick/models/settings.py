from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from colorpick.models.analysis import AnalyzeConfig, AutoPickConfig
from colorpick.models.color import ColorMode
from colorpick.models.common import as_bool, as_dict, as_int, as_str


@dataclass
class DisplayConfig:
    color_mode: ColorMode = ColorMode.HEX

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "DisplayConfig":
        d = as_dict(d)
        return DisplayConfig(color_mode=ColorMode.parse(d.get("color_mode", "hex")))

    def to_dict(self) -> Dict[str, Any]:
        return {"color_mode": self.color_mode.value}


@dataclass
class LoggingConfig:
    level: str = "INFO"
    console: bool = False

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "LoggingConfig":
        d = as_dict(d)
        level = as_str(d.get("level", "INFO"), "INFO").strip().upper() or "INFO"
        return LoggingConfig(
            level=level,
            console=as_bool(d.get("console", False), False),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"level": self.level, "console": bool(self.console)}


@dataclass
class Settings:
    """
    Represents settings.json root object.
    """
    schema_version: int = 1
    display: DisplayConfig = field(default_factory=DisplayConfig)
    analyze: AnalyzeConfig = field(default_factory=AnalyzeConfig)
    auto_pick: AutoPickConfig = field(default_factory=AutoPickConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "Settings":
        d = as_dict(d)
        return Settings(
            schema_version=as_int(d.get("schema_version", 1), 1),
            display=DisplayConfig.from_dict(d.get("display", {}) or {}),
            analyze=AnalyzeConfig.from_dict(d.get("analyze", {}) or {}),
            auto_pick=AutoPickConfig.from_dict(d.get("auto_pick", {}) or {}),
            logging=LoggingConfig.from_dict(d.get("logging", {}) or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": int(self.schema_version),
            "display": self.display.to_dict(),
            "analyze": self.analyze.to_dict(),
            "auto_pick": self.auto_pick.to_dict(),
            "logging": self.logging.to_dict(),
        }
