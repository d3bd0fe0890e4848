from __future__ import annotations

from pathlib import Path

from colorpick.io.json_store import atomic_write_json, ensure_dir, read_json
from colorpick.models.settings import Settings


class SettingsRepo:
    def __init__(self, app_dir: Path) -> None:
        self._app_dir = app_dir
        ensure_dir(self._app_dir)

    @property
    def path(self) -> Path:
        return self._app_dir / "settings.json"

    def load_or_create(self) -> Settings:
        existed = self.path.exists()
        data = read_json(self.path, default={})
        settings = Settings.from_dict(data)

        # 首次运行或字段被规范化时写回
        if (not existed) or settings.to_dict() != data:
            self.save(settings, backup=existed)
        return settings

    def save(self, settings: Settings, *, backup: bool = True) -> None:
        atomic_write_json(self.path, settings.to_dict(), backup=backup)
