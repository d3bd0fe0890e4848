# tests/conftest.py
from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import pytest

# 项目根目录 = tests 上一层目录
ROOT = Path(__file__).resolve().parents[1]

# 确保项目根在 sys.path 中，方便 `import colorpick` 等绝对导入
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from colorpick.events.notices import Notice  # noqa: E402


class NoticeRecorder:
    """
    notify 回调替身：记录所有 Notice。
    """
    def __init__(self) -> None:
        self.notices: List[Notice] = []

    def __call__(self, notice: Notice) -> None:
        self.notices.append(notice)

    def codes(self) -> List[str]:
        return [n.code.value for n in self.notices]


@pytest.fixture
def notices() -> NoticeRecorder:
    return NoticeRecorder()
