# colorpick/logging_setup.py
from __future__ import annotations

import logging
import logging.handlers
import queue
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from colorpick.io.json_store import ensure_dir
from colorpick.logging_context import action_var, corr_id_var, session_var

LOG_FORMAT = (
    "%(asctime)s %(levelname)s "
    "%(name)s:%(funcName)s:%(lineno)d "
    "corr=%(corr_id)s session=%(session)s action=%(action)s - %(message)s"
)


class ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        # formatter 引用的字段必须始终存在
        record.corr_id = corr_id_var.get()
        record.session = session_var.get()
        record.action = action_var.get()
        return True


@dataclass
class LoggingRuntime:
    listener: logging.handlers.QueueListener

    def stop(self) -> None:
        self.listener.stop()


def setup_logging(
    *,
    log_dir: Optional[Path] = None,
    level: str = "INFO",
    keep_days: int = 14,
    console: bool = False,
) -> LoggingRuntime:
    """
    Root logger gets a single QueueHandler; a QueueListener thread fans records
    out to a daily-rotated app.log (when log_dir is given) and/or stderr.
    """
    log_q: "queue.Queue[logging.LogRecord]" = queue.Queue(maxsize=20_000)
    formatter = logging.Formatter(fmt=LOG_FORMAT)

    handlers: List[logging.Handler] = []

    if log_dir is not None:
        ensure_dir(log_dir)
        fh = logging.handlers.TimedRotatingFileHandler(
            filename=str(log_dir / "app.log"),
            when="midnight",
            backupCount=int(keep_days),
            encoding="utf-8",
        )
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(formatter)
        handlers.append(fh)

    if console or not handlers:
        ch = logging.StreamHandler(stream=sys.stderr)
        ch.setLevel(logging.DEBUG)
        ch.setFormatter(formatter)
        handlers.append(ch)

    qh = logging.handlers.QueueHandler(log_q)
    qh.setLevel(logging.DEBUG)
    qh.addFilter(ContextFilter())

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(qh)

    listener = logging.handlers.QueueListener(log_q, *handlers, respect_handler_level=True)
    listener.start()

    logging.getLogger(__name__).info("logging initialized (level=%s)", level)
    return LoggingRuntime(listener=listener)
