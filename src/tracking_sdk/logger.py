from __future__ import annotations

import logging
import threading
from typing import List

_stdlib_logger = logging.getLogger("tracking_sdk")


class DiagnosticLog:
    """Keeps a local trace of tracker activity and mirrors it to ``logging``."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._entries: List[str] = []
        self._lock = threading.Lock()
        self._logger = logger or _stdlib_logger

    def log(self, channel: str, message: str, *, level: int = logging.INFO) -> None:
        entry = f"> [{channel}] {message}"
        with self._lock:
            self._entries.append(entry)
        self._logger.log(level, entry)

    def debug(self, channel: str, message: str) -> None:
        self.log(channel, message, level=logging.DEBUG)

    def warning(self, channel: str, message: str) -> None:
        self.log(channel, message, level=logging.WARNING)

    @property
    def entries(self) -> List[str]:
        with self._lock:
            return list(self._entries)
