"""Machine-readable progress reports for GUIs and other tools.

Report fields:
  I instance number, F file name, T total, P percentage, C current count.
"""

from __future__ import annotations

import logging
import threading

log = logging.getLogger(__name__)


class EncodedProgress:
    """Counts processed bytes or files and logs encoded progress lines."""

    def __init__(self, total: int, instance_no: int, name: str) -> None:
        self.total = total
        self.instance_no = instance_no
        self.name = name
        self.current = 0
        self._percent = 0
        self._lock = threading.Lock()

    def add(self, count: int) -> int:
        """Record ``count`` more processed units and return it."""
        with self._lock:
            self.current += count
            self.report()
        return count

    def write(self, data: bytes) -> int:
        """File-like write: counts the bytes of ``data``."""
        return self.add(len(data))

    def report(self) -> None:
        """Log a progress line whenever the percentage changes."""
        if not self.total:
            return
        percent = int(self.current / self.total * 100)
        if percent == self._percent:
            return
        if self._percent == 0:
            log.info('[I%d:F"%s",T%d,P%d]', self.instance_no, self.name, self.total, percent)
        else:
            log.info("[I%d:P%d,C%d]", self.instance_no, percent, self.current)
        self._percent = percent