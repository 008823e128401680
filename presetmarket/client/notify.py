"""
Toast notifications.

The UI layer reads ``Toaster.toasts`` to display them; each toast is
also written to the log so that headless runs keep a trace.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

logger = logging.getLogger(__name__)


@dataclass
class Toast:
    level: str  # success, error or info
    message: str


class Toaster:
    def __init__(self):
        self.toasts: List[Toast] = []

    def _push(self, level: str, message: str) -> None:
        self.toasts.append(Toast(level, message))
        if level == "error":
            logger.warning("toast: %s", message)
        else:
            logger.info("toast: %s", message)

    def success(self, message: str) -> None:
        self._push("success", message)

    def error(self, message: str) -> None:
        self._push("error", message)

    def info(self, message: str) -> None:
        self._push("info", message)

    @property
    def last(self) -> Optional[Toast]:
        return self.toasts[-1] if self.toasts else None

    def messages(self, level: Optional[str] = None) -> List[str]:
        return [t.message for t in self.toasts if level is None or t.level == level]
