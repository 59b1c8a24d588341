from __future__ import annotations

import logging
import sys
from datetime import datetime


class ConsoleFormatter(logging.Formatter):
    """[HH:MM:SS] [LEVEL] [logger] message, colored when writing to a tty."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[92m",
        "WARNING": "\033[93m",
        "ERROR": "\033[91m",
        "CRITICAL": "\033[95m",
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = False):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelname
        if self.use_color:
            level = f"{self.COLORS.get(level, '')}{level}{self.RESET}"
        ts = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        out = f"[{ts}] [{level}] [{record.name}] {record.getMessage()}"
        if record.exc_info:
            out += f"\n{self.formatException(record.exc_info)}"
        return out


_THIRD_PARTY_LEVELS = {
    "websockets": logging.WARNING,
    "uvicorn.access": logging.WARNING,
    "PIL": logging.WARNING,
}


def setup_logging(level: str = "INFO") -> None:
    """Install a single console handler on the root logger (idempotent)."""
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ConsoleFormatter(use_color=sys.stdout.isatty()))
    root.addHandler(handler)

    for name, lvl in _THIRD_PARTY_LEVELS.items():
        logging.getLogger(name).setLevel(lvl)
