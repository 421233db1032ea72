"""Structured logging for the relay."""

import json
import logging
import sys
from datetime import datetime, timezone

from raid_relay.config import LOG_FORMAT

_COLORS = {
    "DEBUG": "\033[36m",     # cyan
    "INFO": "\033[32m",      # green
    "WARNING": "\033[33m",   # yellow
    "ERROR": "\033[31m",     # red
    "CRITICAL": "\033[1;31m",  # bold red
    "RESET": "\033[0m",
}


class _PrettyFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        color = _COLORS.get(record.levelname, "")
        reset = _COLORS["RESET"]
        return f"{color}[{ts}] [{record.levelname}]{reset} {record.getMessage()}"


class _JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if hasattr(record, "extra_data"):
            entry.update(record.extra_data)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging() -> logging.Logger:
    logger = logging.getLogger("raid_relay")
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        _PrettyFormatter() if LOG_FORMAT == "pretty" else _JSONFormatter()
    )
    logger.addHandler(handler)
    return logger


logger = setup_logging()


def log_report(raid: str, players: list[str], reporter: str) -> None:
    """Log a relayed raid completion as a boxed block."""
    parts = [
        f"\n{'='*60}",
        f"  Raid     : {raid}",
        f"  Players  : {', '.join(players)}",
        f"  Reporter : {reporter}",
        f"{'='*60}",
    ]
    logger.info(
        "\n".join(parts),
        extra={"extra_data": {"raid": raid, "players": players, "reporter": reporter}},
    )
