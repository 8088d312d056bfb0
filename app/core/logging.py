"""JSON logging for the service process."""
from __future__ import annotations

import logging

from pythonjsonlogger import jsonlogger

# Chatty client libraries: one INFO line per outbound request.
QUIET_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str = "INFO") -> None:
    """Route every logger through a single JSON handler on stderr.

    Safe to call more than once; earlier handlers on the root logger are replaced.
    """

    handler = logging.StreamHandler()
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"asctime": "ts", "levelname": "level", "name": "logger"},
        )
    )
    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["setup_logging"]
