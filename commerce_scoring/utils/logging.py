"""
Logging for the commerce scoring service.

``configure_logging(config)`` runs once per CLI command, inside
``cli._context_or_exit``, before the service context is built.  Modules
only ever call ``logging.getLogger(__name__)``.

What gets logged
----------------
The scoring and forecasting engines log nothing.  Request records come
from ``commerce_scoring.endpoints.base``:

  INFO     ``Endpoint [<name>] request | <field>=<value> ...``
  INFO     ``Endpoint [<name>] completed | status=200``
  WARNING  ``Endpoint [<name>] rejected request: <reason>``   (400)
  ERROR    ``Endpoint [<name>] FAILED`` with the traceback     (500)

Each of these records carries ``endpoint`` and, on the outcome records,
``status_code`` as ``extra=`` fields.  Two INFO lines come from
elsewhere: the recommendation engine logs each version bump on retrain,
and the personalized endpoint logs an unknown algorithm falling back to
the default variant.

With ``json_format = true`` in the ``[logging]`` section, a completed
sentiment request is written as::

    {"ts": "2026-10-19T15:00:00Z", "level": "INFO",
     "logger": "commerce_scoring.endpoints.base",
     "msg": "Endpoint [sentiment] completed | status=200",
     "endpoint": "sentiment", "status_code": 200}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from commerce_scoring.config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Attributes every LogRecord carries; anything else came in through extra=.
_STANDARD_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per record.

    Always present: ``ts`` (UTC, second precision), ``level``, ``logger``
    and ``msg``.  A 500 record adds ``exc`` with the formatted traceback.
    Endpoint records add ``endpoint`` and ``status_code`` from ``extra=``;
    any other non-standard record attribute is copied the same way.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
                LOG_DATE_FORMAT
            ),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        for key, val in record.__dict__.items():
            if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_"):
                payload[key] = val
        return json.dumps(payload, default=str)


def configure_logging(config: "LoggingConfig") -> None:
    """Install stdout (and optionally file) handlers on the root logger.

    Replaces any handlers already on the root logger.  Unknown level names
    fall back to INFO.

    Args:
        config: The ``[logging]`` section of ``AppConfig``.
    """
    level = getattr(logging, config.level.upper(), logging.INFO)
    formatter = (
        JsonFormatter() if config.json_format
        else logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=handlers, force=True)
