"""
Root logging setup for the `lrcf` CLI.

Logs always go to stderr: stdout carries lyric text and JSON results that
callers pipe into other tools.
"""

import json as _json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

# Record attributes copied into JSON lines when a call passes them via `extra=`
CONTEXT_FIELDS = ("lyric_id", "catalog_key", "provider")

# Chatty third-party loggers, only shown with --verbose
_LIBRARY_LOGGERS = ("aiohttp", "asyncio")


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }
        for key in CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return _json.dumps(payload, ensure_ascii=False)


def setup_logging(
    *, json_logs: bool = False, verbose: bool | None = None, quiet: bool | None = None
) -> None:
    """Configure root logging.

    verbose switches to DEBUG, which is where dropped candidates and swallowed
    transport errors are reported. quiet raises the floor to WARNING and wins
    over verbose. aiohttp and asyncio stay at WARNING unless verbose is set.
    """
    level = logging.DEBUG if verbose else logging.INFO
    if quiet:
        level = logging.WARNING

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    for name in _LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET if verbose else logging.WARNING)

    handler = logging.StreamHandler(stream=sys.stderr)
    if json_logs:
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s"))
    root.addHandler(handler)
