# -----------------------------------------------------------------------------
# relay/utils/logger.py — Shared logger; `extra` fields rendered as key=value
# -----------------------------------------------------------------------------

import logging
import os
import sys

# Attributes every LogRecord has; anything else came in through `extra`.
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class KeyValueFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = {k: v for k, v in vars(record).items() if k not in _RESERVED}
        if extras:
            line += " " + " ".join(f"{k}={v}" for k, v in extras.items())
        return line


def _build_logger() -> logging.Logger:
    log = logging.getLogger("relay")
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(KeyValueFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        log.addHandler(handler)
    log.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
    log.propagate = False
    return log


logger = _build_logger()
