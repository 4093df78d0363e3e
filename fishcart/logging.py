"""
Logging setup shared by the cart modules.

Importing this module attaches one stdout handler to the root logger
(level from LOG_LEVEL) unless the host application already configured one.
Values that come from storage or user input go through the sanitize
helpers before they reach a log line.
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# CWE-117: keep stored values from forging extra log lines
_LOG_ESCAPES = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": None})


def _configure_root_logger() -> None:
    root = logging.getLogger()
    if root.handlers:
        return

    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.setLevel(level)
    root.addHandler(handler)

    # upstash_redis talks REST through httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """Get the named logger (typically __name__)."""
    return logging.getLogger(name)


def _clip(value, limit: int, marker: str = "") -> str:
    if not value:
        return "N/A"
    text = str(value).translate(_LOG_ESCAPES)
    return text if len(text) <= limit else text[:limit] + marker


def sanitize_id_for_logging(id_value: str | None) -> str:
    """Product id for log lines: escaped, first 8 chars, "N/A" when empty."""
    return _clip(id_value, 8)


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """
    Free text (species, storage paths) for log lines.

    Escaped like ids and cut at max_length with a trailing "..." marker.
    """
    return _clip(value, max_length, "...")
