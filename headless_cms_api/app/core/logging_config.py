"""
Logging configuration for the CMS API.

``setup_logging`` attaches a console handler and, when ``LOG_FILE`` is
set, a file handler to the root logger.  The file handler has its own
threshold (``LOG_FILE_LEVEL``) so that a debug trail of token purges
and rejected requests can be kept on disk while the console stays at
``INFO``.  Handlers installed here are tagged, which lets repeated
``create_app`` calls (one per test) leave an already configured root
logger alone without mistaking foreign handlers, such as pytest's
capture handler, for our own.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_TAG = "_headless_cms_handler"


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def _tagged(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    setattr(handler, _HANDLER_TAG, True)
    return handler


def setup_logging(level: str = "INFO", logfile: Optional[str] = None, file_level: str = "DEBUG") -> None:
    """Configure the root logger once.

    Parameters
    ----------
    level : str
        Console threshold, e.g. ``"INFO"``.  Case insensitive.
    logfile : Optional[str]
        Path of a log file, resolved against the working directory.
        No file handler is added when omitted.
    file_level : str
        Threshold of the file handler.
    """
    root = logging.getLogger()
    if any(getattr(handler, _HANDLER_TAG, False) for handler in root.handlers):
        return

    console_level = _level(level)
    handlers = [_tagged(logging.StreamHandler(), console_level)]
    if logfile:
        log_path = Path(logfile).resolve()
        handlers.append(_tagged(logging.FileHandler(log_path, encoding="utf-8"), _level(file_level)))

    # The root level must let through the most verbose handler's records.
    root.setLevel(min(handler.level for handler in handlers))
    for handler in handlers:
        root.addHandler(handler)
