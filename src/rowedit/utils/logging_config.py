"""
Logging configuration for the editor.

The editor owns the terminal while it runs, so log records go to a rotating
file by default. Console output to stderr is opt-in and only useful when the
editor is driven without curses (tests, scripts).

Globals:
    logger: Main application logger ("rowedit").
    KEY_LOGGER: Logger for raw key-press traces ("rowedit.keyevents"),
        enabled by setting ROWEDIT_KEYTRACE=1.
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Dict, Optional

logger = logging.getLogger("rowedit")
KEY_LOGGER = logging.getLogger("rowedit.keyevents")

DEFAULT_LOG_FILE = "rowedit.log"


def setup_logging(config: Optional[Dict[str, Any]] = None) -> None:
    """
    Configure application-wide logging handlers and levels.

    Only the ``["logging"]`` section of ``config`` is consulted:

    - ``log_file`` (str): Path of the rotating log file. Default: ``rowedit.log``.
    - ``file_level`` (str): Level for the log file. Default: ``"INFO"``.
    - ``log_to_console`` (bool): Add a stderr handler. Default: ``False``.
    - ``console_level`` (str): Level for the stderr handler. Default: ``"WARNING"``.

    Existing handlers on the root logger are replaced, so calling this more
    than once does not duplicate records. Failures to open the log file are
    reported on stderr and logging continues without the file handler.

    Args:
        config: Application configuration dictionary
    """

    if config is None:
        config = {}

    logging_config = config.get("logging", {})
    log_filename = logging_config.get("log_file", DEFAULT_LOG_FILE)
    file_level = getattr(logging, str(logging_config.get("file_level", "INFO")).upper(), logging.INFO)

    log_dir = os.path.dirname(log_filename)
    if log_dir and not os.path.exists(log_dir):
        try:
            os.makedirs(log_dir)
        except OSError as e:
            print(f"Error creating log directory '{log_dir}': {e}", file=sys.stderr)
            log_filename = os.path.join(tempfile.gettempdir(), DEFAULT_LOG_FILE)

    file_handler = None
    try:
        file_handler = logging.handlers.RotatingFileHandler(
            log_filename, maxBytes=1024 * 1024, backupCount=3, encoding="utf-8"
        )
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(levelname)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        ))
        file_handler.setLevel(file_level)
    except OSError as e:
        print(f"Error setting up file logger for '{log_filename}': {e}", file=sys.stderr)

    console_handler = None
    if logging_config.get("log_to_console", False):
        console_level = getattr(
            logging, str(logging_config.get("console_level", "WARNING")).upper(), logging.WARNING
        )
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter("%(levelname)-8s - %(name)-12s - %(message)s"))
        console_handler.setLevel(console_level)

    root_logger = logging.getLogger()
    root_logger.handlers = []
    if file_handler:
        root_logger.addHandler(file_handler)
    if console_handler:
        root_logger.addHandler(console_handler)
    root_logger.setLevel(file_level)

    KEY_LOGGER.propagate = False
    KEY_LOGGER.setLevel(logging.DEBUG)
    KEY_LOGGER.handlers = []

    if os.environ.get("ROWEDIT_KEYTRACE", "").lower() in {"1", "true", "yes"} and file_handler:
        KEY_LOGGER.disabled = False
        KEY_LOGGER.addHandler(file_handler)
        logger.info("Key event tracing enabled.")
    else:
        KEY_LOGGER.addHandler(logging.NullHandler())
        KEY_LOGGER.disabled = True

    logger.info("Logging setup complete. Level: %s.", logging.getLevelName(root_logger.level))
