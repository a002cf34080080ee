"""
logging_utils.py - Logging setup with icons

Message-only format; the level is shown as an icon prefix instead of a name.
"""

import logging

from coursesite.icons import DEBUG, INFO, WARNING, ERROR, CRITICAL


# Message-only; no per-line timestamps
LOG_FORMAT = "%(message)s"

LEVEL_ICONS = {
    logging.DEBUG: DEBUG,
    logging.INFO: INFO,
    logging.WARNING: WARNING,
    logging.ERROR: ERROR,
    logging.CRITICAL: CRITICAL,
}


class IconLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        icon = LEVEL_ICONS.get(record.levelno, INFO)
        base = super().format(record)
        return f"{icon} {base}"


def setup_logging(verbosity: int = 0) -> None:
    """
    Install a single icon-formatted stream handler on the root logger.

    Args:
        verbosity: 0 shows warnings and errors, 1 adds info, 2+ adds debug
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler()
    formatter = IconLogFormatter(LOG_FORMAT)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(handler)
