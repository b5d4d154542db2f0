from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler


LOGGER_NAME = "componenthost"


def setup_logging(log_dir: str = "logs", *, filename: str = "componenthost.log", console_level: int = logging.WARNING) -> logging.Logger:
    """
    Rotating text log for everything at INFO and above; the console only shows
    `console_level` and above so command output stays readable.
    """
    os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)
    logger.propagate = False

    if not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        h = RotatingFileHandler(os.path.join(log_dir, filename), maxBytes=1_000_000, backupCount=5, encoding="utf-8")
        h.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"))
        logger.addHandler(h)

    # foreign StreamHandler subclasses (capture handlers and the like) are not ours
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        sh = logging.StreamHandler()
        sh.setLevel(console_level)
        sh.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(sh)

    return logger
