import logging
import os
from typing import Optional


def setup_logging(level: Optional[str] = None) -> None:
    """
    - Console only (stderr), so CLI output on stdout stays clean
    - Level from the argument, else WEEKGRID_LOG_LEVEL, else WARNING
    """
    level = (level or os.getenv("WEEKGRID_LOG_LEVEL", "WARNING")).upper()

    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    root = logging.getLogger()
    root.setLevel(level)

    # Prevent duplicate handlers
    if root.handlers:
        return

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))
    root.addHandler(console)
