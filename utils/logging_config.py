"""
Logging setup shared by every module.
Modules log through logging.getLogger(__name__); this only wires the root handler.
"""

import logging
import sys

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger with a single console handler.

    Args:
        level: Level name such as "DEBUG" or "INFO". Unknown names fall back to INFO.
    """
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        print(f"Warning: Invalid log level '{level}'. Using INFO.", file=sys.stderr)
        numeric_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT, datefmt=DEFAULT_LOG_DATE_FORMAT))
    root_logger.addHandler(console_handler)

    logging.getLogger(__name__).info("Logging configured at level %s", logging.getLevelName(numeric_level))
