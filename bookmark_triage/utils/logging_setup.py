"""
Logging configuration for Bookmark Triage.

Console logging goes to stderr so that command output written to stdout
(JSON records, query strings) stays machine-readable.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(verbose: bool = False, log_file: Optional[Union[str, Path]] = None) -> None:
    """
    Set up logging configuration.

    Args:
        verbose: Log at DEBUG instead of WARNING on the console
        log_file: Optional log file path; the file always logs at DEBUG
    """
    log_level = logging.DEBUG if verbose else logging.WARNING

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    handlers = [console_handler]

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handlers.append(file_handler)

    root_level = logging.DEBUG if (verbose or log_file is not None) else logging.WARNING
    logging.basicConfig(level=root_level, handlers=handlers, force=True)

    logger = logging.getLogger(__name__)
    logger.debug(f"Bookmark Triage logging initialised (verbose={verbose})")
    if log_file is not None:
        logger.info(f"Log file: {log_file}")

    # Reduce noise from libraries
    logging.getLogger("bs4").setLevel(logging.WARNING)
