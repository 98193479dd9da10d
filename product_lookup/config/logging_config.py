# product_lookup/config/logging_config.py

"""Per-run timestamped logging configuration for product_lookup.

Every CLI invocation writes to its own ``logs/lookup_<timestamp>.log``.
All ``product_lookup.*`` loggers (resolver, probes, inventory store)
share that file handler, so a single scan can be followed from the
local lookup through each catalog probe.

Probes run on worker threads via ``asyncio.to_thread``; the detailed
format therefore carries the thread name next to the module path.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from product_lookup.config.settings import Settings

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(threadName)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOGGER_NAME = "product_lookup"


def setup_logging(
    logs_dir: Path | None = None,
    console_level: int = logging.WARNING,
) -> Path:
    """Attach file and console handlers to the ``product_lookup`` logger.

    Args:
        logs_dir: Directory for the run log. Defaults to
            ``Settings.LOGS_DIR``.
        console_level: Threshold for the stderr handler. The CLI
            lowers this to INFO with ``--verbose``.

    Returns:
        The path of the log file for this run.
    """
    target_dir = logs_dir or Settings.LOGS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = target_dir / f"lookup_{timestamp}.log"

    root_logger = logging.getLogger(LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)

    # Repeated calls (tests, multiple CLI entry points) reuse handlers
    if root_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    root_logger.info("Logging initialised, log file: %s", log_file)

    return log_file
