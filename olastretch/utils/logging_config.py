# olastretch/utils/logging_config.py

"""
Configures the logging system for olastretch based on loaded settings.
Uses Rich for enhanced console logging.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

from olastretch.config import OlaStretchConfig
from olastretch.version import __version__

# --- Constants ---
# Map verbosity levels (from CLI flags) to logging levels; 0 defers to the config
VERBOSITY_MAP = {
    1: logging.INFO,     # -v (verbose)
    2: logging.DEBUG,    # -vv (debug)
    -1: logging.CRITICAL + 10 # -q (quiet/silent)
}

PACKAGE_LOGGER = "olastretch"

# --- Setup Function ---

def setup_logging(config: OlaStretchConfig, verbosity: int = 0) -> Optional[Path]:
    """
    Configures the package logger based on the configuration and verbosity level.

    Args:
        config: The loaded OlaStretchConfig object.
        verbosity: Console verbosity (0 normal, 1 verbose, 2+ debug, -1 quiet).

    Returns:
        Path of the log file, or None when file logging is disabled or failed.
    """
    log_cfg = config.logging

    if verbosity > 2:
        verbosity = 2
    console_level = VERBOSITY_MAP.get(verbosity, logging.getLevelName(log_cfg.log_level_console))

    root_logger = logging.getLogger(PACKAGE_LOGGER)
    root_logger.setLevel(logging.DEBUG)  # Handlers filter individually
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    # --- Console Handler (Rich) ---
    if console_level <= logging.CRITICAL:
        console_handler = RichHandler(
            level=console_level,
            show_time=False,
            show_level=True,
            show_path=False,
            rich_tracebacks=True,
            markup=False,
        )
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    # --- File Handler ---
    log_filepath: Optional[Path] = None
    if log_cfg.log_file_enabled:
        try:
            log_dir = config.paths.log_directory
            log_dir.mkdir(parents=True, exist_ok=True)
            log_filepath = log_dir / log_cfg.log_filename_template.format(timestamp=datetime.now())

            file_handler = logging.FileHandler(log_filepath, encoding='utf-8')
            file_handler.setLevel(log_cfg.log_level_file)
            file_handler.setFormatter(logging.Formatter(log_cfg.log_format))
            root_logger.addHandler(file_handler)

            file_logger = logging.getLogger(f"{PACKAGE_LOGGER}.init")
            file_logger.info(f"--- olastretch v{__version__} Log Start ---")
            file_logger.debug(f"Full configuration loaded: {config.model_dump()}")
        except (OSError, ValueError, KeyError) as e:
            logging.getLogger(f"{PACKAGE_LOGGER}.error").error(f"Failed to configure file logging: {e}", exc_info=True)
            log_filepath = None

    init_logger = logging.getLogger(f"{PACKAGE_LOGGER}.init")
    init_logger.debug(f"olastretch v{__version__} initialized; console level {logging.getLevelName(console_level)}.")
    if log_filepath is not None:
        init_logger.info(f"Logging to file: {log_filepath}")
    return log_filepath
