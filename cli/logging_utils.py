"""
Logging setup for the snow mask runner.

Console output always; a log file as well when a log directory is given.
"""

import logging
import os
import sys
from pathlib import Path

LOG_LEVEL_ENV = 'SNOWMASK_LOG_LEVEL'
CONSOLE_HANDLER = 'snowmask-console'
FILE_HANDLER = 'snowmask-file'


def setup_logger(
    name: str = None,
    log_dir: str = None,
    level: int = None,
    console: bool = True,
    overwrite: bool = True
) -> logging.Logger:
    """
    Configure logger with console and/or file handlers.

    Args:
        name: Logger name. None configures the root logger, so every module
              logger (logging.getLogger(__name__)) is captured.
        log_dir: Directory for the log file (None = no file logging)
        level: Logging level. If None, reads SNOWMASK_LOG_LEVEL or defaults to INFO
        console: Enable console output
        overwrite: If True, overwrite log file each run. If False, append.

    Returns:
        Configured logging.Logger instance
    """
    if level is None:
        env_level = os.environ.get(LOG_LEVEL_ENV, 'INFO').upper()
        level = getattr(logging, env_level, logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent duplicate handlers on repeated calls; leave foreign handlers alone
    for handler in list(logger.handlers):
        if handler.get_name() in (CONSOLE_HANDLER, FILE_HANDLER):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.set_name(CONSOLE_HANDLER)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        log_file = log_path / "snowmask.log"
        file_handler = logging.FileHandler(log_file, mode='w' if overwrite else 'a')
        file_handler.set_name(FILE_HANDLER)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
