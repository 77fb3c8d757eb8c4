"""
Logging for the network manager.

Modules log through get_logger(); nothing is printed until an application
calls setup_logging().
"""
import logging
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "network_manager"

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_level: Optional[str] = None, log_file: Optional[Path] = None) -> logging.Logger:
    """
    Opt in to network manager log output.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR; LOG_LEVEL from config when omitted
        log_file: Also write records to this file

    Returns:
        The package root logger
    """
    if log_level is None:
        from network_manager.core.config import LOG_LEVEL
        log_level = LOG_LEVEL

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, log_level.upper()))
    if logger.handlers:
        return logger

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    formatter = logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the package root; module names are used as is."""
    if not name:
        return logging.getLogger(ROOT_LOGGER)
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
