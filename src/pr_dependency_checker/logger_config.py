"""Logger configuration using loguru.

This module centralizes all logging configuration and formatting for
PR Dependency Checker.  Log lines report file paths relative to the
installed package root instead of the absolute site-packages path, which
keeps workflow logs short::

    pr_dependency_checker/dependency_resolver.py:88 in lookup - ...
"""

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger

from .config import settings

# When the package is installed this resolves to ``.../site-packages``.  When
# running directly from the repository it resolves to ``.../src``.
_PACKAGE_DIR = Path(__file__).resolve().parent
_PATH_TRIM_BASES = (_PACKAGE_DIR.parent.resolve(),)

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def format_path_for_log(file_path: str) -> str:
    """Return a concise, project-relative path for logging purposes.

    Args:
        file_path: Original absolute file path reported by loguru.

    Returns:
        A trimmed path relative to :data:`_PATH_TRIM_BASES` when possible.  If
        the path is outside our project roots the original path is returned.
    """

    path = Path(file_path)
    try:
        resolved = path.resolve()
    except OSError:
        # Some environments (e.g. zipimport) may not support ``resolve``.
        resolved = path

    for base in _PATH_TRIM_BASES:
        try:
            trimmed = resolved.relative_to(base)
        except ValueError:
            continue
        else:
            return trimmed.as_posix()

    return str(resolved)


def _patch_record(record: Any) -> None:
    """Enrich log records with shortened file paths."""

    record["extra"]["short_path"] = format_path_for_log(record["file"].path)


def setup_logger(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    include_file_info: bool = True,
    stream: Any = None,
) -> None:
    """
    Setup loguru logger with file and line information.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        include_file_info: Whether to include file and line information in logs
        stream: Stream to write console logs to (default: sys.stdout at call time)

    Raises:
        ValueError: If an invalid log level is provided
    """
    # Remove existing handlers and reset any previous patchers
    logger.remove()
    logger.configure(patcher=None)

    level = log_level or settings.log_level

    if level.upper() not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level '{level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}")

    level = level.upper()

    if include_file_info:
        logger.configure(patcher=_patch_record)
        format_string = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | " "<level>{level: <8}</level> | " "{extra[short_path]}:{line} in <cyan>{function}</cyan> - " "<level>{message}</level>"
    else:
        format_string = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | " "<level>{level: <8}</level> | " "<cyan>{name}</cyan> - " "<level>{message}</level>"

    logger.add(
        stream if stream is not None else sys.stdout,
        format=format_string,
        level=level,
        colorize=True,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # File format without colors
        if include_file_info:
            file_format = "{time:YYYY-MM-DD HH:mm:ss.SSS} | " "{level: <8} | " "{extra[short_path]}:{line} in {function} - " "{message}"
        else:
            file_format = "{time:YYYY-MM-DD HH:mm:ss.SSS} | " "{level: <8} | " "{name} - " "{message}"

        logger.add(
            log_file,
            format=file_format,
            level=level,
            rotation="10 MB",
            retention="7 days",
        )


def get_logger(name: str) -> "Logger":
    """
    Get a logger instance with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logger.bind(name=name)


# Initialize logger on module import
setup_logger()
