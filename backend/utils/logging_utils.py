"""
Logging utilities for the calendar proxy.
Provides logger setup and a decorator that times outbound provider calls.
"""
import logging
import time
import functools
from pathlib import Path
from typing import Any, Callable, Optional, Union


# Configure logging format
LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(
    name: Optional[str],
    log_file: Optional[Union[str, Path]] = None,
    level: Union[int, str] = logging.INFO
) -> logging.Logger:
    """
    Set up a logger with a console handler and an optional file handler.

    Args:
        name: Logger name, or None for the root logger
        log_file: Optional log file path. Parent directories are created.
        level: Logging level (default INFO)

    Returns:
        Configured logger instance
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers if logger already exists
    if logger.handlers:
        return logger

    # Console handler - logs at the configured level
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(console_handler)

    # File handler - logs everything to file
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        logger.addHandler(file_handler)

    return logger


provider_logger = logging.getLogger("calendars.provider")


def log_provider_call(operation: str, logger: Optional[logging.Logger] = None):
    """
    Log start, duration and failure of a call to the calendar provider.

    Usage:
        @log_provider_call("events.list")
        def list_events(service, ...):
            ...

    Args:
        operation: Name of the provider operation being executed
        logger: Optional logger instance. If None, uses provider_logger
    """
    if logger is None:
        logger = provider_logger

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            logger.debug(f"Calling provider: {operation}")
            start_time = time.time()

            try:
                result = func(*args, **kwargs)

                execution_time = time.time() - start_time
                logger.info(f"Provider {operation} completed in {execution_time:.3f}s")

                return result

            except Exception as e:
                execution_time = time.time() - start_time
                logger.error(f"Provider {operation} failed after {execution_time:.3f}s: {str(e)}")
                raise

        return wrapper
    return decorator
