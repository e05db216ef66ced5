import logging
import os
import re
import sys
from typing import Optional


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class SensitiveDataFilter(logging.Filter):
    """Filter to mask credentials that may leak into request logs."""

    PATTERNS = [
        (re.compile(r'(token["\']?\s*[:=]\s*["\']?)([^"\'}\s,&]+)', re.IGNORECASE), r'\1***MASKED***'),
        (re.compile(r'(bearer\s+)([^\s,}\'\"]+)', re.IGNORECASE), r'\1***MASKED***'),
        (re.compile(r'(authorization["\']?\s*[:=]\s*["\']?)([^"\'}\s,]+)', re.IGNORECASE), r'\1***MASKED***'),
        (re.compile(r'(api[_-]?key["\']?\s*[:=]\s*["\']?)([^"\'}\s,&]+)', re.IGNORECASE), r'\1***MASKED***'),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Mask sensitive data in the log message and its arguments."""
        if isinstance(record.msg, str):
            record.msg = self._mask_value(record.msg)

        if record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._mask_value(v) for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(self._mask_value(arg) for arg in record.args)

        return True

    def _mask_value(self, value):
        if isinstance(value, str):
            for pattern, replacement in self.PATTERNS:
                value = pattern.sub(replacement, value)
        return value


def setup_logging(component_name: str, log_level: Optional[str] = None) -> logging.Logger:
    """
    Set up logging for a top-level component.

    Handlers are attached to the component logger and to the ``vault`` core
    logger so that records from the core packages reach the same stream.

    Args:
        component_name: Name of the component (e.g., 'cli')
        log_level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL env var or INFO

    Returns:
        Configured component logger
    """
    if log_level is None:
        log_level = os.getenv('LOG_LEVEL', 'INFO')

    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(component_name)
    for name in {component_name, 'vault'}:
        _configure_logger(logging.getLogger(name), level)

    return logger


def _configure_logger(logger: logging.Logger, level: int) -> None:
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(SensitiveDataFilter())

    logger.addHandler(handler)
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
