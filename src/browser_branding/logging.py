"""
Logging configuration and utilities for the branding pipeline
"""
import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import Optional, Dict, Any
import json
import time
from functools import wraps


LOGGER_NAME = 'browser_branding'


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    json_format: bool = False
) -> logging.Logger:
    """
    Set up logging configuration for the branding pipeline.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file to write logs to
        json_format: Use JSON format for structured logging

    Returns:
        Configured logger instance
    """
    level = level.upper()

    if json_format:
        formatter: Dict[str, Any] = {'()': JsonFormatter}
    else:
        formatter = {'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s'}

    logging_config: Dict[str, Any] = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': formatter,
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'level': level,
                'formatter': 'standard',
                'stream': sys.stderr,
            },
        },
        'loggers': {
            LOGGER_NAME: {
                'level': level,
                'handlers': ['console'],
                'propagate': False,
            },
        },
    }

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logging_config['handlers']['file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'level': level,
            'formatter': 'standard',
            'filename': str(log_file),
            'maxBytes': 10 * 1024 * 1024,  # 10MB
            'backupCount': 5,
        }
        logging_config['loggers'][LOGGER_NAME]['handlers'].append('file')

    logging.config.dictConfig(logging_config)

    logger = logging.getLogger(LOGGER_NAME)
    logger.debug(f"Logging initialized with level: {level}")
    if log_file:
        logger.debug(f"Log file: {log_file}")

    return logger


class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    RESERVED = frozenset([
        'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
        'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
        'thread', 'threadName', 'processName', 'process', 'getMessage',
        'exc_info', 'exc_text', 'stack_info', 'taskName', 'message',
    ])

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        # Fields passed through ``extra=``
        for key, value in record.__dict__.items():
            if key not in self.RESERVED:
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


def timed_operation(operation_name: str = None):
    """Decorator to time function execution."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            name = operation_name or f"{func.__module__}.{func.__name__}"
            logger = logging.getLogger(f'{LOGGER_NAME}.performance')

            start_time = time.time()
            try:
                result = func(*args, **kwargs)
                duration = time.time() - start_time
                logger.info(f"Operation '{name}' completed", extra={
                    'operation': name,
                    'duration_ms': round(duration * 1000, 2),
                    'success': True
                })
                return result
            except Exception as e:
                duration = time.time() - start_time
                logger.error(f"Operation '{name}' failed", extra={
                    'operation': name,
                    'duration_ms': round(duration * 1000, 2),
                    'success': False,
                    'error': str(e),
                    'error_type': type(e).__name__
                })
                raise
        return wrapper
    return decorator


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Get a configured logger instance."""
    return logging.getLogger(name)


def configure_logging_from_env(default_level: str = 'INFO') -> logging.Logger:
    """Configure logging from environment variables."""
    level = os.getenv('BROWSER_BRANDING_LOG_LEVEL', default_level).upper()
    log_file = os.getenv('BROWSER_BRANDING_LOG_FILE')
    json_format = os.getenv('BROWSER_BRANDING_LOG_JSON', 'false').lower() == 'true'

    return setup_logging(
        level=level,
        log_file=Path(log_file) if log_file else None,
        json_format=json_format
    )
