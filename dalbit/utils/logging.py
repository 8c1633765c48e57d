"""Shared logging configuration."""
import os
import sys
import traceback
from typing import Optional

from aws_lambda_powertools import Logger
from pydantic import ValidationError

def format_exception(exc_info):
    """Format exception info into a single line."""
    if exc_info is True:
        exc_info = sys.exc_info()

    if exc_info and isinstance(exc_info, tuple) and len(exc_info) == 3:
        if exc_info[0] is None:
            return None
        trace = ''.join(traceback.format_exception(*exc_info))
        return trace.replace('\n', ' | ').strip()
    return None

def format_validation_errors(error: ValidationError) -> str:
    """
    Summarize pydantic validation errors as ``field: message`` pairs.

    Example:
        severity: Input should be less than or equal to 5; date: Input should be a valid date
    """
    parts = []
    for detail in error.errors():
        field = '.'.join(str(loc) for loc in detail.get('loc', ())) or 'record'
        parts.append(f"{field}: {detail.get('msg', 'invalid')}")
    return '; '.join(parts)

class SingleLineLogger(Logger):
    """Logger that keeps tracebacks on one line so each log event is one record."""

    def exception(self, message, *args, **kwargs):
        exc_info = kwargs.pop('exc_info', True)
        extra = kwargs.pop('extra', None) or {}
        extra['exception'] = format_exception(exc_info)
        kwargs['exc_info'] = False
        kwargs['extra'] = extra
        super().exception(message, *args, **kwargs)

def create_logger(service: Optional[str] = None) -> SingleLineLogger:
    """
    Build a package logger from the environment.

    ``POWERTOOLS_SERVICE_NAME`` names the service unless one is given,
    ``LOG_LEVEL`` sets the level and ``DALBIT_STAGE`` is attached to every
    record as ``stage``.
    """
    new_logger = SingleLineLogger(
        service=service or os.environ.get('POWERTOOLS_SERVICE_NAME', 'dalbit'),
        level=os.environ.get('LOG_LEVEL', 'INFO'),
        use_rfc3339=True
    )
    new_logger.append_keys(stage=os.environ.get('DALBIT_STAGE', 'dev'))
    return new_logger

logger = create_logger()

def log_exception(logger, message, exc_info=None, **kwargs):
    """Log the active (or given) exception at error level on a single line."""
    extra = kwargs.pop('extra', None) or {}
    extra['exception'] = format_exception(exc_info if exc_info else sys.exc_info())
    logger.error(message, extra=extra, **kwargs)

def log_rejected_record(logger, model_name: str, error: ValidationError):
    """Log a record that failed validation, with one entry per failing field."""
    log_exception(
        logger,
        f"Rejected {model_name} record",
        extra={
            'model': model_name,
            'error_count': error.error_count(),
            'errors': format_validation_errors(error)
        }
    )
