"""Utility modules for csv-template-utils."""

from .logger import configure_logger, log_finding

__all__ = [
    'configure_logger',
    'log_finding'
]
