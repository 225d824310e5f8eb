"""Logging utilities for csv-template-utils."""

import logging
from typing import Optional


def configure_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Configure a logger with consistent formatting across all environments.

    Args:
        name (str): Name for the logger, typically __name__
        level (int): Logging level to apply to the logger

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name)

    # Keep a level chosen by the application (e.g. the CLI)
    if logger.level == logging.NOTSET:
        logger.setLevel(level)

    # Hosted notebooks and web workers install root handlers; reuse them
    if logging.getLogger().handlers:
        logger.propagate = True

        return logger

    if not logger.handlers:
        formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


class LoggerUtility:
    """Utility class for consistent logging across modules."""

    def __init__(self, name: str):
        """Initialize logger with module name."""
        self.logger = configure_logger(name)

    def log_finding(
        self,
        severity: str,
        message: str,
        column: str,
        row: Optional[int] = None,
        notes: Optional[str] = None
    ) -> None:
        """
        Log a validation finding in a consistent format.

        Findings are logged at DEBUG level: a large file can produce
        thousands of them and they are all returned in the result anyway.

        Args:
            severity: Severity level (error, warning)
            message: The main message to log
            column: Column the finding refers to
            row: Data row number, None for layout findings
            notes: Rule documentation carried on the finding
        """
        if not self.logger.isEnabledFor(logging.DEBUG):
            return

        location = f'column: {column}' if row is None else f'row: {row}, column: {column}'
        self.logger.debug(f'[{severity.upper()}] {message} ({location})')

        if notes:
            self.logger.debug(f'Notes: {notes}')


default_logger = LoggerUtility('csv_template_utils.findings')
log_finding = default_logger.log_finding
