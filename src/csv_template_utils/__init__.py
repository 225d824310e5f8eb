"""
CSV Template Utils - Validation of uploaded CSV files against column templates.

This package provides:
- A CSV tokenizer with RFC 4180 quoting
- Column templates (required, unique, length, type, pattern rules)
- A validation engine producing a reproducible, itemised report
- A command line wrapper
"""

from ._version import __version__
from .exceptions import CsvTemplateError, ParseError, TemplateError
from .validation import (
    ValidationEngine,
    validate,
    ValidationResult,
    Finding,
    Severity,
    Template,
    ColumnRule,
    DataType,
    PatternRule,
    load_template,
    default_template,
    parse_summary,
    preview,
    read_header,
)


__all__ = [
    # Engine
    'ValidationEngine',
    'validate',
    'ValidationResult',
    'Finding',
    'Severity',
    'parse_summary',

    # Templates
    'Template',
    'ColumnRule',
    'DataType',
    'PatternRule',
    'load_template',
    'default_template',

    # File inspection
    'preview',
    'read_header',

    # Errors
    'CsvTemplateError',
    'ParseError',
    'TemplateError',

    # Version
    '__version__',
]
