"""
Validation of CSV files against column templates.
"""

from .validation_engine import ValidationEngine, validate
from .validation_result import (
    Finding,
    Severity,
    ValidationResult,
    parse_summary,
    render_summary,
)
from .template import ColumnRule, DataType, PatternRule, Template, load_template
from .defaults import default_template
from .matcher import ColumnMatch, ParsedRow, match_columns
from .tokenizer import TokenizedCSV, preview, read_header, tokenize
from .validators import FieldValidator, LayoutValidator, UniqueValueTracker

__all__ = [
    'ValidationEngine',
    'validate',
    'Finding',
    'Severity',
    'ValidationResult',
    'parse_summary',
    'render_summary',
    'ColumnRule',
    'DataType',
    'PatternRule',
    'Template',
    'load_template',
    'default_template',
    'ColumnMatch',
    'ParsedRow',
    'match_columns',
    'TokenizedCSV',
    'preview',
    'read_header',
    'tokenize',
    'FieldValidator',
    'LayoutValidator',
    'UniqueValueTracker'
]
