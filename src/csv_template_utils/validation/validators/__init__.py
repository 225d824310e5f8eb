"""
Validator implementations.
"""

from .base_validator import BaseValidator
from .layout_validator import LayoutValidator
from .field_validator import FieldValidator
from .uniqueness import UniqueValueTracker

__all__ = [
    'BaseValidator',
    'LayoutValidator',
    'FieldValidator',
    'UniqueValueTracker'
]
