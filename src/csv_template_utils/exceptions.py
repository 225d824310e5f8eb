"""
Fatal errors raised by the validation engine.

Anything that can be reported per cell or per column ends up as a Finding
inside the ValidationResult. Only problems that make a report meaningless
are raised.
"""

from typing import Optional


class CsvTemplateError(ValueError):
    """Base class for all fatal csv-template-utils errors."""


class ParseError(CsvTemplateError):
    """
    The input could not be read as CSV.

    Attributes:
        reason: Short description of what is wrong with the input
        line: Physical line number where parsing stopped, if known
    """

    def __init__(self, reason: str, line: Optional[int] = None):
        self.reason = reason
        self.line = line
        location = f' (line {line})' if line is not None else ''
        super().__init__(f'file could not be read as CSV: {reason}{location}')


class TemplateError(CsvTemplateError):
    """
    The template is malformed.

    Attributes:
        reason: Short description of what is wrong with the template
        rule_number: 1-based position of the offending rule, if any
    """

    def __init__(self, reason: str, rule_number: Optional[int] = None):
        self.reason = reason
        self.rule_number = rule_number

        if rule_number is None:
            super().__init__(f'template is invalid: {reason}')
        else:
            super().__init__(f'template rule {rule_number} is invalid: {reason}')
