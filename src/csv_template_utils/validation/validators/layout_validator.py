"""
Header layout validator.
"""

from typing import List
from .base_validator import BaseValidator
from ..matcher import ColumnMatch
from ..template import Template
from ..validation_result import Finding, Severity


class LayoutValidator(BaseValidator):
    """
    Reports differences between a file's header and its template.

    Checks:
    - Missing columns (ERROR when the column is required, WARNING otherwise)
    - Extra columns not in the template (WARNING)
    - Duplicate header names (WARNING)
    """

    def __init__(self, template: Template):
        super().__init__()
        self.template = template

    def validate(self, match: ColumnMatch) -> List[Finding]:
        """
        Turn a column match into layout findings.

        Args:
            match: Result of matching the header against the template

        Returns:
            List of Finding objects, missing columns first in template
            order, then extra and duplicate columns in header order
        """
        self.clear_results()

        for name in match.missing_columns:
            rule = self.template.get(name)

            if rule.required:
                message = f'Required column "{name}" is missing from the file'
                severity = Severity.ERROR
            else:
                message = f'Optional column "{name}" is missing from the file'
                severity = Severity.WARNING

            self.add_finding(rule, None, '', 'missing_column', message, severity)

        for name in match.extra_columns:
            self.add_result(Finding(
                row=None,
                column=name,
                value='',
                rule='extra_column',
                message=f'Column "{name}" is not part of template "{self.template.name}" and will be ignored',
                severity=Severity.WARNING
            ))

        for name in match.duplicate_columns:
            self.add_result(Finding(
                row=None,
                column=name,
                value='',
                rule='duplicate_column',
                message=f'Column "{name}" appears more than once; only the first occurrence is checked',
                severity=Severity.WARNING
            ))

        return self.results
