"""
Field content validator.
"""

from typing import List, Optional
from .base_validator import BaseValidator
from .uniqueness import UniqueValueTracker
from ..matcher import ColumnMatch, ParsedRow
from ..template import ColumnRule, DataType, Template
from ..validation_result import Finding


_DATE_TOKENS = {'%Y': 'YYYY', '%y': 'YY', '%m': 'MM', '%d': 'DD', '%H': 'hh', '%M': 'mm', '%S': 'ss'}


def describe_date_format(date_format: str) -> str:
    """Render a strptime format the way users write it, e.g. YYYY-MM-DD."""
    for token, text in _DATE_TOKENS.items():
        date_format = date_format.replace(token, text)

    return date_format


class FieldValidator(BaseValidator):
    """
    Validates individual cells against their column rules.

    Checks, in this order for every cell:
    - Required value present
    - Length bounds
    - Data type
    - Invalid characters
    - Pattern
    - Uniqueness within the file

    Only columns present in the header are checked. Uniqueness state lives
    in the tracker handed in by the caller, so rows must be validated in
    file order.
    """

    def __init__(
        self,
        template: Template,
        match: ColumnMatch,
        tracker: Optional[UniqueValueTracker] = None
    ):
        super().__init__()
        self.template = template
        self.tracker = tracker if tracker is not None else UniqueValueTracker()
        self.rules = [rule for rule in template.rules if match.is_present(rule.name)]

    def validate(self, row: ParsedRow) -> List[Finding]:
        """
        Validate one data row.

        Args:
            row: Parsed row keyed by column name

        Returns:
            List of Finding objects for this row, in template column order
        """
        self.clear_results()

        for rule in self.rules:
            self._validate_cell(rule, row.row_number, row.cells.get(rule.name, ''))

        return self.results

    def _validate_cell(self, rule: ColumnRule, row: int, value: str) -> None:
        if value == '':
            if rule.required and not rule.allow_blank:
                self.add_finding(
                    rule, row, value, 'required',
                    f'"{rule.name}" is required but is empty'
                )

            # Nothing else applies to an empty cell
            return

        self._check_length(rule, row, value)
        self._check_data_type(rule, row, value)
        self._check_invalid_characters(rule, row, value)
        self._check_pattern(rule, row, value)

        if rule.unique:
            self._check_unique(rule, row, value)

    def _check_length(self, rule: ColumnRule, row: int, value: str) -> None:
        length = len(value)

        if rule.min_length is not None and length < rule.min_length:
            self.add_finding(
                rule, row, value, 'min_length',
                f'"{rule.name}" must be at least {rule.min_length} characters (got {length})'
            )

        if rule.max_length is not None and length > rule.max_length:
            self.add_finding(
                rule, row, value, 'max_length',
                f'"{rule.name}" must be at most {rule.max_length} characters (got {length})'
            )

    def _check_data_type(self, rule: ColumnRule, row: int, value: str) -> None:
        if rule.data_type.accepts(value, self.template):
            return

        if rule.data_type == DataType.NUMBER:
            expected = 'a number'
        elif rule.data_type == DataType.BOOLEAN:
            expected = 'one of ' + '/'.join(sorted(self.template.boolean_tokens))
        else:
            expected = f'a date formatted as {describe_date_format(self.template.date_format)}'

        self.add_finding(
            rule, row, value, 'data_type',
            f'"{rule.name}" must be {expected} (got "{value}")'
        )

    def _check_invalid_characters(self, rule: ColumnRule, row: int, value: str) -> None:
        found = [char for char in rule.invalid_characters if char in value]

        if found:
            self.add_finding(
                rule, row, value, 'invalid_characters',
                f'"{rule.name}" contains invalid characters: {", ".join(found)}'
            )

    def _check_pattern(self, rule: ColumnRule, row: int, value: str) -> None:
        if rule.pattern is None or rule.pattern.matches(value):
            return

        explanation = rule.pattern.description or rule.notes
        message = f'"{rule.name}" doesn\'t match the required format'

        if explanation:
            message = f'{message}: {explanation}'

        self.add_finding(rule, row, value, 'pattern', message)

    def _check_unique(self, rule: ColumnRule, row: int, value: str) -> None:
        first_row = self.tracker.check(rule.name, value, row)

        if first_row is not None:
            self.add_finding(
                rule, row, value, 'unique',
                f'"{rule.name}" must be unique, but "{value}" already appears in row {first_row}'
            )
