"""
Main validation engine that orchestrates the validation process.
"""

from pathlib import Path
from typing import List
from .matcher import match_columns
from .template import Template
from .tokenizer import CsvInput, tokenize
from .validation_result import Finding, ValidationResult
from .validators import FieldValidator, LayoutValidator, UniqueValueTracker
from ..utils import configure_logger


logger = configure_logger(__name__)


class ValidationEngine:
    """
    Runs the validation pipeline for one template.

    Tokenizer -> column matcher -> layout and field validators -> result.
    The engine itself holds no per-file state, so one instance can
    validate any number of files, including concurrently.
    """

    def __init__(self, template: Template):
        """
        Initialize the validation engine.

        Args:
            template: Template every file is checked against
        """
        self.template = template

    def validate(self, data: CsvInput) -> ValidationResult:
        """
        Validate CSV content.

        Args:
            data: Raw bytes (UTF-8, optional BOM) or decoded text

        Returns:
            ValidationResult for the content

        Raises:
            ParseError: If the content cannot be read as CSV. No partial
                result is produced.
        """
        tokenized = tokenize(data)
        match = match_columns(tokenized.header, self.template)

        logger.info(
            f'Validating against template "{self.template.name}": '
            f'{len(match.column_index)}/{len(self.template)} columns matched'
        )

        findings: List[Finding] = list(LayoutValidator(self.template).validate(match))

        # Rows go through in file order so the tracker sees first occurrences first
        field_validator = FieldValidator(self.template, match, UniqueValueTracker())
        total_rows = 0

        for row_number, cells in tokenized.rows:
            total_rows = row_number
            findings.extend(field_validator.validate(match.build_row(row_number, cells)))

        result = ValidationResult.build(
            total_rows=total_rows,
            findings=findings,
            missing_columns=match.missing_columns,
            extra_columns=match.extra_columns,
        )

        logger.info(
            f'{result.summary}, {result.total_warnings} warnings '
            f'({"valid" if result.is_valid else "invalid"})'
        )

        return result

    def validate_file(self, file_path: str | Path) -> ValidationResult:
        """
        Validate a CSV file on disk.

        Args:
            file_path: Path to the CSV file

        Returns:
            ValidationResult for the file
        """
        file_path = Path(file_path)
        logger.info(f'Reading {file_path}')

        with open(file_path, 'rb') as f:
            return self.validate(f.read())


def validate(csv_text: CsvInput, template: Template) -> ValidationResult:
    """
    Validate CSV content against a template.

    Args:
        csv_text: Raw bytes (UTF-8, optional BOM) or decoded text
        template: Template to check against

    Returns:
        ValidationResult for the content

    Raises:
        ParseError: If the content cannot be read as CSV
    """
    return ValidationEngine(template).validate(csv_text)
