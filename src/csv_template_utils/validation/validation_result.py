"""
Validation findings and the aggregated validation result.
"""

import json
import re
import pandas as pd
from enum import Enum
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple
from ..utils.logger import log_finding


SUMMARY_FORMAT = '{total_rows} rows, {total_errors} errors'
_SUMMARY_RE = re.compile(r'^(\d+) rows, (\d+) errors$')

FINDING_COLUMNS = ['row', 'column', 'value', 'rule', 'message', 'severity', 'notes']


class Severity(Enum):
    """Severity levels for validation findings."""
    ERROR = 'error'
    WARNING = 'warning'


@dataclass(frozen=True)
class Finding:
    """
    A single problem found in an uploaded file.

    Attributes:
        row: 1-based data row number; None for layout findings, which are
            about the header rather than a row
        column: Column the finding refers to
        value: Raw cell value (empty for layout findings)
        rule: Machine name of the violated rule, e.g. 'required' or 'unique'
        message: Human-readable description
        severity: ERROR blocks validity, WARNING is informational
        notes: Documentation carried over from the column rule
    """
    row: Optional[int]
    column: str
    value: str
    rule: str
    message: str
    severity: Severity
    notes: Optional[str] = None

    def __post_init__(self):
        """Log the finding after initialization."""
        log_finding(
            severity=self.severity.value,
            message=self.message,
            column=self.column,
            row=self.row,
            notes=self.notes
        )

    @property
    def is_layout(self) -> bool:
        return self.row is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'row': self.row,
            'column': self.column,
            'value': self.value,
            'rule': self.rule,
            'message': self.message,
            'severity': self.severity.value,
            'notes': self.notes,
        }

    def __str__(self) -> str:
        """String representation of the finding."""
        location = f'column: {self.column}'

        if self.row is not None:
            location = f'row: {self.row}, {location}'

        return f'[{self.severity.value.upper()}] {self.message} (at {location})'


def render_summary(total_rows: int, total_errors: int) -> str:
    """Render the short-form summary stored alongside each upload."""
    return SUMMARY_FORMAT.format(total_rows=total_rows, total_errors=total_errors)


def parse_summary(summary: str) -> Tuple[int, int]:
    """
    Parse a summary string back into its counts.

    Args:
        summary: A string produced by render_summary

    Returns:
        Tuple of (total_rows, total_errors)

    Raises:
        ValueError: If the string is not a rendered summary
    """
    match = _SUMMARY_RE.match(summary.strip())

    if not match:
        raise ValueError(f'Not a validation summary: {summary!r}')

    return int(match.group(1)), int(match.group(2))


@dataclass(frozen=True)
class ValidationResult:
    """
    The outcome of validating one file against one template.

    Built once per validation call and never modified afterwards.

    Attributes:
        is_valid: True when there are no ERROR findings
        total_rows: Number of data rows checked (header excluded)
        total_errors: Number of ERROR findings
        total_warnings: Number of WARNING findings
        missing_columns: Template columns absent from the header, template order
        extra_columns: Header columns absent from the template, header order
        findings: All findings, layout findings first, then by row
        summary: Short form "<rows> rows, <errors> errors"
    """
    is_valid: bool
    total_rows: int
    total_errors: int
    total_warnings: int
    missing_columns: Tuple[str, ...]
    extra_columns: Tuple[str, ...]
    findings: Tuple[Finding, ...]
    summary: str

    @classmethod
    def build(
        cls,
        total_rows: int,
        findings: Iterable[Finding],
        missing_columns: Iterable[str] = (),
        extra_columns: Iterable[str] = ()
    ) -> 'ValidationResult':
        """
        Aggregate findings into a result.

        Args:
            total_rows: Number of data rows that were checked
            findings: Findings in report order
            missing_columns: Missing column names from the matcher
            extra_columns: Extra column names from the matcher

        Returns:
            ValidationResult with totals and summary computed
        """
        findings = tuple(findings)
        total_errors = sum(1 for f in findings if f.severity == Severity.ERROR)
        total_warnings = sum(1 for f in findings if f.severity == Severity.WARNING)

        return cls(
            is_valid=total_errors == 0,
            total_rows=total_rows,
            total_errors=total_errors,
            total_warnings=total_warnings,
            missing_columns=tuple(missing_columns),
            extra_columns=tuple(extra_columns),
            findings=findings,
            summary=render_summary(total_rows, total_errors),
        )

    @property
    def errors(self) -> List[Finding]:
        """Get findings with ERROR severity."""
        return [f for f in self.findings if f.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[Finding]:
        """Get findings with WARNING severity."""
        return [f for f in self.findings if f.severity == Severity.WARNING]

    @property
    def column_matches(self) -> bool:
        """Whether the header lines up exactly with the template columns."""
        return not self.missing_columns and not self.extra_columns

    def findings_by_column(self) -> Dict[str, List[Finding]]:
        """Group findings by column, in order of first appearance."""
        grouped: Dict[str, List[Finding]] = {}

        for finding in self.findings:
            grouped.setdefault(finding.column, []).append(finding)

        return grouped

    def to_dataframe(self) -> pd.DataFrame:
        """Return the findings as a DataFrame, one row per finding."""
        df = pd.DataFrame(
            [f.to_dict() for f in self.findings],
            columns=FINDING_COLUMNS
        )

        return df.astype({'row': 'Int64'})

    def counts_by_column(self) -> pd.DataFrame:
        """
        Count findings per column and severity.

        Returns:
            DataFrame indexed by column with one count column per severity,
            columns ordered by first appearance in the findings
        """
        severities = [s.value for s in Severity]
        df = self.to_dataframe()

        if df.empty:
            return pd.DataFrame(columns=severities, dtype='int64')

        counts = (
            df.groupby(['column', 'severity'], sort=False)
            .size()
            .unstack(fill_value=0)
            .reindex(columns=severities, fill_value=0)
            .reindex(index=list(dict.fromkeys(df['column'])))
        )
        counts.columns.name = None

        return counts.astype('int64')

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the result using its public field names."""
        return {
            'is_valid': self.is_valid,
            'total_rows': self.total_rows,
            'total_errors': self.total_errors,
            'total_warnings': self.total_warnings,
            'missing_columns': list(self.missing_columns),
            'extra_columns': list(self.extra_columns),
            'findings': [f.to_dict() for f in self.findings],
            'summary': self.summary,
        }

    def to_json(self, **kwargs) -> str:
        """Serialise the result to JSON."""
        return json.dumps(self.to_dict(), ensure_ascii=False, **kwargs)

    def __str__(self) -> str:
        return self.summary
