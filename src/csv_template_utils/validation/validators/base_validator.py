"""
Base validator class that all validators must inherit from.
"""

from abc import ABC, abstractmethod
from typing import List, Any, Optional
from ..template import ColumnRule
from ..validation_result import Finding, Severity


class BaseValidator(ABC):
    """
    Abstract base class for all validators.

    All validator implementations should inherit from this class
    and implement the validate method.
    """

    def __init__(self):
        self.__results: List[Finding] = []

    @abstractmethod
    def validate(self, data: Any) -> List[Finding]:
        """
        Validate the input data and return a list of findings.

        Args:
            data: The data to validate (type depends on specific validator)

        Returns:
            List of Finding objects
        """
        pass

    def add_result(self, result: Finding) -> None:
        """Add a finding to the results list."""
        self.__results.append(result)

    def add_finding(
        self,
        rule: ColumnRule,
        row: Optional[int],
        value: str,
        rule_name: str,
        message: str,
        severity: Severity = Severity.ERROR
    ) -> None:
        """Record a finding for a column rule, carrying the rule's notes."""
        self.add_result(Finding(
            row=row,
            column=rule.name,
            value=value,
            rule=rule_name,
            message=message,
            severity=severity,
            notes=rule.notes
        ))

    @property
    def results(self) -> List[Finding]:
        """Get all findings."""
        return self.__results

    def clear_results(self) -> None:
        """Clear all findings."""
        self.__results = []
