"""
Column matcher.

Reconciles a tokenized header with a template and maps raw rows onto the
template's column names.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Sequence, Tuple
from .template import Template


@dataclass(frozen=True)
class ParsedRow:
    """
    A data row keyed by template column name.

    Attributes:
        row_number: 1-based data row number (header excluded)
        cells: Raw cell values for every matched column
    """
    row_number: int
    cells: Mapping[str, str]

    def __post_init__(self):
        object.__setattr__(self, 'cells', MappingProxyType(dict(self.cells)))


@dataclass(frozen=True)
class ColumnMatch:
    """
    Result of matching a header against a template.

    Attributes:
        column_index: Template column name -> position in the header, for
            columns present in both, in template order
        missing_columns: Template columns absent from the header
        extra_columns: Header columns absent from the template
        duplicate_columns: Header names that occur more than once; only the
            first occurrence is mapped
    """
    column_index: Mapping[str, int] = field(default_factory=dict)
    missing_columns: Tuple[str, ...] = ()
    extra_columns: Tuple[str, ...] = ()
    duplicate_columns: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'column_index', MappingProxyType(dict(self.column_index)))

    def is_present(self, name: str) -> bool:
        return name in self.column_index

    def build_row(self, row_number: int, cells: Sequence[str]) -> ParsedRow:
        """
        Map a raw row onto the matched columns.

        Short rows are padded with empty strings; surplus cells are ignored.
        """
        width = len(cells)

        return ParsedRow(
            row_number=row_number,
            cells={
                name: cells[index] if index < width else ''
                for name, index in self.column_index.items()
            },
        )


def _header_key(template: Template) -> Callable[[str], str]:
    if template.normalize_headers:
        return lambda name: name.strip().casefold()

    return lambda name: name


def match_columns(header: Sequence[str], template: Template) -> ColumnMatch:
    """
    Match header names against the template's column names.

    Matching is exact and case-sensitive unless the template enables
    normalize_headers. Reported names keep their original spelling.

    Args:
        header: Header fields in file order
        template: Template to match against

    Returns:
        ColumnMatch describing the mapping and any mismatches
    """
    key = _header_key(template)

    positions: Dict[str, int] = {}
    duplicates: List[str] = []

    for index, name in enumerate(header):
        k = key(name)

        if k in positions:
            if name not in duplicates:
                duplicates.append(name)
            continue

        positions[k] = index

    column_index: Dict[str, int] = {}
    missing: List[str] = []

    for rule in template.rules:
        k = key(rule.name)

        if k in positions:
            column_index[rule.name] = positions[k]
        else:
            missing.append(rule.name)

    template_keys = {key(rule.name) for rule in template.rules}
    extra = [
        header[index] for k, index in positions.items()
        if k not in template_keys
    ]

    return ColumnMatch(
        column_index=column_index,
        missing_columns=tuple(missing),
        extra_columns=tuple(extra),
        duplicate_columns=tuple(duplicates),
    )
