"""
CSV tokenizer.

Turns raw upload bytes into a header and a lazy stream of data rows.
"""

import csv
import io
import itertools
import sys
import chardet
from dataclasses import dataclass
from typing import Dict, Iterator, List, Tuple, Union
from ..exceptions import ParseError
from ..utils import configure_logger


logger = configure_logger(__name__)

BOM = '\ufeff'

CsvInput = Union[bytes, bytearray, str]
RawRow = Tuple[int, List[str]]

# Cell size is bounded only by the input itself
csv.field_size_limit(sys.maxsize)


@dataclass
class TokenizedCSV:
    """
    A tokenized CSV file.

    Attributes:
        header: Header fields in file order
        rows: Single-pass iterator of (row_number, cells); row_number is
            1-based and excludes the header
    """
    header: List[str]
    rows: Iterator[RawRow]


def decode_csv(data: CsvInput) -> str:
    """
    Decode upload content as UTF-8, dropping a leading byte-order mark.

    Args:
        data: Raw bytes or already decoded text

    Returns:
        The decoded text

    Raises:
        ParseError: If the bytes are not valid UTF-8
    """
    if isinstance(data, str):
        return data[1:] if data.startswith(BOM) else data

    try:
        return bytes(data).decode('utf-8-sig')
    except UnicodeDecodeError as e:
        detected = chardet.detect(bytes(data))
        encoding = detected.get('encoding') or 'unknown'
        logger.warning(
            f'Upload is not UTF-8 (detected {encoding}, '
            f'confidence {detected.get("confidence")})'
        )
        raise ParseError(
            f'content is not valid UTF-8 (detected {encoding}); '
            f're-save the file as UTF-8'
        ) from e


def _get_csv_reader(text: str):
    """Create a properly configured CSV reader."""
    return csv.reader(
        io.StringIO(text, newline=''),
        delimiter=',',
        quotechar='"',
        doublequote=True,
        quoting=csv.QUOTE_MINIMAL,
        strict=True,
    )


def _read_row(reader) -> List[str]:
    """Read the next non-empty record, translating csv errors."""
    while True:
        try:
            row = next(reader)
        except csv.Error as e:
            raise ParseError(str(e), line=reader.line_num) from e

        # Blank physical lines come back as []
        if row:
            return row


def _iter_rows(reader) -> Iterator[RawRow]:
    row_number = 0

    while True:
        try:
            cells = _read_row(reader)
        except StopIteration:
            return

        row_number += 1
        yield row_number, cells


def tokenize(data: CsvInput) -> TokenizedCSV:
    """
    Tokenize CSV content.

    The header is read eagerly; data rows are produced lazily and can only
    be iterated once. Restarting requires calling tokenize again on the
    original content.

    Args:
        data: Raw bytes (UTF-8, optional BOM) or decoded text

    Returns:
        TokenizedCSV with the header and the row iterator

    Raises:
        ParseError: If the content is empty, undecodable or malformed.
            Errors in data rows are raised while iterating.
    """
    reader = _get_csv_reader(decode_csv(data))

    try:
        header = _read_row(reader)
    except StopIteration:
        raise ParseError('CSV file is empty') from None

    return TokenizedCSV(header=header, rows=_iter_rows(reader))


def read_header(data: CsvInput) -> List[str]:
    """Return only the header fields of a CSV file."""
    return tokenize(data).header


def preview(data: CsvInput, limit: int = 10) -> Tuple[List[str], List[Dict[str, str]]]:
    """
    Return the header and the first rows of a CSV file as dictionaries.

    Short rows are padded with empty strings; surplus cells are dropped.

    Args:
        data: Raw bytes or decoded text
        limit: Maximum number of data rows to return

    Returns:
        Tuple of (header, rows)
    """
    tokenized = tokenize(data)
    header = tokenized.header
    rows = []

    # Rows past the limit are never tokenized
    for _, cells in itertools.islice(tokenized.rows, limit):
        rows.append({
            name: cells[i] if i < len(cells) else ''
            for i, name in enumerate(header)
        })

    return header, rows
