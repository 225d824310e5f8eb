"""Tests for findings, aggregation and summaries."""

import json
import logging

import pytest
from csv_template_utils import ColumnRule, Finding, Severity, Template, parse_summary, validate
from csv_template_utils.validation import UniqueValueTracker, ValidationResult, render_summary


def finding(row, column, rule, severity=Severity.ERROR):
    return Finding(
        row=row,
        column=column,
        value='x',
        rule=rule,
        message=f'{column} broke {rule}',
        severity=severity,
    )


@pytest.fixture
def result():
    return ValidationResult.build(
        total_rows=3,
        findings=[
            finding(None, 'Zone', 'missing_column'),
            finding(None, 'Notes', 'extra_column', Severity.WARNING),
            finding(1, 'MeterID', 'max_length'),
            finding(2, 'MeterID', 'unique'),
        ],
        missing_columns=['Zone'],
        extra_columns=['Notes'],
    )


def test_totals(result):
    assert result.total_errors == 3
    assert result.total_warnings == 1
    assert result.is_valid is False
    assert result.summary == '3 rows, 3 errors'
    assert len(result.errors) == 3
    assert len(result.warnings) == 1
    assert result.column_matches is False


def test_warnings_never_block_validity():
    result = ValidationResult.build(2, [finding(None, 'Notes', 'extra_column', Severity.WARNING)])

    assert result.is_valid is True
    assert result.summary == '2 rows, 0 errors'


def test_summary_round_trips():
    assert parse_summary(render_summary(1200, 17)) == (1200, 17)
    assert parse_summary('3 rows, 2 errors') == (3, 2)


def test_parse_summary_rejects_other_text():
    with pytest.raises(ValueError):
        parse_summary('Validation failed with 2 error(s)')


def test_findings_by_column(result):
    grouped = result.findings_by_column()

    assert list(grouped) == ['Zone', 'Notes', 'MeterID']
    assert [f.row for f in grouped['MeterID']] == [1, 2]


def test_to_dataframe(result):
    df = result.to_dataframe()

    assert list(df.columns) == ['row', 'column', 'value', 'rule', 'message', 'severity', 'notes']
    assert len(df) == 4
    assert df['row'].isna().sum() == 2
    assert list(df['severity']) == ['error', 'warning', 'error', 'error']


def test_counts_by_column(result):
    counts = result.counts_by_column()

    assert counts.loc['MeterID', 'error'] == 2
    assert counts.loc['MeterID', 'warning'] == 0
    assert counts.loc['Notes', 'warning'] == 1
    assert list(counts.index) == ['Zone', 'Notes', 'MeterID']


def test_counts_by_column_without_findings():
    counts = ValidationResult.build(0, []).counts_by_column()

    assert counts.empty
    assert list(counts.columns) == ['error', 'warning']


def test_to_dict_field_names(result):
    data = json.loads(result.to_json())

    assert set(data) == {
        'is_valid', 'total_rows', 'total_errors', 'total_warnings',
        'missing_columns', 'extra_columns', 'findings', 'summary',
    }
    assert data['findings'][2] == {
        'row': 1,
        'column': 'MeterID',
        'value': 'x',
        'rule': 'max_length',
        'message': 'MeterID broke max_length',
        'severity': 'error',
        'notes': None,
    }


def test_finding_str():
    assert str(finding(4, 'Zone', 'required')) == '[ERROR] Zone broke required (at row: 4, column: Zone)'
    assert str(finding(None, 'Zone', 'missing_column')) == '[ERROR] Zone broke missing_column (at column: Zone)'


def test_findings_are_logged(caplog):
    caplog.set_level(logging.DEBUG, logger='csv_template_utils.findings')

    finding(7, 'MeterID', 'unique')

    assert '[ERROR] MeterID broke unique (row: 7, column: MeterID)' in caplog.text


def test_result_is_immutable(result):
    with pytest.raises(AttributeError):
        result.is_valid = True


def test_tracker_is_scoped_to_one_run():
    template = Template(name='t', rules=(ColumnRule(name='ID', unique=True),))

    first = validate('ID\nA\n', template)
    second = validate('ID\nA\n', template)

    assert first.is_valid and second.is_valid


def test_tracker_reports_first_row():
    tracker = UniqueValueTracker()

    assert tracker.check('ID', 'A', 1) is None
    assert tracker.check('ID', 'B', 2) is None
    assert tracker.check('ID', 'A', 3) == 1
    assert tracker.check('ID', 'A', 4) == 1
    assert tracker.check('Other', 'A', 5) is None
    assert tracker.seen_count('ID') == 2


def test_to_dataframe_keeps_layout_rows_null(result):
    df = result.to_dataframe()

    assert str(df['row'].dtype) == 'Int64'
    assert df['row'].isna().tolist() == [True, True, False, False]
    assert df['row'].dropna().tolist() == [1, 2]


def test_counts_by_column_severity_order():
    counts = ValidationResult.build(
        1, [finding(1, 'MeterID', 'style', Severity.WARNING)]
    ).counts_by_column()

    assert list(counts.columns) == ['error', 'warning']
    assert counts.loc['MeterID'].tolist() == [0, 1]


def test_grouping_follows_first_appearance_in_engine_output():
    template = Template(name='t', rules=(
        ColumnRule(name='B', required=True),
        ColumnRule(name='A', unique=True),
        ColumnRule(name='Zone', required=True),
    ))

    result = validate('A,B,Notes\nx,\nx,b\n', template)

    assert list(result.findings_by_column()) == ['Zone', 'Notes', 'B', 'A']
    assert list(result.counts_by_column().index) == ['Zone', 'Notes', 'B', 'A']
    assert result.counts_by_column().loc['Notes', 'warning'] == 1
