"""Shared fixtures for the validation tests."""

import pytest
from csv_template_utils import ColumnRule, DataType, PatternRule, Template


@pytest.fixture
def meter_template():
    """Single required, unique MeterID column."""
    return Template(
        name='meters',
        rules=(
            ColumnRule(name='MeterID', required=True, unique=True, max_length=10),
        ),
    )


@pytest.fixture
def zone_template():
    """MeterID plus a required Zone column."""
    return Template(
        name='meters-with-zone',
        rules=(
            ColumnRule(name='MeterID', required=True, unique=True, max_length=10),
            ColumnRule(name='Zone', index=1, required=True, notes='Billing zone code'),
        ),
    )


@pytest.fixture
def full_template():
    """One column for every kind of check."""
    return Template(
        name='full',
        rules=(
            ColumnRule(name='MeterID', required=True, unique=True, min_length=2, max_length=10),
            ColumnRule(name='Reading', index=1, data_type=DataType.NUMBER),
            ColumnRule(name='Active', index=2, required=True, data_type=DataType.BOOLEAN),
            ColumnRule(name='Installed', index=3, data_type=DataType.DATE),
            ColumnRule(
                name='Route',
                index=4,
                pattern=PatternRule.compile(r'^R\d{3}$', 'Route codes look like R001'),
            ),
            ColumnRule(name='Comment', index=5, invalid_characters=(';', '|')),
        ),
    )


@pytest.fixture
def valid_full_csv():
    return (
        'MeterID,Reading,Active,Installed,Route,Comment\n'
        'M1,12.5,yes,2024-02-29,R001,"gate code: 4434, side door"\n'
        'M2,,FALSE,,R002,\n'
        'M3,-3e2,1,1999-12-31,R003,"said ""hi"""\n'
    )
