"""Tests for the command line interface."""

import json

import pytest
from click.testing import CliRunner
from csv_template_utils.cli import cli


TEMPLATE = {
    'name': 'meters',
    'rules': [
        {'column_name': 'MeterID', 'is_required': True, 'is_unique': True, 'max_length': 10},
    ],
}


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    # load_dotenv writes into os.environ; make sure it is restored afterwards
    for name in ('CSV_TEMPLATE_OUTPUT', 'CSV_TEMPLATE_LOG_LEVEL'):
        monkeypatch.setenv(name, '')
        monkeypatch.delenv(name)
    (tmp_path / 'template.json').write_text(json.dumps(TEMPLATE), encoding='utf-8')

    return tmp_path


@pytest.fixture
def runner():
    return CliRunner()


def write_csv(workdir, text, name='upload.csv'):
    path = workdir / name
    path.write_bytes(text.encode('utf-8'))

    return str(path)


def test_valid_file_exits_zero(runner, workdir):
    path = write_csv(workdir, 'MeterID\nA1\nA2\n')

    result = runner.invoke(cli, ['validate', path, 'template.json'])

    assert result.exit_code == 0
    assert 'VALID: 2 rows, 0 errors' in result.output


def test_invalid_file_exits_one(runner, workdir):
    path = write_csv(workdir, 'MeterID\nA1\nA1\nA-VERY-LONG-ID\n')

    result = runner.invoke(cli, ['validate', path, 'template.json'])

    assert result.exit_code == 1
    assert 'INVALID: 3 rows, 2 errors' in result.output
    assert 'must be unique' in result.output


def test_json_output(runner, workdir):
    path = write_csv(workdir, 'MeterID,Notes\nA1,x\n')

    result = runner.invoke(cli, ['validate', path, 'template.json', '--format', 'json'])

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data['extra_columns'] == ['Notes']
    assert data['summary'] == '1 rows, 0 errors'


def test_output_format_from_dotenv(runner, workdir):
    (workdir / 'settings.env').write_text('CSV_TEMPLATE_OUTPUT=json\n', encoding='utf-8')
    path = write_csv(workdir, 'MeterID\nA1\n')

    result = runner.invoke(cli, ['--dotenv', 'settings.env', 'validate', path, 'template.json'])

    assert result.exit_code == 0
    assert json.loads(result.output)['is_valid'] is True


def test_limit_hides_findings(runner, workdir):
    path = write_csv(workdir, 'MeterID\nA\nA\nA\nA\n')

    result = runner.invoke(cli, ['validate', path, 'template.json', '--limit', '1'])

    assert result.exit_code == 1
    assert '2 more findings not shown' in result.output


def test_parse_error_exits_two(runner, workdir):
    path = write_csv(workdir, 'MeterID\n"A1\n')

    result = runner.invoke(cli, ['validate', path, 'template.json'])

    assert result.exit_code == 2
    assert 'file could not be read as CSV' in result.output


def test_template_error_exits_two(runner, workdir):
    (workdir / 'bad.json').write_text(
        json.dumps({'rules': [{'column_name': 'A', 'pattern': '(['}]}), encoding='utf-8'
    )
    path = write_csv(workdir, 'A\n1\n')

    result = runner.invoke(cli, ['validate', path, 'bad.json'])

    assert result.exit_code == 2
    assert 'template rule 1 is invalid' in result.output


def test_missing_template_exits_two(runner, workdir):
    path = write_csv(workdir, 'A\n1\n')

    result = runner.invoke(cli, ['validate', path, 'nope.json'])

    assert result.exit_code == 2


def test_non_utf8_template_exits_two(runner, workdir):
    (workdir / 'latin.json').write_bytes(
        json.dumps({'name': 'Zähler', 'rules': []}, ensure_ascii=False).encode('latin-1')
    )
    path = write_csv(workdir, 'A\n1\n')

    result = runner.invoke(cli, ['validate', path, 'latin.json'])

    assert result.exit_code == 2
    assert 'not UTF-8' in result.output


def test_unreadable_file_exits_two(runner, workdir, monkeypatch):
    path = write_csv(workdir, 'MeterID\nA1\n')

    def denied(file):
        raise PermissionError(13, 'Permission denied', file)

    monkeypatch.setattr('csv_template_utils.cli._read_bytes', denied)

    result = runner.invoke(cli, ['validate', path, 'template.json'])

    assert result.exit_code == 2
    assert 'Permission denied' in result.output


def test_missing_dotenv_file_is_rejected(runner, workdir):
    path = write_csv(workdir, 'MeterID\nA1\n')

    result = runner.invoke(cli, ['--dotenv', 'missing.env', 'validate', path, 'template.json'])

    assert result.exit_code == 2
    assert 'missing.env' in result.output


def test_default_template(runner, workdir):
    path = write_csv(workdir, 'CREF\nSPID_1\n')

    result = runner.invoke(cli, ['validate', path, 'default', '--format', 'json'])

    assert result.exit_code == 1
    data = json.loads(result.output)
    assert 'METERSERIAL' in data['missing_columns']


def test_headers(runner, workdir):
    path = write_csv(workdir, 'MeterID,Zone\nA1,N\n')

    result = runner.invoke(cli, ['headers', path])

    assert result.exit_code == 0
    assert result.output.splitlines() == ['MeterID', 'Zone']


def test_preview(runner, workdir):
    path = write_csv(workdir, 'MeterID,Zone\nA1,N\nA2,S\n')

    result = runner.invoke(cli, ['preview', path, '--rows', '1'])

    assert result.exit_code == 0
    assert json.loads(result.output) == {
        'headers': ['MeterID', 'Zone'],
        'rows': [{'MeterID': 'A1', 'Zone': 'N'}],
    }


def test_print_default_template(runner, workdir):
    result = runner.invoke(cli, ['default-template'])

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data['name'] == 'NewNetworkUpload'
    assert data['rules'][0]['column_name'] == 'IGNORE'
