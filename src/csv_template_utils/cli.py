"""
Command line interface.

    csv-template validate FILE TEMPLATE
    csv-template headers FILE
    csv-template preview FILE
    csv-template default-template

``validate`` exits with 0 when the file is valid, 1 when it was validated
but has errors, and 2 when the file or template could not be read.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from .exceptions import CsvTemplateError
from .validation import (
    Template,
    ValidationEngine,
    ValidationResult,
    default_template,
    load_template,
    preview as preview_csv,
    read_header,
)


EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_ERROR = 2

DEFAULT_TEMPLATE_NAME = 'default'
VALUE_DISPLAY_WIDTH = 40


def _truncate(value: str, width: int = VALUE_DISPLAY_WIDTH) -> str:
    return value if len(value) <= width else value[:width - 3] + '...'


def _fail(message: str) -> None:
    click.echo(f'Error: {message}', err=True)
    raise SystemExit(EXIT_ERROR)


def _load_template(name: str) -> Template:
    if name == DEFAULT_TEMPLATE_NAME:
        return default_template()

    path = Path(name)

    if not path.is_file():
        _fail(f'template file {name} does not exist')

    try:
        return load_template(path)
    except OSError as e:
        _fail(f'template file {name} could not be read: {e.strerror}')


def _read_bytes(path: str) -> bytes:
    with open(path, 'rb') as f:
        return f.read()


def _render_text(result: ValidationResult, limit: int) -> None:
    status = 'VALID' if result.is_valid else 'INVALID'
    click.echo(f'{status}: {result.summary}, {result.total_warnings} warnings')

    if result.missing_columns:
        click.echo(f'Missing columns: {", ".join(result.missing_columns)}')

    if result.extra_columns:
        click.echo(f'Extra columns: {", ".join(result.extra_columns)}')

    for finding in result.findings[:limit]:
        line = str(finding)

        if finding.value:
            line = f'{line} value="{_truncate(finding.value)}"'

        click.echo(line)

    hidden = len(result.findings) - limit

    if hidden > 0:
        click.echo(f'... {hidden} more findings not shown (use --limit)')


@click.group()
@click.option(
    '--dotenv',
    'dotenv_path',
    type=click.Path(path_type=str, dir_okay=False, exists=True),
    default=None,
    help='Environment file to load settings from (defaults to .env if present).',
)
@click.option('-v', '--verbose', is_flag=True, help='Log every finding.')
def cli(dotenv_path: Optional[str], verbose: bool) -> None:
    """Validate CSV uploads against column templates."""
    load_dotenv(dotenv_path=dotenv_path if dotenv_path else '.env')

    level_name = 'DEBUG' if verbose else os.getenv('CSV_TEMPLATE_LOG_LEVEL', 'WARNING')
    level = logging.getLevelName(level_name.upper())

    if not isinstance(level, int):
        raise click.BadParameter(
            f'unknown log level {level_name!r}', param_hint='CSV_TEMPLATE_LOG_LEVEL'
        )

    # Package loggers configure themselves at INFO on import
    for name in list(logging.root.manager.loggerDict):
        if name.startswith('csv_template_utils'):
            logging.getLogger(name).setLevel(level)


@cli.command('validate')
@click.argument('file', type=click.Path(path_type=str, dir_okay=False, exists=True))
@click.argument('template')
@click.option(
    '--format',
    'output_format',
    type=click.Choice(['text', 'json']),
    default=None,
    help='Output format (default: $CSV_TEMPLATE_OUTPUT or text).',
)
@click.option(
    '--limit',
    type=click.IntRange(min=0),
    default=50,
    show_default=True,
    help='Maximum number of findings listed in text output.',
)
def validate_command(file: str, template: str, output_format: Optional[str], limit: int) -> None:
    """Validate FILE against TEMPLATE (a JSON file, or "default")."""
    output_format = output_format or os.getenv('CSV_TEMPLATE_OUTPUT', 'text')

    if output_format not in ('text', 'json'):
        _fail(f'unknown output format {output_format!r}')

    try:
        engine = ValidationEngine(_load_template(template))
        result = engine.validate(_read_bytes(file))
    except CsvTemplateError as e:
        _fail(str(e))
    except OSError as e:
        _fail(f'{e.filename or file} could not be read: {e.strerror}')

    if output_format == 'json':
        click.echo(result.to_json(indent=2))
    else:
        _render_text(result, limit)

    raise SystemExit(EXIT_VALID if result.is_valid else EXIT_INVALID)


@cli.command('headers')
@click.argument('file', type=click.Path(path_type=str, dir_okay=False, exists=True))
def headers_command(file: str) -> None:
    """Print the header fields of FILE, one per line."""
    try:
        header = read_header(_read_bytes(file))
    except CsvTemplateError as e:
        _fail(str(e))
    except OSError as e:
        _fail(f'{file} could not be read: {e.strerror}')

    for name in header:
        click.echo(name)


@cli.command('preview')
@click.argument('file', type=click.Path(path_type=str, dir_okay=False, exists=True))
@click.option('--rows', type=click.IntRange(min=1), default=10, show_default=True)
def preview_command(file: str, rows: int) -> None:
    """Print the first rows of FILE as JSON."""
    try:
        header, data = preview_csv(_read_bytes(file), limit=rows)
    except CsvTemplateError as e:
        _fail(str(e))
    except OSError as e:
        _fail(f'{file} could not be read: {e.strerror}')

    click.echo(json.dumps({'headers': header, 'rows': data}, indent=2, ensure_ascii=False))


@cli.command('default-template')
def default_template_command() -> None:
    """Print the built-in NewNetworkUpload template as JSON."""
    click.echo(json.dumps(default_template().to_dict(), indent=2, ensure_ascii=False))


def main() -> None:
    cli()


if __name__ == '__main__':
    main()
