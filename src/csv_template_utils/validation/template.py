"""
Template model: the ordered column rules a CSV file is checked against.

Templates are built once (usually from the JSON stored by the admin UI) and
are immutable for the duration of a validation run. Every structural problem
in a template is raised here as a TemplateError so that a row scan never has
to deal with a broken rule.
"""

import json
import math
import re
from datetime import datetime
from enum import Enum
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple
from ..exceptions import TemplateError


DEFAULT_BOOLEAN_TOKENS: FrozenSet[str] = frozenset({'true', 'false', 'yes', 'no', '1', '0'})
DEFAULT_DATE_FORMAT = '%Y-%m-%d'

_NUMBER_RE = re.compile(r'[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?')


class DataType(Enum):
    """Declared data type of a column."""
    TEXT = 'text'
    NUMBER = 'number'
    BOOLEAN = 'boolean'
    DATE = 'date'

    @classmethod
    def parse(cls, value: Any) -> 'DataType':
        """Resolve a stored data type name (case-insensitive)."""
        if isinstance(value, cls):
            return value

        if value is None:
            return cls.TEXT

        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ', '.join(member.value for member in cls)
            raise ValueError(f'unknown data_type {value!r} (expected one of: {allowed})') from None

    def accepts(self, value: str, template: 'Template') -> bool:
        """Check whether a raw cell value parses as this data type."""
        return _PARSERS[self](value, template)


def _is_text(value: str, template: 'Template') -> bool:
    return True


def _is_number(value: str, template: 'Template') -> bool:
    if not _NUMBER_RE.fullmatch(value):
        return False

    return math.isfinite(float(value))


def _is_boolean(value: str, template: 'Template') -> bool:
    return value.lower() in template.boolean_tokens


def _is_date(value: str, template: 'Template') -> bool:
    try:
        datetime.strptime(value, template.date_format)
    except ValueError:
        return False

    return True


_PARSERS = {
    DataType.TEXT: _is_text,
    DataType.NUMBER: _is_number,
    DataType.BOOLEAN: _is_boolean,
    DataType.DATE: _is_date,
}


@dataclass(frozen=True)
class PatternRule:
    """
    A pre-compiled regular expression with its human explanation.

    Attributes:
        regex: Compiled expression, matched with search semantics
        description: Text shown to the user when a value does not match
    """
    regex: 're.Pattern[str]'
    description: Optional[str] = None

    @classmethod
    def compile(cls, source: str, description: Optional[str] = None) -> 'PatternRule':
        """
        Compile a pattern string.

        Raises:
            TemplateError: If the expression does not compile
        """
        if not isinstance(source, str):
            raise TemplateError(f'pattern must be a string, got {source!r}')

        try:
            regex = re.compile(source)
        except re.error as e:
            raise TemplateError(f'pattern {source!r} does not compile: {e}') from None

        return cls(regex=regex, description=description)

    @property
    def source(self) -> str:
        return self.regex.pattern

    def matches(self, value: str) -> bool:
        return self.regex.search(value) is not None


def parse_length_spec(length: Any) -> Tuple[Optional[int], Optional[int]]:
    """
    Parse the column-sheet length shorthand.

    ``50`` means a maximum of 50 characters, ``"5-48"`` means between 5 and
    48 characters.

    Returns:
        Tuple of (min_length, max_length)
    """
    if length is None or length == '':
        return None, None

    if isinstance(length, str) and '-' in length:
        low, _, high = length.partition('-')
        return _to_length(low.strip(), 'length'), _to_length(high.strip(), 'length')

    return None, _to_length(length, 'length')


def _to_length(value: Any, name: str) -> Optional[int]:
    if value is None or value == '':
        return None

    if isinstance(value, bool):
        raise ValueError(f'{name} must be an integer, got {value!r}')

    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValueError(f'{name} must be an integer, got {value!r}') from None

    if isinstance(value, float) and value != number:
        raise ValueError(f'{name} must be an integer, got {value!r}')

    if number < 0:
        raise ValueError(f'{name} must not be negative, got {number}')

    return number


def _to_flag(data: Dict[str, Any], *keys: str, default: Optional[bool] = False) -> Optional[bool]:
    for key in keys:
        if key in data and data[key] is not None:
            value = data[key]

            if not isinstance(value, bool):
                raise ValueError(f'{key} must be true or false, got {value!r}')

            return value

    return default


def _to_characters(value: Any) -> Tuple[str, ...]:
    """Normalise invalid characters to distinct characters in declared order."""
    if not value:
        return ()

    if isinstance(value, str):
        chars: Iterable[str] = value
    elif not isinstance(value, (list, tuple)):
        raise ValueError(
            f'invalid_characters must be a string or a list of characters, got {value!r}'
        )
    else:
        chars = []

        for item in value:
            if not isinstance(item, str) or len(item) != 1:
                raise ValueError(f'invalid_characters entries must be single characters, got {item!r}')

            chars.append(item)

    return tuple(dict.fromkeys(chars))


@dataclass(frozen=True)
class ColumnRule:
    """
    The complete rule set for one named column.

    Attributes:
        name: Column header this rule applies to (case-sensitive)
        index: Display position in the template (0-based)
        required: Whether the column must be present and its cells filled
        allow_blank: Whether empty cells are accepted; defaults to the
            opposite of required
        unique: Whether values must not repeat within the file
        min_length: Minimum number of characters, if set
        max_length: Maximum number of characters, if set
        data_type: Declared data type of the cells
        pattern: Pre-compiled pattern the cells must match, if set
        invalid_characters: Characters that must not appear in a cell
        notes: Documentation for the column, carried onto findings
        example: Example of a valid value
    """
    name: str
    index: int = 0
    required: bool = False
    allow_blank: Optional[bool] = None
    unique: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    data_type: DataType = DataType.TEXT
    pattern: Optional[PatternRule] = None
    invalid_characters: Tuple[str, ...] = ()
    notes: Optional[str] = None
    example: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise TemplateError('column_name must be a non-empty string')

        if self.allow_blank is None:
            object.__setattr__(self, 'allow_blank', not self.required)

        for name in ('min_length', 'max_length'):
            value = getattr(self, name)

            if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 0):
                raise TemplateError(f'{name} must be a non-negative integer, got {value!r}')

        if (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        ):
            raise TemplateError(
                f'min_length ({self.min_length}) is greater than max_length ({self.max_length})'
            )

        if not isinstance(self.data_type, DataType):
            raise TemplateError(f'data_type must be a DataType, got {self.data_type!r}')

        if self.pattern is not None and not isinstance(self.pattern, PatternRule):
            raise TemplateError(
                f'pattern must be a PatternRule (see PatternRule.compile), got {self.pattern!r}'
            )

        if not isinstance(self.invalid_characters, tuple):
            raise TemplateError(
                f'invalid_characters must be a tuple of characters, got {self.invalid_characters!r}'
            )

        for char in self.invalid_characters:
            if not isinstance(char, str) or len(char) != 1:
                raise TemplateError(
                    f'invalid_characters entries must be single characters, got {char!r}'
                )

    @classmethod
    def from_dict(cls, data: Dict[str, Any], position: int = 0) -> 'ColumnRule':
        """
        Build a rule from its stored representation.

        Accepts the configuration-store keys (``column_name``, ``is_required``,
        ``is_unique`` ...) as well as the short names used on this class, and
        the column-sheet ``length`` shorthand.

        Raises:
            ValueError: If the rule is malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f'rule must be an object, got {type(data).__name__}')

        name = data.get('column_name', data.get('name'))

        if not isinstance(name, str) or not name:
            raise ValueError('column_name is missing')

        min_length, max_length = parse_length_spec(data.get('length'))

        if data.get('min_length') is not None:
            min_length = _to_length(data['min_length'], 'min_length')

        if data.get('max_length') is not None:
            max_length = _to_length(data['max_length'], 'max_length')

        pattern = None
        source = data.get('pattern')

        if source:
            if not isinstance(source, str):
                raise ValueError(f'pattern must be a string, got {source!r}')

            description = data.get('pattern_description') or data.get('notes')
            pattern = PatternRule.compile(source, description)

        index = data.get('column_index', data.get('index', position))

        if isinstance(index, bool) or not isinstance(index, int):
            raise ValueError(f'column_index must be an integer, got {index!r}')

        return cls(
            name=name,
            index=index,
            required=_to_flag(data, 'is_required', 'required'),
            allow_blank=_to_flag(data, 'allow_blank', default=None),
            unique=_to_flag(data, 'is_unique', 'unique'),
            min_length=min_length,
            max_length=max_length,
            data_type=DataType.parse(data.get('data_type')),
            pattern=pattern,
            invalid_characters=_to_characters(data.get('invalid_characters')),
            notes=data.get('notes') or None,
            example=data.get('example') or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the rule to the configuration-store shape."""
        return {
            'column_name': self.name,
            'column_index': self.index,
            'is_required': self.required,
            'allow_blank': self.allow_blank,
            'is_unique': self.unique,
            'min_length': self.min_length,
            'max_length': self.max_length,
            'data_type': self.data_type.value,
            'pattern': self.pattern.source if self.pattern else None,
            'pattern_description': self.pattern.description if self.pattern else None,
            'invalid_characters': ''.join(self.invalid_characters) or None,
            'notes': self.notes,
            'example': self.example,
        }


@dataclass(frozen=True)
class Template:
    """
    Ordered column rules defining what a valid file looks like.

    Rule order is display order only; columns are matched by name.

    Attributes:
        name: Template name
        rules: Column rules in display order
        description: Optional description
        boolean_tokens: Lower-case tokens accepted for boolean columns
        date_format: strptime format accepted for date columns
        normalize_headers: Match header names ignoring surrounding
            whitespace and case
    """
    name: str
    rules: Tuple[ColumnRule, ...] = ()
    description: Optional[str] = None
    boolean_tokens: FrozenSet[str] = DEFAULT_BOOLEAN_TOKENS
    date_format: str = DEFAULT_DATE_FORMAT
    normalize_headers: bool = False
    _by_name: Mapping[str, ColumnRule] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        rules = tuple(self.rules)
        object.__setattr__(self, 'rules', rules)

        if not isinstance(self.boolean_tokens, (set, frozenset, list, tuple)):
            raise TemplateError(
                f'boolean_tokens must be a set of strings, got {self.boolean_tokens!r}'
            )

        if not all(isinstance(token, str) for token in self.boolean_tokens):
            raise TemplateError('boolean_tokens must only contain strings')

        object.__setattr__(
            self, 'boolean_tokens', frozenset(token.lower() for token in self.boolean_tokens)
        )

        if not self.boolean_tokens:
            raise TemplateError('boolean_tokens must not be empty')

        by_name: Dict[str, ColumnRule] = {}

        for number, rule in enumerate(rules, 1):
            if not isinstance(rule, ColumnRule):
                raise TemplateError(f'expected a ColumnRule, got {type(rule).__name__}', number)

            if rule.name in by_name:
                raise TemplateError(f'duplicate column_name {rule.name!r}', number)

            by_name[rule.name] = rule

        object.__setattr__(self, '_by_name', MappingProxyType(by_name))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Template':
        """
        Build a template from its stored JSON representation.

        Raises:
            TemplateError: If the template or any of its rules is malformed
        """
        if not isinstance(data, dict):
            raise TemplateError(f'template must be an object, got {type(data).__name__}')

        raw_rules = data.get('rules')

        if not isinstance(raw_rules, list):
            raise TemplateError('rules must be a list')

        rules: List[ColumnRule] = []

        for position, raw_rule in enumerate(raw_rules):
            try:
                rules.append(ColumnRule.from_dict(raw_rule, position))
            except ValueError as e:
                raise TemplateError(getattr(e, "reason", str(e)), position + 1) from None

        tokens = data.get('boolean_tokens') or DEFAULT_BOOLEAN_TOKENS

        if not isinstance(tokens, (list, frozenset)) or not all(
            isinstance(token, str) for token in tokens
        ):
            raise TemplateError('boolean_tokens must be a list of strings')

        date_format = data.get('date_format') or DEFAULT_DATE_FORMAT

        if not isinstance(date_format, str):
            raise TemplateError('date_format must be a string')

        normalize_headers = data.get('normalize_headers', False)

        if not isinstance(normalize_headers, bool):
            raise TemplateError('normalize_headers must be true or false')

        return cls(
            name=str(data.get('name') or 'template'),
            rules=tuple(rules),
            description=data.get('description') or None,
            boolean_tokens=frozenset(tokens),
            date_format=date_format,
            normalize_headers=normalize_headers,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the template to its stored JSON representation."""
        return {
            'name': self.name,
            'description': self.description,
            'boolean_tokens': sorted(self.boolean_tokens),
            'date_format': self.date_format,
            'normalize_headers': self.normalize_headers,
            'rules': [rule.to_dict() for rule in self.rules],
        }

    def get(self, name: str) -> Optional[ColumnRule]:
        """Return the rule for a column name, if any."""
        return self._by_name.get(name)

    @property
    def column_names(self) -> List[str]:
        return [rule.name for rule in self.rules]

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self):
        return iter(self.rules)


def load_template(path: str | Path) -> Template:
    """
    Load a template from a JSON file.

    Raises:
        TemplateError: If the file is not valid JSON or the template is malformed
    """
    path = Path(path)

    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise TemplateError(f'{path.name} is not valid JSON: {e}') from None
    except UnicodeDecodeError:
        raise TemplateError(f'{path.name} is not UTF-8 encoded') from None

    return Template.from_dict(data)
