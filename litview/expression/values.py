"""Value semantics for placeholder expressions.

Placeholders follow template-literal conventions rather than Python ones:
``null``/``undefined`` are distinct, empty strings and zero are falsy while
empty lists are truthy, ``+`` concatenates as soon as one side is text, and
text conversion renders ``true``, ``null`` and ``1`` (not ``True``, ``None``
and ``1.0``).
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any, Callable

from litview.core.errors import EvaluationError


class _Undefined:
    _instance: '_Undefined | None' = None

    def __new__(cls) -> '_Undefined':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'undefined'

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


def is_nullish(value: Any) -> bool:
    return value is None or value is UNDEFINED


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_array(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def truthy(value: Any) -> bool:
    if is_nullish(value) or value is False:
        return False
    if is_number(value):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ''
    return True


def format_number(value: int | float) -> str:
    if isinstance(value, int):
        try:
            return str(value)
        except ValueError as exc:
            # Past the interpreter's int-to-str digit limit
            raise EvaluationError(f'Number is too large to render: {exc}') from exc
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def to_text(value: Any) -> str:
    """Convert an evaluated value to the text spliced into the output."""
    if isinstance(value, str):
        return value
    if value is None:
        return 'null'
    if value is UNDEFINED:
        return 'undefined'
    if value is True:
        return 'true'
    if value is False:
        return 'false'
    if is_number(value):
        return format_number(value)
    if is_array(value):
        return ','.join('' if is_nullish(item) else to_text(item) for item in value)
    if isinstance(value, Mapping):
        return '[object Object]'
    try:
        return str(value)
    except Exception as exc:  # noqa: BLE001 - boundary wrapper for caller-supplied objects
        raise EvaluationError(f'Cannot convert {type(value).__name__} to text: {exc}') from exc


def to_number(value: Any) -> int | float:
    if is_number(value):
        return value
    if isinstance(value, bool):
        return int(value)
    if value is None:
        return 0
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def type_of(value: Any) -> str:
    if value is UNDEFINED:
        return 'undefined'
    if isinstance(value, bool):
        return 'boolean'
    if is_number(value):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if callable(value):
        return 'function'
    return 'object'


def _kind(value: Any) -> str:
    if value is None:
        return 'null'
    return type_of(value)


def strict_equals(left: Any, right: Any) -> bool:
    if _kind(left) != _kind(right):
        return False
    if _kind(left) in ('number', 'string', 'boolean'):
        return left == right
    if is_nullish(left):
        return True
    return left is right


def loose_equals(left: Any, right: Any) -> bool:
    if is_nullish(left) or is_nullish(right):
        return is_nullish(left) and is_nullish(right)
    scalar = ('number', 'string', 'boolean')
    if _kind(left) != _kind(right) and _kind(left) in scalar and _kind(right) in scalar:
        return to_number(left) == to_number(right)
    return strict_equals(left, right)


def add(left: Any, right: Any) -> Any:
    if is_number(left) and is_number(right):
        return left + right
    if isinstance(left, str) or isinstance(right, str) or not _is_primitive(left) or not _is_primitive(right):
        return to_text(left) + to_text(right)
    return to_number(left) + to_number(right)


def arithmetic(op: str, left: Any, right: Any) -> int | float:
    a = to_number(left)
    b = to_number(right)
    if op == '-':
        return a - b
    if op == '*':
        return a * b
    if op == '/':
        if b == 0:
            if a == 0 or math.isnan(a):
                return math.nan
            return math.copysign(math.inf, a) * math.copysign(1, b)
        result = a / b
        return int(result) if isinstance(a, int) and isinstance(b, int) and result.is_integer() else result
    if op == '%':
        if b == 0 or math.isinf(a):
            return math.nan
        return math.fmod(a, b) if isinstance(a, float) or isinstance(b, float) else int(math.fmod(a, b))
    raise EvaluationError(f"Unsupported operator '{op}'")


def compare(op: str, left: Any, right: Any) -> bool:
    if isinstance(left, str) and isinstance(right, str):
        a: Any = left
        b: Any = right
    else:
        a = to_number(left)
        b = to_number(right)
    if op == '<':
        return a < b
    if op == '<=':
        return a <= b
    if op == '>':
        return a > b
    return a >= b


def _is_primitive(value: Any) -> bool:
    return is_nullish(value) or isinstance(value, (bool, int, float, str))


# ----------------------------------------------------------------------
# Member access
# ----------------------------------------------------------------------


class BoundMethod:
    """A whitelisted string, number or array method bound to its receiver."""

    def __init__(self, receiver: Any, name: str, impl: Callable[..., Any]) -> None:
        self.receiver = receiver
        self.name = name
        self._impl = impl

    def __call__(self, *args: Any) -> Any:
        return self._impl(self.receiver, *args)

    def __repr__(self) -> str:
        return f'<method {self.name}>'


def get_member(obj: Any, name: Any) -> Any:
    """Resolve ``obj.name`` / ``obj[name]``; missing members are ``undefined``."""
    if is_nullish(obj):
        raise EvaluationError(f"Cannot read properties of {to_text(obj)} (reading '{to_text(name)}')")

    if isinstance(obj, Mapping):
        if name in obj:
            return obj[name]
        if is_number(name) and to_text(name) in obj:
            return obj[to_text(name)]
        return UNDEFINED

    if isinstance(obj, str) or is_array(obj):
        if is_number(name):
            return _item_at(obj, name)
        if name == 'length':
            return len(obj)
        methods = STRING_METHODS if isinstance(obj, str) else ARRAY_METHODS
        if name in methods:
            return BoundMethod(obj, name, methods[name])
        if isinstance(name, str) and name.isdigit():
            return _item_at(obj, int(name))
        return UNDEFINED

    if is_number(obj) or isinstance(obj, bool):
        methods = NUMBER_METHODS if is_number(obj) else {'toString': _to_string}
        if name in methods:
            return BoundMethod(obj, name, methods[name])
        return UNDEFINED

    if not isinstance(name, str) or name.startswith('_'):
        return UNDEFINED
    try:
        return getattr(obj, name, UNDEFINED)
    except Exception as exc:  # noqa: BLE001 - boundary wrapper for caller-supplied objects
        raise EvaluationError(f"Reading '{name}' failed: {exc}") from exc


def _item_at(seq: Any, index: int | float) -> Any:
    if isinstance(index, float) and not index.is_integer():
        return UNDEFINED
    position = int(index)
    if 0 <= position < len(seq):
        return seq[position]
    return UNDEFINED


def _integer(value: Any, default: int | None) -> int | None:
    if is_nullish(value):
        return default
    number = to_number(value)
    if math.isnan(number):
        return 0
    if math.isinf(number):
        return default if number > 0 else 0
    return int(number)


def _call(fn: Any, *args: Any) -> Any:
    if not callable(fn):
        raise EvaluationError(f'{to_text(fn)} is not a function')
    return fn(*args)


def _to_string(receiver: Any, *args: Any) -> str:
    return to_text(receiver)


def _slice(receiver: Any, start: Any = UNDEFINED, end: Any = UNDEFINED) -> Any:
    result = receiver[_integer(start, 0):_integer(end, None)]
    return list(result) if is_array(receiver) else result


def _index_of(receiver: Any, needle: Any, *args: Any) -> int:
    if isinstance(receiver, str):
        return receiver.find(to_text(needle))
    for position, item in enumerate(receiver):
        if strict_equals(item, needle):
            return position
    return -1


def _includes(receiver: Any, needle: Any, *args: Any) -> bool:
    return _index_of(receiver, needle) != -1


def _split(receiver: str, separator: Any = UNDEFINED, *args: Any) -> list[str]:
    if is_nullish(separator):
        return [receiver]
    separator = to_text(separator)
    if separator == '':
        return list(receiver)
    return receiver.split(separator)


def _replace(receiver: str, pattern: Any, replacement: Any = UNDEFINED) -> str:
    pattern = to_text(pattern)
    if callable(replacement):
        if pattern not in receiver:
            return receiver
        return receiver.replace(pattern, to_text(replacement(pattern)), 1)
    return receiver.replace(pattern, to_text(replacement), 1)


def _map(receiver: Sequence[Any], fn: Any = UNDEFINED) -> list[Any]:
    return [_call(fn, item, position, receiver) for position, item in enumerate(receiver)]


def _filter(receiver: Sequence[Any], fn: Any = UNDEFINED) -> list[Any]:
    return [item for position, item in enumerate(receiver) if truthy(_call(fn, item, position, receiver))]


def _join(receiver: Sequence[Any], separator: Any = UNDEFINED) -> str:
    glue = ',' if separator is UNDEFINED else to_text(separator)
    return glue.join('' if is_nullish(item) else to_text(item) for item in receiver)


def _concat(receiver: Any, *others: Any) -> Any:
    if isinstance(receiver, str):
        return receiver + ''.join(to_text(other) for other in others)
    result = list(receiver)
    for other in others:
        if is_array(other):
            result.extend(other)
        else:
            result.append(other)
    return result


def _to_fixed(receiver: int | float, digits: Any = 0) -> str:
    places = _integer(digits, 0)
    if not 0 <= places <= 100:
        raise EvaluationError('toFixed() digits argument must be between 0 and 100')
    return f'{receiver:.{places}f}'


STRING_METHODS: dict[str, Callable[..., Any]] = {
    'toUpperCase': lambda s, *a: s.upper(),
    'toLowerCase': lambda s, *a: s.lower(),
    'trim': lambda s, *a: s.strip(),
    'startsWith': lambda s, prefix=UNDEFINED, *a: s.startswith(to_text(prefix)),
    'endsWith': lambda s, suffix=UNDEFINED, *a: s.endswith(to_text(suffix)),
    'includes': _includes,
    'indexOf': _index_of,
    'slice': _slice,
    'split': _split,
    'replace': _replace,
    'concat': _concat,
    'toString': _to_string,
}

# Array methods never mutate the receiver; reverse() returns a copy
ARRAY_METHODS: dict[str, Callable[..., Any]] = {
    'map': _map,
    'filter': _filter,
    'join': _join,
    'includes': _includes,
    'indexOf': _index_of,
    'slice': _slice,
    'concat': _concat,
    'reverse': lambda seq, *a: list(reversed(seq)),
    'toString': _to_string,
}

NUMBER_METHODS: dict[str, Callable[..., Any]] = {
    'toFixed': _to_fixed,
    'toString': _to_string,
}
