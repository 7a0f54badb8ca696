from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping
from typing import Any


class _Missing:
    """Marker type for an absent key; falsy, and distinct from ``None``."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()
"""Returned by lookups when the key is absent (as opposed to present but falsy)."""

_NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")
_INTEGER_RE = re.compile(r"^\s*[+-]?\d+\s*$")


def is_array(value: Any) -> bool:
    """Return ``True`` for the container types a rule or context may hold."""
    return isinstance(value, (list, tuple, Mapping))


def is_logic(value: Any) -> bool:
    """Return ``True`` if ``value`` is an operation node.

    An operation node is a dict with exactly one key, and that key is a
    string. Everything else is a literal.

    Examples:
        >>> is_logic({"var": "a"})
        True
        >>> is_logic({"a": 1, "b": 2})
        False
        >>> is_logic(["var", "a"])
        False
    """
    return isinstance(value, Mapping) and len(value) == 1 and isinstance(next(iter(value)), str)


def is_truthy(value: Any) -> bool:
    """Determine if a value is truthy according to ruleflow semantics.

    Args:
        value: The value to check.

    Returns:
        ``True`` if the value is considered truthy, ``False`` otherwise.

    Truthiness rules:
        - ``None``, ``False``, ``""`` and the integer ``0``: ``False``
        - ``"0"``: ``True`` (differs from loose coercion, see ``_php_bool``)
        - list/tuple/dict: ``True`` if non-empty
        - Other values, including ``0.0``: ``True``

    Examples:
        >>> is_truthy("0")
        True
        >>> is_truthy(0)
        False
        >>> is_truthy([])
        False
    """
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, int) and not isinstance(value, bool):
        return value != 0
    if is_array(value):
        return len(value) > 0
    return True


def is_numeric(value: Any) -> bool:
    """Return ``True`` for numbers and numeric strings (booleans excluded).

    Numeric strings may carry surrounding whitespace, a sign, a fraction
    and an exponent: ``" 12"``, ``"-1.5"``, ``"1e3"``.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    if isinstance(value, str):
        return _NUMERIC_RE.match(value) is not None
    return False


def to_number(value: Any) -> int | float:
    """Convert a numeric value, numeric string or boolean to a number.

    Anything else converts to ``0``.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str) and is_numeric(value):
        if _INTEGER_RE.match(value):
            return int(value)
        return float(value)
    return 0


def to_int(value: Any) -> int:
    """Truncating integer conversion; non-numeric values become ``0``."""
    number = to_number(value)
    if isinstance(number, float):
        if not math.isfinite(number):
            return 0
        return int(number)
    return number


def to_text(value: Any) -> str:
    """Render a value the way ``cat`` concatenates it.

    - ``None``: ``""``
    - booleans: ``"true"`` / ``"false"``
    - lists and dicts: compact JSON
    - integral floats: no trailing ``.0``
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_array(value):
        return json.dumps(value, separators=(",", ":"), default=str)
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def _php_bool(value: Any) -> bool:
    # Loose-comparison boolean cast: unlike is_truthy, "0" is false here.
    if isinstance(value, str):
        return value not in ("", "0")
    if isinstance(value, float):
        return value != 0.0
    return is_truthy(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def loose_equals(a: Any, b: Any) -> bool:
    """Type-juggling equality used by ``==``, ``!=``, ``in`` and ``contains``.

    Rules, applied in order:
        - ``None == None``
        - a boolean on either side: compare boolean casts
        - ``None`` against a string: equal to ``""`` only; against anything
          else: equal to falsy values
        - numbers and numeric strings compare numerically
        - a number against a non-numeric string compares as text
        - lists compare element-wise, dicts key-wise
        - otherwise Python equality

    Examples:
        >>> loose_equals(1, "1")
        True
        >>> loose_equals(0, "")
        False
        >>> loose_equals(True, "yes")
        True
    """
    if a is None and b is None:
        return True
    if isinstance(a, bool) or isinstance(b, bool):
        return _php_bool(a) == _php_bool(b)
    if a is None or b is None:
        other = b if a is None else a
        if isinstance(other, str):
            return other == ""
        return not _php_bool(other)
    if _is_number(a) and _is_number(b):
        return a == b
    if isinstance(a, str) and isinstance(b, str):
        if is_numeric(a) and is_numeric(b):
            return to_number(a) == to_number(b)
        return a == b
    if _is_number(a) and isinstance(b, str):
        return a == to_number(b) if is_numeric(b) else to_text(a) == b
    if isinstance(a, str) and _is_number(b):
        return to_number(a) == b if is_numeric(a) else a == to_text(b)
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        return len(a) == len(b) and all(loose_equals(x, y) for x, y in zip(a, b))
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if set(a) != set(b):
            return False
        return all(loose_equals(a[k], b[k]) for k in a)
    return a == b


def strict_equals(a: Any, b: Any) -> bool:
    """Type-and-value equality used by ``===`` and ``!==``.

    ``1`` and ``1.0`` differ, as do ``True`` and ``1``. Lists (and tuples)
    compare element-wise; dicts must share keys in the same order.
    """
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        return len(a) == len(b) and all(strict_equals(x, y) for x, y in zip(a, b))
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if list(a) != list(b):
            return False
        return all(strict_equals(a[k], b[k]) for k in a)
    return type(a) is type(b) and a == b


def _entries(container: Any) -> list[tuple[Any, Any]]:
    if isinstance(container, Mapping):
        return list(container.items())
    return list(enumerate(container))


def _compare_containers(a: Any, b: Any) -> int:
    # Size first, then values in the key order of ``a``; a key missing
    # from ``b`` makes ``a`` the greater.
    if len(a) != len(b):
        return _cmp(len(a), len(b))
    for key, value in _entries(a):
        other = lookup_key(b, key)
        if other is MISSING:
            return 1
        result = loose_compare(value, other)
        if result:
            return result
    return 0


def loose_compare(a: Any, b: Any) -> int:
    """Three-way comparison used by the ordering operators.

    Returns a negative number, zero or a positive number. Numbers and
    numeric strings compare numerically, booleans and ``None`` by boolean
    cast, strings lexically, and a number against a non-numeric string as
    text. A container is greater than any scalar; two containers compare by
    size, then entry by entry. Any other pair compares as text, so every
    pair of values is ordered.
    """
    if a is None and isinstance(b, str):
        return _cmp("", b)
    if b is None and isinstance(a, str):
        return _cmp(a, "")
    if isinstance(a, bool) or isinstance(b, bool) or a is None or b is None:
        return _cmp(_php_bool(a), _php_bool(b))
    if is_numeric(a) and is_numeric(b):
        return _cmp(to_number(a), to_number(b))
    if isinstance(a, str) and isinstance(b, str):
        return _cmp(a, b)
    if _is_number(a) and isinstance(b, str):
        return _cmp(to_text(a), b)
    if isinstance(a, str) and _is_number(b):
        return _cmp(a, to_text(b))
    if is_array(a) and is_array(b):
        return _compare_containers(a, b)
    if is_array(a):
        return 1
    if is_array(b):
        return -1
    return _cmp(to_text(a), to_text(b))


def _as_index(key: Any) -> int | None:
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    if isinstance(key, float) and key.is_integer():
        return int(key)
    if isinstance(key, str) and _INTEGER_RE.match(key):
        return int(key)
    return None


def lookup_key(container: Any, key: Any, default: Any = MISSING) -> Any:
    """Look up a single key in a dict or list.

    The string and integer spellings of a key are interchangeable, so
    ``"0"`` finds ``{0: ...}`` and ``0`` finds ``{"0": ...}``. Lists accept
    non-negative integer indexes only.

    Returns:
        The value (which may be ``None``), or ``default`` if absent.
    """
    if isinstance(container, Mapping):
        if isinstance(key, (str, int, float)) and key in container:
            return container[key]
        index = _as_index(key)
        if index is not None:
            if index in container:
                return container[index]
            if str(index) in container:
                return container[str(index)]
        return default
    if isinstance(container, (list, tuple)):
        index = _as_index(key)
        if index is not None and 0 <= index < len(container):
            return container[index]
        return default
    return default


def deep_get(obj: Any, path: str, default: Any = None) -> Any:
    """Retrieve a nested value from an object using dot-separated path notation.

    Traverses nested dicts, lists, and tuples to retrieve a value at the
    specified path. Returns the default value if any part of the path
    cannot be resolved.

    Args:
        obj: The object to traverse (typically a dict or list).
        path: Dot-separated path to the desired value. Examples:
            - ``"user.name"`` for ``{"user": {"name": "Alice"}}``
            - ``"items.0.id"`` for ``{"items": [{"id": 1}]}``
            - ``"items.-1"`` for the last element of a list
        default: Value to return if the path cannot be resolved.

    Returns:
        The value at the specified path, or ``default`` if not found.

    Examples:
        >>> deep_get({"a": {"b": 1}}, "a.b")
        1
        >>> deep_get({"items": [10, 20]}, "items.1")
        20
        >>> deep_get({}, "missing.path", default="N/A")
        'N/A'
    """
    parts = [p for p in path.split(".") if p]
    cur = obj
    for part in parts:
        if isinstance(cur, Mapping):
            cur = lookup_key(cur, part)
            if cur is MISSING:
                return default
            continue
        if isinstance(cur, (list, tuple)):
            try:
                index = int(part)
            except ValueError:
                return default
            if -len(cur) <= index < len(cur):
                cur = cur[index]
                continue
            return default
        return default
    return cur
