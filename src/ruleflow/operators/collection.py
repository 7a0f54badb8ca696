"""Data access, collection and utility operators.

``var``, ``val``, ``missing``, ``missing_some``, ``exists``, ``get``,
``merge``, ``in``, ``keys``, ``length``, ``??``, ``preserve``/``value``,
``eachKey`` and ``log``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sized
from typing import TYPE_CHECKING, Any

from ..context import as_mapping
from ..errors import UndefinedLengthError
from ..utils import MISSING, is_array, loose_compare, loose_equals, to_text
from ..variables import find_missing, get_property, get_variable_value, walk_keys

if TYPE_CHECKING:
    from ..engine import RuleEngine


def _as_list(values: Any) -> list[Any]:
    return list(values) if isinstance(values, (list, tuple)) else [values]


def apply_var(engine: RuleEngine, values: Any, data: Any) -> Any:
    """``{"var": path}`` or ``{"var": [path, fallback]}``; see ``get_variable_value()``."""
    path = engine.resolve_value(values, data)
    return get_variable_value(engine, path, data)


def apply_val(engine: RuleEngine, values: Any, data: Any) -> Any:
    return walk_keys(values, data)


def apply_missing(engine: RuleEngine, values: Any, data: Any) -> list[Any]:
    return find_missing(engine, values, data)


def apply_missing_some(engine: RuleEngine, values: Any, data: Any) -> list[Any]:
    """``[min_required, keys]``: ``[]`` if enough keys are present, else the missing ones."""
    values = _as_list(values)
    if len(values) < 2:
        return []

    min_required = engine.resolve_value(values[0], data)
    keys = _as_list(engine.resolve_value(values[1], data))
    missing = find_missing(engine, keys, data)
    found = len(keys) - len(missing)
    if loose_compare(found, 0 if min_required is None else min_required) >= 0:
        return []
    return missing


def apply_exists(engine: RuleEngine, values: Any, data: Any) -> bool:
    return get_variable_value(engine, values, data, MISSING) is not MISSING


def apply_get(engine: RuleEngine, values: Any, data: Any) -> Any:
    """``[container, key, default?]``."""
    values = _as_list(values)
    if len(values) < 2:
        return None
    container = engine.resolve_value(values[0], data)
    key = engine.resolve_value(values[1], data)
    default = engine.resolve_value(values[2], data) if len(values) > 2 else None
    return get_property(container, key, default)


def apply_merge(engine: RuleEngine, values: Any, data: Any) -> list[Any]:
    """Flatten one level: lists are concatenated, everything else appended."""
    if not isinstance(values, (list, tuple)):
        resolved = engine.resolve_value(values, data)
        return list(resolved) if isinstance(resolved, (list, tuple)) else [resolved]

    merged: list[Any] = []
    for value in values:
        resolved = engine.resolve_value(value, data)
        if isinstance(resolved, (list, tuple)):
            merged.extend(resolved)
        else:
            merged.append(resolved)
    return merged


def apply_in(engine: RuleEngine, values: Any, data: Any) -> bool:
    """``[needle, haystack]``: substring of a string, or loose member of a list."""
    values = _as_list(values)
    needle = engine.resolve_value(values[0], data) if values else None
    haystack = engine.resolve_value(values[1], data) if len(values) > 1 else None

    if isinstance(haystack, str):
        return to_text(needle) in haystack
    if isinstance(haystack, Mapping):
        haystack = list(haystack.values())
    if isinstance(haystack, (list, tuple)):
        return any(loose_equals(item, needle) for item in haystack)
    return False


def apply_keys(engine: RuleEngine, values: Any, data: Any) -> list[Any]:
    resolved = engine.resolve_value(values, data)
    if isinstance(resolved, Mapping):
        return list(resolved)
    if isinstance(resolved, (list, tuple)):
        return list(range(len(resolved)))
    return []


def apply_length(engine: RuleEngine, values: Any, data: Any) -> int:
    """Character, element or key count.

    Raises:
        UndefinedLengthError: For numbers, booleans, ``None`` and other
            values without a size.
    """
    resolved = engine.resolve_value(values, data)
    if isinstance(resolved, (list, tuple)) and len(resolved) == 1 and resolved[0] is not None:
        resolved = resolved[0]

    if isinstance(resolved, Sized):
        return len(resolved)
    raise UndefinedLengthError(f"cannot determine length of {type(resolved).__name__}")


def apply_coalesce(engine: RuleEngine, values: Any, data: Any) -> Any:
    """First operand resolving to something other than ``None`` or ``""``."""
    for value in _as_list(values):
        resolved = engine.resolve_value(value, data)
        if resolved is not None and resolved != "":
            return resolved
    return None


def apply_preserve(engine: RuleEngine, values: Any, data: Any) -> Any:
    return values


def apply_each_key(engine: RuleEngine, values: Any, data: Any) -> list[list[Any]]:
    """``[object, logic]``: evaluate ``logic`` once per entry of ``object``.

    Each evaluation sees the outer context plus ``key``, ``value`` and
    ``current: {"key", "value"}``. Returns ``[key, result]`` pairs in order.
    """
    values = _as_list(values)
    if len(values) < 2:
        return []

    target = engine.resolve_value(values[0], data)
    logic = values[1]
    if isinstance(target, Mapping):
        entries = list(target.items())
    elif isinstance(target, (list, tuple)):
        entries = list(enumerate(target))
    else:
        return []

    results = []
    for key, value in entries:
        context = as_mapping(data)
        context.update(key=key, value=value, current={"key": key, "value": value})
        results.append([key, engine.resolve_value(logic, context)])
    return results


def apply_log(engine: RuleEngine, values: Any, data: Any) -> Any:
    """Send the resolved value to the engine's log sink and return it unchanged."""
    resolved = engine.resolve_value(values, data)
    if is_array(resolved):
        text = json.dumps(resolved, default=str)
    else:
        text = to_text(resolved)
    engine.write_log(text)
    return resolved


OPERATORS = {
    "var": apply_var,
    "val": apply_val,
    "missing": apply_missing,
    "missing_some": apply_missing_some,
    "exists": apply_exists,
    "get": apply_get,
    "merge": apply_merge,
    "in": apply_in,
    "keys": apply_keys,
    "length": apply_length,
    "??": apply_coalesce,
    "preserve": apply_preserve,
    "value": apply_preserve,
    "eachKey": apply_each_key,
    "log": apply_log,
}
