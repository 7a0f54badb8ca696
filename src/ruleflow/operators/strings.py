"""String operators: ``cat``, ``substr``, ``contains``, ``startsWith``, ``endsWith``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..utils import loose_equals, to_int, to_text

if TYPE_CHECKING:
    from ..engine import RuleEngine


def _as_list(values: Any) -> list[Any]:
    return list(values) if isinstance(values, (list, tuple)) else [values]


def _pair(engine: RuleEngine, values: Any, data: Any) -> tuple[Any, Any]:
    values = _as_list(values)
    first = engine.resolve_value(values[0], data) if values else None
    second = engine.resolve_value(values[1], data) if len(values) > 1 else None
    return first, second


def apply_cat(engine: RuleEngine, values: Any, data: Any) -> str:
    return "".join(to_text(engine.resolve_value(value, data)) for value in _as_list(values))


def substring(text: str, start: int, length: int | None = None) -> str:
    """Slice ``text`` like ``substr``.

    A negative ``start`` counts from the end. A negative ``length`` leaves
    that many characters off the end.

    Examples:
        >>> substring("jsonlogic", 4)
        'logic'
        >>> substring("jsonlogic", -5)
        'logic'
        >>> substring("jsonlogic", 1, -5)
        'son'
    """
    size = len(text)
    if start < 0:
        start = max(size + start, 0)
    if start >= size:
        return ""
    if length is None:
        return text[start:]
    if length < 0:
        end = size + length
        return text[start:end] if end > start else ""
    return text[start:start + length]


def apply_substr(engine: RuleEngine, values: Any, data: Any) -> str:
    values = _as_list(values)
    text = to_text(engine.resolve_value(values[0], data)) if values else ""
    start = to_int(engine.resolve_value(values[1], data)) if len(values) > 1 else 0
    if len(values) > 2:
        return substring(text, start, to_int(engine.resolve_value(values[2], data)))
    return substring(text, start)


def apply_contains(engine: RuleEngine, values: Any, data: Any) -> bool:
    """Substring test on strings, loose membership on lists."""
    haystack, needle = _pair(engine, values, data)
    if isinstance(haystack, str):
        return isinstance(needle, str) and needle in haystack
    if isinstance(haystack, (list, tuple)):
        return any(loose_equals(item, needle) for item in haystack)
    return False


def apply_starts_with(engine: RuleEngine, values: Any, data: Any) -> bool:
    haystack, needle = _pair(engine, values, data)
    if not isinstance(haystack, str) or not isinstance(needle, str):
        return False
    return haystack.startswith(needle)


def apply_ends_with(engine: RuleEngine, values: Any, data: Any) -> bool:
    haystack, needle = _pair(engine, values, data)
    if not isinstance(haystack, str) or not isinstance(needle, str):
        return False
    return haystack.endswith(needle)


OPERATORS = {
    "cat": apply_cat,
    "substr": apply_substr,
    "contains": apply_contains,
    "startsWith": apply_starts_with,
    "endsWith": apply_ends_with,
}
