"""Equality and ordering operators.

Loose operators (``==``, ``!=`` and the orderings) treat a ``None`` operand
as ``0`` before comparing; strict operators compare type and value as is.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from ..utils import loose_compare, loose_equals, strict_equals

if TYPE_CHECKING:
    from ..engine import RuleEngine


def _zero_if_none(value: Any) -> Any:
    return 0 if value is None else value


def _operand(engine: RuleEngine, values: list[Any], index: int, data: Any) -> Any:
    raw = values[index] if index < len(values) else None
    return engine.resolve_value(raw, data)


def apply_equals(engine: RuleEngine, values: list[Any], data: Any) -> bool:
    """``[a, b]``, or ``[a, b, c, ...]`` meaning every operand equals ``a``."""
    first = _zero_if_none(_operand(engine, values, 0, data))
    if len(values) > 2:
        return all(loose_equals(_zero_if_none(engine.resolve_value(v, data)), first) for v in values[1:])
    second = _zero_if_none(_operand(engine, values, 1, data))
    return loose_equals(first, second)


def apply_not_equals(engine: RuleEngine, values: list[Any], data: Any) -> bool:
    first = _zero_if_none(_operand(engine, values, 0, data))
    second = _zero_if_none(_operand(engine, values, 1, data))
    return not loose_equals(first, second)


def apply_strict_equals(engine: RuleEngine, values: list[Any], data: Any) -> bool:
    first = _operand(engine, values, 0, data)
    if len(values) > 2:
        return all(strict_equals(engine.resolve_value(v, data), first) for v in values[1:])
    return strict_equals(first, _operand(engine, values, 1, data))


def apply_strict_not_equals(engine: RuleEngine, values: list[Any], data: Any) -> bool:
    if len(values) < 2:
        return False
    first = engine.resolve_value(values[0], data)
    second = engine.resolve_value(values[1], data)
    return not strict_equals(first, second)


def _ordering(test: Callable[[int], bool]) -> Callable[[RuleEngine, list[Any], Any], bool]:
    """Build an ordering operator from a test on ``loose_compare()``'s result.

    The operator accepts:
        - ``[a, b]``: ``a OP b``
        - ``[a, b, c]``: ``a OP b and b OP c`` (``False`` if any is ``None``)
        - ``[[...]]``: the inner list, one level down
    """

    def apply(engine: RuleEngine, values: list[Any], data: Any) -> bool:
        if not values:
            return False
        if len(values) == 1 and isinstance(values[0], (list, tuple)):
            return apply(engine, list(values[0]), data)

        if len(values) == 3:
            if any(v is None for v in values):
                return False
            a, b, c = (_zero_if_none(engine.resolve_value(v, data)) for v in values)
            return test(loose_compare(a, b)) and test(loose_compare(b, c))

        if len(values) < 2:
            return False
        a = _zero_if_none(engine.resolve_value(values[0], data))
        b = _zero_if_none(engine.resolve_value(values[1], data))
        return test(loose_compare(a, b))

    return apply


OPERATORS = {
    "==": apply_equals,
    "!=": apply_not_equals,
    "===": apply_strict_equals,
    "!==": apply_strict_not_equals,
    ">": _ordering(lambda r: r > 0),
    ">=": _ordering(lambda r: r >= 0),
    "<": _ordering(lambda r: r < 0),
    "<=": _ordering(lambda r: r <= 0),
}
