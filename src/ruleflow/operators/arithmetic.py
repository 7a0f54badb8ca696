"""Arithmetic operators: ``+ - * / %``, ``max`` and ``min``.

Operands are resolved first. Numbers and numeric strings count as numbers,
booleans as ``0``/``1`` where noted; lists and other values are skipped or
short-circuit, depending on the operator.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from ..utils import is_array, is_numeric, to_int, to_number

if TYPE_CHECKING:
    from ..engine import RuleEngine


def _number_or_zero(value: Any) -> int | float:
    return to_number(value) if is_numeric(value) else 0


def _divide(dividend: int | float, divisor: int | float) -> int | float:
    # Exact integer division stays an int.
    if isinstance(dividend, int) and isinstance(divisor, int) and dividend % divisor == 0:
        return dividend // divisor
    return dividend / divisor


def apply_add(engine: RuleEngine, values: Any, data: Any) -> int | float:
    if not isinstance(values, (list, tuple)):
        return _number_or_zero(engine.resolve_value(values, data))

    total: int | float = 0
    for value in values:
        resolved = engine.resolve_value(value, data)
        if isinstance(resolved, bool) or is_numeric(resolved):
            total += to_number(resolved)
    return total


def apply_subtract(engine: RuleEngine, values: Any, data: Any) -> int | float:
    if not isinstance(values, (list, tuple)):
        return -_number_or_zero(engine.resolve_value(values, data))
    if not values:
        return 0
    if len(values) == 1:
        return -_number_or_zero(engine.resolve_value(values[0], data))

    result = _number_or_zero(engine.resolve_value(values[0], data))
    for value in values[1:]:
        subtrahend = engine.resolve_value(value, data)
        if is_array(subtrahend):
            continue
        if isinstance(subtrahend, bool) or is_numeric(subtrahend):
            result -= to_number(subtrahend)
    return result


def apply_multiply(engine: RuleEngine, values: Any, data: Any) -> int | float:
    if not isinstance(values, (list, tuple)):
        return _number_or_zero(engine.resolve_value(values, data))
    if not values:
        return 1
    if len(values) == 1:
        return _number_or_zero(engine.resolve_value(values[0], data))

    product: int | float = 1
    for value in values:
        factor = engine.resolve_value(value, data)
        if not (isinstance(factor, bool) or is_numeric(factor)):
            return 0
        product *= to_number(factor)
    return product


def apply_divide(engine: RuleEngine, values: Any, data: Any) -> int | float | None:
    """Chained division; any non-numeric operand or zero divisor gives ``None``."""
    if not isinstance(values, (list, tuple)):
        return values
    if not values:
        return None
    if len(values) == 1:
        return _number_or_zero(engine.resolve_value(values[0], data))
    if values[0] is None or values[1] is None:
        return None

    dividend = engine.resolve_value(values[0], data)
    if not is_numeric(dividend):
        return None

    result = to_number(dividend)
    for value in values[1:]:
        divisor = engine.resolve_value(value, data)
        if not is_numeric(divisor) or to_number(divisor) == 0:
            return None
        result = _divide(result, to_number(divisor))
    return result


def apply_modulo(engine: RuleEngine, values: Any, data: Any) -> int | None:
    """Integer remainder taking the sign of the dividend."""
    if not isinstance(values, (list, tuple)) or len(values) < 2:
        return None
    if values[0] is None or values[1] is None:
        return None

    dividend = engine.resolve_value(values[0], data)
    divisor = engine.resolve_value(values[1], data)
    if not is_numeric(dividend) or not is_numeric(divisor):
        return None

    a, b = to_int(dividend), to_int(divisor)
    if b == 0:
        return None
    remainder = abs(a) % abs(b)
    return -remainder if a < 0 else remainder


def _extreme(better: Callable[[Any, Any], bool]) -> Callable[[RuleEngine, Any, Any], Any]:
    """Build ``max``/``min``: ``better(candidate, best)`` decides replacement."""

    def apply(engine: RuleEngine, values: Any, data: Any) -> Any:
        if not isinstance(values, (list, tuple)):
            return _number_or_zero(engine.resolve_value(values, data))
        if not values:
            return None
        if len(values) == 1:
            single = engine.resolve_value(values[0], data)
            if isinstance(single, Mapping):
                return apply(engine, list(single.values()), data)
            if isinstance(single, (list, tuple)):
                return apply(engine, list(single), data)
            return _number_or_zero(single)

        best = None
        for value in values:
            current = engine.resolve_value(value, data)
            if not is_numeric(current):
                continue
            current = to_number(current)
            if best is None or better(current, best):
                best = current
        return best

    return apply


OPERATORS = {
    "+": apply_add,
    "-": apply_subtract,
    "*": apply_multiply,
    "/": apply_divide,
    "%": apply_modulo,
    "max": _extreme(lambda candidate, best: candidate > best),
    "min": _extreme(lambda candidate, best: candidate < best),
}
