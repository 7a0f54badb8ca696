"""Branching and boolean operators: ``if``/``?:``, ``and``, ``or``, ``!``, ``!!``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..utils import is_array, is_logic, is_truthy

if TYPE_CHECKING:
    from ..engine import RuleEngine


def apply_if(engine: RuleEngine, values: list[Any], data: Any) -> Any:
    """``[cond1, then1, cond2, then2, ..., else]``; the else branch is optional."""
    if len(values) == 1:
        return engine.resolve_value(values[0], data)
    if not values:
        return None

    values = list(values)
    if len(values) % 2 == 0:
        values.append(None)
    on_false = values.pop()

    for condition, on_true in zip(values[::2], values[1::2]):
        if is_truthy(engine.resolve_value(condition, data)):
            return engine.resolve_value(on_true, data)
    return engine.resolve_value(on_false, data)


def apply_and(engine: RuleEngine, values: list[Any], data: Any) -> Any:
    """Return the first falsy operand value, else the last one."""
    if not values:
        return False
    current = None
    for rule in values:
        current = engine.resolve_value(rule, data)
        if not is_truthy(current):
            return current
    return current


def apply_or(engine: RuleEngine, values: list[Any], data: Any) -> Any:
    """Return the first truthy operand value, else the last one."""
    if not values:
        return False
    current = None
    for rule in values:
        current = engine.resolve_value(rule, data)
        if is_truthy(current):
            return current
    return current


def _single_operand(engine: RuleEngine, value: Any, data: Any) -> Any:
    # [x] and x are the same operand; only the first list element counts.
    if is_logic(value) or not is_array(value):
        return engine.resolve_value(value, data)
    first = value[0] if isinstance(value, (list, tuple)) else None
    return engine.resolve_value(first, data)


def apply_not(engine: RuleEngine, value: Any, data: Any) -> bool:
    if value is None:
        return True
    if is_array(value) and len(value) == 0:
        return True
    return not is_truthy(_single_operand(engine, value, data))


def apply_double_not(engine: RuleEngine, value: Any, data: Any) -> bool:
    if value is None:
        return False
    if is_array(value) and len(value) == 0:
        return False
    if isinstance(value, (list, tuple)) and is_array(value[0]) and len(value[0]) == 0:
        return False
    return is_truthy(_single_operand(engine, value, data))


OPERATORS = {
    "if": apply_if,
    "?:": apply_if,
    "and": apply_and,
    "or": apply_or,
    "!": apply_not,
    "!!": apply_double_not,
}
