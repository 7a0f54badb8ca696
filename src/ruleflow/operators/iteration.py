"""Iteration operators: ``map``, ``filter``, ``reduce``, ``all``, ``none``, ``some``.

All take ``[collection, logic(, extra)]``. The collection is resolved once in
the outer context; the logic is evaluated per element in a sub-context from
``build_item_context()``, after ``{"var": ""}`` has been replaced by the
element itself. ``reduce`` is the exception: it uses the narrow scope
``{"current", "accumulator"}`` and no substitution.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..context import build_item_context, is_current_item_ref, substitute_current_item
from ..errors import InvalidArgumentsError
from ..utils import is_logic, is_truthy
from ..variables import get_variable_value

if TYPE_CHECKING:
    from ..engine import RuleEngine


def evaluate_with_item(engine: RuleEngine, logic: Any, context: Any, item: Any) -> Any:
    """Evaluate ``logic`` for one element, binding ``{"var": ""}`` to ``item``.

    Errors raised by the top-level operation of ``logic`` propagate, as in
    ``RuleEngine.evaluate()``.
    """
    if is_current_item_ref(logic):
        return item
    if is_logic(logic):
        operator, operand = next(iter(substitute_current_item(logic, item).items()))
        return engine.apply_operator(operator, operand, context)
    return engine.resolve_value(logic, context)


def _collection(engine: RuleEngine, values: list[Any], data: Any) -> list[Any]:
    if not values or values[0] is None:
        raise InvalidArgumentsError("collection operand is required")
    if len(values) < 2 or values[1] is None:
        raise InvalidArgumentsError("logic operand is required")

    collection = engine.resolve_value(values[0], data)
    if not isinstance(collection, (list, tuple)):
        raise InvalidArgumentsError(f"collection must be a list, got {type(collection).__name__}")
    return list(collection)


def apply_map(engine: RuleEngine, values: list[Any], data: Any) -> list[Any]:
    """Evaluate the logic for each element; the result has the same length."""
    collection = _collection(engine, values, data)
    logic = values[1]
    if is_current_item_ref(logic):
        return collection

    return [
        evaluate_with_item(engine, logic, build_item_context(data, item, index), item)
        for index, item in enumerate(collection)
    ]


def apply_filter(engine: RuleEngine, values: list[Any], data: Any) -> list[Any]:
    """Keep the elements for which the logic is truthy."""
    collection = _collection(engine, values, data)
    logic = values[1]
    if is_current_item_ref(logic):
        return [item for item in collection if is_truthy(item)]

    return [
        item
        for index, item in enumerate(collection)
        if is_truthy(evaluate_with_item(engine, logic, build_item_context(data, item, index), item))
    ]


def apply_reduce(engine: RuleEngine, values: list[Any], data: Any) -> Any:
    """``[collection, logic, initial]``: left fold over ``current`` and ``accumulator``.

    ``initial`` is resolved in the outer context. A collection that is not a
    list returns ``initial`` unchanged, as does an empty one.
    """
    collection = engine.resolve_value(values[0], data) if values else None
    logic = values[1] if len(values) > 1 else None
    accumulator = engine.resolve_value(values[2], data) if len(values) > 2 else None

    if not isinstance(collection, (list, tuple)):
        return accumulator

    for current in collection:
        accumulator = engine.resolve_value(logic, {"current": current, "accumulator": accumulator})
    return accumulator


def _element_results(engine: RuleEngine, values: list[Any], data: Any):
    """Yield the truthiness of the logic for each element, lazily.

    ``{"var": "prop"}`` logic reads ``prop`` straight from a dict element,
    falling back to the outer context when the element lacks it.
    """
    collection = _collection(engine, values, data)
    logic = values[1]

    direct_property = None
    if is_logic(logic) and "var" in logic and isinstance(logic["var"], str):
        direct_property = logic["var"]

    for index, item in enumerate(collection):
        if direct_property == "":
            yield is_truthy(item)
        elif direct_property is not None:
            value = get_variable_value(engine, direct_property, item, None) if isinstance(item, Mapping) else None
            if value is None:
                value = get_variable_value(engine, direct_property, data, None)
            yield is_truthy(value)
        else:
            context = build_item_context(data, item, index)
            yield is_truthy(evaluate_with_item(engine, logic, context, item))


def apply_all(engine: RuleEngine, values: list[Any], data: Any) -> bool:
    """``True`` if the logic holds for every element; an empty collection gives ``False``."""
    results = _element_results(engine, values, data)
    found_any = False
    for result in results:
        found_any = True
        if not result:
            return False
    return found_any


def apply_none(engine: RuleEngine, values: list[Any], data: Any) -> bool:
    """``True`` if the logic holds for no element (including an empty collection)."""
    return not any(_element_results(engine, values, data))


def apply_some(engine: RuleEngine, values: list[Any], data: Any) -> bool:
    """``True`` if the logic holds for at least one element."""
    return any(_element_results(engine, values, data))


OPERATORS = {
    "map": apply_map,
    "filter": apply_filter,
    "reduce": apply_reduce,
    "all": apply_all,
    "none": apply_none,
    "some": apply_some,
}
