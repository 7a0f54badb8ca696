"""Scope construction for iteration operators.

``map``, ``filter``, ``all``, ``none`` and ``some`` evaluate their logic once
per element. Each evaluation sees a fresh sub-context built here; the caller's
context is never written to.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .utils import is_array, is_logic

SCALAR_KEY = "__scalar__"
"""Key under which a non-container data context is wrapped for dispatch."""

ITERATION_OPERATORS = frozenset({"map", "filter", "reduce", "all", "none", "some"})
"""Operators whose logic argument is evaluated in a per-element scope."""

LITERAL_OPERATOR = "preserve"
"""Operator wrapping substituted container elements; it cannot be overridden."""


def wrap_context(data: Any) -> Any:
    """Wrap a scalar data context so operators always receive a container.

    ``{"var": ""}`` unwraps it again, see ``unwrap_context()``.
    """
    if is_array(data):
        return data
    return {SCALAR_KEY: data}


def unwrap_context(data: Any) -> Any:
    if isinstance(data, Mapping) and len(data) == 1 and SCALAR_KEY in data:
        return data[SCALAR_KEY]
    return data


def as_mapping(data: Any) -> dict[Any, Any]:
    """Return a new dict holding the entries of ``data``.

    Lists contribute their indexes as keys; scalars are wrapped under
    ``SCALAR_KEY``.
    """
    if isinstance(data, Mapping):
        return dict(data)
    if isinstance(data, (list, tuple)):
        return dict(enumerate(data))
    return {SCALAR_KEY: data}


def build_item_context(data: Any, item: Any, index: int) -> dict[Any, Any]:
    """Build the scope for one element of an iteration.

    The scope is a copy of the outer context plus:
        - ``current``: the element itself
        - ``index``: its 0-based position
        - the element's own keys when it is a dict (they win on conflict),
          or the element under ``_`` when it is a scalar

    Args:
        data: The outer data context.
        item: The element being visited.
        index: Position of ``item`` in the collection.

    Returns:
        A new dict; neither ``data`` nor ``item`` is modified.

    Examples:
        >>> build_item_context({"limit": 3}, {"qty": 5}, 0)
        {'limit': 3, 'current': {'qty': 5}, 'index': 0, 'qty': 5}
        >>> build_item_context({"limit": 3}, 7, 1)
        {'limit': 3, 'current': 7, 'index': 1, '_': 7}
    """
    context = as_mapping(data)
    context["current"] = item
    context["index"] = index
    if isinstance(item, Mapping):
        context.update(item)
    elif not is_array(item):
        context["_"] = item
    return context


def is_current_item_ref(value: Any) -> bool:
    """Return ``True`` for ``{"var": ""}`` (and ``{"var": None}``)."""
    return is_logic(value) and "var" in value and value["var"] in ("", None)


def _as_literal(item: Any) -> Any:
    # Containers would otherwise be re-read as rules (or resolved element-wise).
    if is_array(item):
        return {LITERAL_OPERATOR: item}
    return item


def substitute_current_item(values: Any, item: Any) -> Any:
    """Replace every ``{"var": ""}`` in ``values`` with ``item``.

    The replacement is literal: a dict or list element is wrapped in
    ``preserve`` so evaluating it yields the element unchanged. The logic
    argument of a nested iteration operator is left alone, since that
    operator binds ``{"var": ""}`` to its own elements; its collection
    argument is still substituted.

    Examples:
        >>> substitute_current_item({"%": [{"var": ""}, 2]}, 5)
        {'%': [5, 2]}
    """
    if is_current_item_ref(values):
        return _as_literal(item)
    if is_logic(values):
        operator, operand = next(iter(values.items()))
        if operator in ITERATION_OPERATORS and isinstance(operand, (list, tuple)) and operand:
            head = substitute_current_item(operand[0], item)
            return {operator: [head, *operand[1:]]}
        return {operator: substitute_current_item(operand, item)}
    if isinstance(values, Mapping):
        return {key: substitute_current_item(value, item) for key, value in values.items()}
    if isinstance(values, (list, tuple)):
        return [substitute_current_item(value, item) for value in values]
    return values
