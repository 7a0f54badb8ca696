"""Builtin operator handlers.

Every handler has the signature ``handler(engine, values, data)``: the
dispatching ``RuleEngine`` (for resolving operands), the raw operand(s) and
the data context.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from . import arithmetic, collection, comparison, iteration, logic, strings

OperatorHandler = Callable[[Any, Any, Any], Any]

BUILTIN_OPERATORS: dict[str, OperatorHandler] = {
    **logic.OPERATORS,
    **comparison.OPERATORS,
    **arithmetic.OPERATORS,
    **strings.OPERATORS,
    **collection.OPERATORS,
    **iteration.OPERATORS,
}

__all__ = ["BUILTIN_OPERATORS", "OperatorHandler"]
