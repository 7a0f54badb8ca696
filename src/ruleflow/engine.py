from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from .context import wrap_context
from .errors import UnknownOperatorError
from .operators import BUILTIN_OPERATORS
from .registry import OperatorRegistry, default_registry
from .utils import is_array, is_logic, is_truthy, loose_compare, loose_equals, strict_equals

logger = logging.getLogger(__name__)
log_channel = logging.getLogger("ruleflow.log")

LogSink = Callable[[str], None]
"""Receives the text of every ``log`` operation."""

NARY_OPERATORS = frozenset(
    {
        "if", "?:", "and", "or",
        "filter", "map", "reduce", "all", "none", "some",
        "==", "===", "!=", "!==", ">", ">=", "<", "<=",
    }
)
"""Operators whose single non-list operand is wrapped into a one-element list."""

_SHORTHAND_COMPARISONS: dict[str, Callable[[Any, Any], bool]] = {
    ">": lambda a, b: loose_compare(a, b) > 0,
    ">=": lambda a, b: loose_compare(a, b) >= 0,
    "<": lambda a, b: loose_compare(a, b) < 0,
    "<=": lambda a, b: loose_compare(a, b) <= 0,
    "==": loose_equals,
    "===": strict_equals,
    "!=": lambda a, b: not loose_equals(a, b),
    "!==": lambda a, b: not strict_equals(a, b),
}


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one operation inside a rule tree.

    Sub-rules fail soft: a failing operation yields a ``Resolution`` holding
    the error instead of raising, and the caller picks the fallback value.

    Attributes:
        value: The operation's result; ``None`` when it failed.
        error: The exception raised by the operation, if any.
    """

    value: Any = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _default_log_sink(text: str) -> None:
    log_channel.info(text)


class RuleEngine:
    """Evaluates rule trees against data contexts.

    A rule is a literal, a list (resolved element-wise) or an operation
    node: a dict with a single string key naming the operator, e.g.
    ``{"<": [{"var": "age"}, 18]}``.

    Attributes:
        registry: The ``OperatorRegistry`` consulted before builtins.
        log_sink: Callable receiving the text of ``log`` operations.

    Example:
        >>> engine = RuleEngine()
        >>> engine.evaluate({"if": [{"<": [{"var": "temp"}, 0]}, "freezing", "fine"]}, {"temp": -4})
        'freezing'
    """

    def __init__(self, registry: OperatorRegistry | None = None, *, log_sink: LogSink | None = None) -> None:
        """Initialize a rule engine.

        Args:
            registry: Registry of custom operators. If ``None``, a new one
                from ``default_registry()`` is used.
            log_sink: Receives the text of ``log`` operations. Defaults to
                the ``ruleflow.log`` logger at INFO level.
        """
        self.registry = registry if registry is not None else default_registry()
        self.log_sink = log_sink or _default_log_sink

    def evaluate(self, rule: Any, data: Any = None) -> Any:
        """Evaluate ``rule`` against ``data``.

        Args:
            rule: The rule tree. ``None`` or an empty container evaluates to
                ``False``; any other non-container is returned as is.
            data: The data context; never modified.

        Returns:
            The rule's value.

        Raises:
            UnknownOperatorError: The top-level operator is unknown.
            InvalidArgumentsError: A top-level iteration operator got an
                unusable collection or logic.
            UndefinedLengthError: A top-level ``length`` got a sizeless value.

        Errors inside nested operations do not propagate; the failing
        operation resolves to ``None``.
        """
        if rule is None or (is_array(rule) and len(rule) == 0):
            return False
        if not is_array(rule):
            return rule
        return self.apply_rule(rule, data)

    def check(self, rule: Any, data: Any = None) -> bool:
        """Evaluate ``rule`` and coerce the result with ``is_truthy()``."""
        return is_truthy(self.evaluate(rule, data))

    def apply_rule(self, rule: Any, data: Any) -> Any:
        if isinstance(rule, (list, tuple)):
            return [self.resolve_value(value, data) for value in rule]
        if not is_logic(rule):
            return {key: self.resolve_value(value, data) for key, value in rule.items()}

        operator, values = next(iter(rule.items()))
        return self.apply_operator(operator, values, wrap_context(data))

    def apply_operator(self, operator: str, values: Any, data: Any) -> Any:
        """Dispatch one operation.

        Custom operators from the registry are checked first. Operators in
        ``NARY_OPERATORS`` get a single non-list operand wrapped in a list.

        Raises:
            UnknownOperatorError: If no custom or builtin handler exists.
        """
        if operator in self.registry:
            return self.apply_custom_rule(operator, values, data)

        if operator in NARY_OPERATORS:
            values = list(values) if isinstance(values, (list, tuple)) else [values]

        handler = BUILTIN_OPERATORS.get(operator)
        if handler is None:
            raise UnknownOperatorError(f"Unknown operator {operator!r}")
        return handler(self, values, data)

    def apply_custom_rule(self, operator: str, values: Any, data: Any) -> Any:
        rule = self.registry.get(operator)
        resolved = self.resolve_value(values, data)
        return rule.evaluate(resolved, data)

    def resolve_value(self, value: Any, data: Any) -> Any:
        """Turn a rule node into a concrete value. Never raises.

        - operation nodes are dispatched; a failure resolves to ``None``
        - ``[op, [a, b]]`` with ``op`` a comparison symbol is an inline
          comparison of ``a`` and ``b`` (``False`` on failure)
        - other lists and dicts are resolved element-wise
        - anything else is a literal
        """
        if value is None:
            return None
        if is_array(value) and len(value) == 0:
            return value

        if is_logic(value):
            operator, operand = next(iter(value.items()))
            resolution = self._attempt(operator, operand, data)
            return resolution.value if resolution.ok else None

        if _is_inline_comparison(value):
            resolution = self._attempt_inline_comparison(value[0], value[1], data)
            return resolution.value if resolution.ok else False

        if isinstance(value, (list, tuple)):
            return [self.resolve_value(item, data) for item in value]
        if isinstance(value, Mapping):
            return {key: self.resolve_value(item, data) for key, item in value.items()}
        return value

    def _attempt(self, operator: str, operand: Any, data: Any) -> Resolution:
        try:
            return Resolution(value=self.apply_operator(operator, operand, data))
        except Exception as exc:  # noqa: BLE001
            logger.debug("operator %r failed, resolving to None: %s", operator, exc)
            return Resolution(error=exc)

    def _attempt_inline_comparison(self, symbol: str, operands: Any, data: Any) -> Resolution:
        if len(operands) < 2:
            return Resolution(value=False)
        try:
            left = self.resolve_value(operands[0], data)
            right = self.resolve_value(operands[1], data)
            return Resolution(value=_SHORTHAND_COMPARISONS[symbol](left, right))
        except Exception as exc:  # noqa: BLE001
            logger.debug("inline comparison %r failed, resolving to False: %s", symbol, exc)
            return Resolution(error=exc)

    def write_log(self, text: str) -> None:
        """Send ``text`` to the log sink; sink failures are logged and ignored."""
        try:
            self.log_sink(text)
        except Exception:  # noqa: BLE001
            logger.warning("log sink failed", exc_info=True)


def _is_inline_comparison(value: Any) -> bool:
    return (
        isinstance(value, (list, tuple))
        and len(value) >= 2
        and isinstance(value[0], str)
        and value[0] in _SHORTHAND_COMPARISONS
        and isinstance(value[1], (list, tuple))
    )
