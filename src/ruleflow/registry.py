from __future__ import annotations

import logging
from typing import Any, Union

from .context import LITERAL_OPERATOR
from .errors import RegistryError
from .rules import CustomRule, MatchRule

logger = logging.getLogger(__name__)

RuleHandler = Union[type[CustomRule], CustomRule]
"""What ``register()`` accepts: a ``CustomRule`` subclass or a built instance.

A subclass is instantiated (without arguments) the first time its operator
is used; an instance is used as is, which allows parametrized rules.
"""


class OperatorRegistry:
    """Registry mapping operator names to custom rule handlers.

    The registry is passed to ``RuleEngine``, which consults it before the
    builtin operators, so a custom rule may replace any builtin except
    ``preserve``, which iteration operators use to pass container elements
    through unevaluated. Populate it before serving evaluations: it has no
    locking, so registering or clearing while other threads evaluate rules
    is undefined.

    Example:
        >>> registry = OperatorRegistry()
        >>> registry.register(MyRule)
        >>> engine = RuleEngine(registry)
        >>> engine.evaluate({"my_rule": [1, 2]}, {})
    """

    def __init__(self) -> None:
        """Create an empty registry."""
        self._handlers: dict[str, RuleHandler] = {}
        self._instances: dict[str, CustomRule] = {}

    def register(self, handler: RuleHandler) -> OperatorRegistry:
        """Register a custom rule for the operator it names.

        If a handler is already registered for that operator, it is replaced
        and its cached instance discarded.

        Args:
            handler: A ``CustomRule`` subclass, or an instance of one.

        Returns:
            The registry, so calls can be chained.

        Raises:
            RegistryError: If ``handler`` is not a ``CustomRule``, does not
                name a non-empty operator, or names ``preserve``.
        """
        operator = _operator_of(handler)
        if operator in self._handlers:
            logger.debug("replacing custom operator %r", operator)
        self._handlers[operator] = handler
        self._instances.pop(operator, None)
        if isinstance(handler, CustomRule):
            self._instances[operator] = handler
        return self

    def unregister(self, operator: str) -> None:
        """Remove an operator from the registry.

        Notes:
            Does nothing if the operator is not registered.
        """
        self._handlers.pop(operator, None)
        self._instances.pop(operator, None)

    def has(self, operator: str) -> bool:
        return operator in self._handlers

    def __contains__(self, operator: object) -> bool:
        return operator in self._handlers

    def operators(self) -> list[str]:
        """Return the registered operator names, in registration order."""
        return list(self._handlers)

    def get(self, operator: str) -> CustomRule:
        """Return the handler instance for ``operator``.

        Subclass registrations are instantiated on first use and the
        instance is reused afterwards.

        Raises:
            RegistryError: If the operator is not registered.
        """
        instance = self._instances.get(operator)
        if instance is not None:
            return instance
        handler = self._handlers.get(operator)
        if handler is None:
            raise RegistryError(f"custom operator {operator!r} is not registered")
        instance = handler()
        self._instances[operator] = instance
        return instance

    def create(self, operator: str, options: dict[str, Any] | None = None) -> CustomRule:
        """Build a new handler instance for ``operator`` from serialized options.

        This does not touch the cached singleton; use it to rebuild
        parametrized rules from stored configuration.

        Args:
            operator: A registered operator name.
            options: Keyword options passed to the rule's ``from_config()``.

        Raises:
            RegistryError: If the operator is not registered.
        """
        handler = self._handlers.get(operator)
        if handler is None:
            raise RegistryError(f"custom operator {operator!r} is not registered")
        rule_type = handler if isinstance(handler, type) else type(handler)
        return rule_type.from_config(dict(options or {}))

    def clear(self) -> None:
        """Remove every registration. Intended for tests."""
        self._handlers.clear()
        self._instances.clear()


def _operator_of(handler: Any) -> str:
    if isinstance(handler, type):
        if not issubclass(handler, CustomRule):
            raise RegistryError(f"{handler.__name__} must subclass CustomRule")
        operator = handler.operator
        if not operator:
            # Name computed per instance.
            try:
                operator = handler().operator_name()
            except TypeError as exc:
                raise RegistryError(f"{handler.__name__} needs arguments; register an instance") from exc
    elif isinstance(handler, CustomRule):
        operator = handler.operator_name()
    else:
        raise RegistryError(f"cannot register {type(handler).__name__}: not a CustomRule")

    if not isinstance(operator, str) or not operator:
        raise RegistryError("custom rule requires a non-empty operator name")
    if operator == LITERAL_OPERATOR:
        raise RegistryError(f"operator {operator!r} is reserved")
    return operator


def default_registry() -> OperatorRegistry:
    """Return a new registry holding the builtin custom rules.

    Each call builds a fresh registry, so engines never share registrations.
    It currently contains:
        - ``match``: regular-expression search (``MatchRule``)
    """
    registry = OperatorRegistry()
    register_builtin_rules(registry)
    return registry


def register_builtin_rules(registry: OperatorRegistry) -> None:
    """Register the builtin custom rules with ``registry``."""
    registry.register(MatchRule)
