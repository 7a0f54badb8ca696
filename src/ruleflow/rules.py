from __future__ import annotations

import re
from typing import Any, ClassVar

_DELIMITED_RE = re.compile(r"^/(?P<body>.*)/(?P<flags>[a-zA-Z]*)$", re.DOTALL)

_REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
}


class CustomRule:
    """Base class for operators plugged into an ``OperatorRegistry``.

    A custom rule names the operator it handles and evaluates already
    resolved operands. It is checked before the builtin operators, so a
    custom rule may also replace a builtin.

    Subclasses set the ``operator`` class attribute (or override
    ``operator_name()`` when the name depends on constructor arguments) and
    implement ``evaluate()``.

    Example:
        >>> class Even(CustomRule):
        ...     operator = "even"
        ...
        ...     def evaluate(self, resolved_values, data):
        ...         return resolved_values % 2 == 0
    """

    operator: ClassVar[str] = ""

    def operator_name(self) -> str:
        """Return the operator this rule handles."""
        return self.operator

    def evaluate(self, resolved_values: Any, data: Any) -> Any:
        """Evaluate the operator.

        Args:
            resolved_values: The operand(s), already resolved against
                ``data``. A single operand arrives as is, several as a list.
            data: The raw data context of the operation, for rules that
                resolve nested sub-rules themselves.

        Returns:
            The operator's result.

        Raises:
            NotImplementedError: If not overridden by a subclass.
        """
        raise NotImplementedError

    @classmethod
    def from_config(cls, options: dict[str, Any]) -> CustomRule:
        """Build an instance from serialized options.

        The default passes the options as keyword arguments.
        """
        return cls(**options)


class MatchRule(CustomRule):
    """Regular-expression search: ``{"match": [string, pattern, flags?]}``.

    ``pattern`` is a Python regular expression, optionally written in
    delimited form (``"/^ab+c$/i"``). Supported flags are ``i``, ``m``,
    ``s`` and ``x``; unknown flags are ignored.

    Returns ``False`` for fewer than two operands, an empty pattern or a
    pattern that does not compile.
    """

    operator = "match"

    def evaluate(self, resolved_values: Any, data: Any) -> bool:
        if not isinstance(resolved_values, (list, tuple)) or len(resolved_values) < 2:
            return False

        text = _as_str(resolved_values[0])
        pattern = _as_str(resolved_values[1])
        flags = _as_str(resolved_values[2]) if len(resolved_values) > 2 else ""
        if not pattern:
            return False

        delimited = _DELIMITED_RE.match(pattern)
        if delimited:
            pattern = delimited.group("body")
            flags = delimited.group("flags") + flags

        compiled_flags = 0
        for flag in flags:
            compiled_flags |= _REGEX_FLAGS.get(flag.lower(), 0)

        try:
            compiled = re.compile(pattern, compiled_flags)
        except re.error:
            return False
        return compiled.search(text) is not None


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
