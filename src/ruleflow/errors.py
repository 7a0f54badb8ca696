class RuleFlowError(Exception):
    """Base exception for all ruleflow errors.

    All other exceptions in this package inherit from this class,
    allowing callers to catch all ruleflow-related errors with
    a single except clause.
    """


class RuleLoadError(RuleFlowError):
    """Raised when a rule or data document cannot be loaded.

    Common causes:
        - Invalid JSON syntax in the source text
        - File not found or unreadable
        - Unsupported source type passed to ``load_rule()``
    """


class UnknownOperatorError(RuleFlowError):
    """Raised when an operation names an operator nobody handles.

    The operator is neither a builtin nor registered in the engine's
    ``OperatorRegistry``. The exception message contains the operator name.
    """


class InvalidArgumentsError(RuleFlowError):
    """Raised when an iteration operator gets unusable operands.

    Common causes:
        - Collection operand missing, ``None`` or not a list
        - Logic operand missing
    """


class UndefinedLengthError(RuleFlowError):
    """Raised by ``length`` when the value has no defined size.

    Unlike most operators, which degrade to a default value, ``length``
    refuses to guess a size for numbers, booleans or ``None``.
    """


class RegistryError(RuleFlowError):
    """Raised for custom rule registration and lookup problems.

    Common causes:
        - Registering an object that does not implement ``CustomRule``
        - Registering a rule without a non-empty operator name
        - Requesting an operator that is not registered
    """
