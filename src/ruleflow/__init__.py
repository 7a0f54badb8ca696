"""ruleflow - a JsonLogic-style rule evaluation engine.

Rules are plain nested data (dicts and lists, typically decoded from JSON)
encoding operators and operands. ruleflow evaluates them against a data
context, so business rules can be authored and shared as data instead of
code.

Quick Start:
    >>> from ruleflow import RuleEngine
    >>> engine = RuleEngine()
    >>> engine.evaluate({"and": [{">=": [{"var": "age"}, 18]}, {"var": "consent"}]},
    ...                 {"age": 21, "consent": True})
    True
    >>> engine.evaluate({"filter": [{"var": "nums"}, {"==": [{"%": [{"var": ""}, 2]}, 0]}]},
    ...                 {"nums": [1, 2, 3, 4]})
    [2, 4]

Main Components:
    - RuleEngine: Evaluates rules; the main entry point
    - OperatorRegistry: Custom operators, consulted before builtins
    - CustomRule: Base class for custom operators
    - default_registry(): A new registry holding the builtin custom rules
    - load_rule() / load_data(): Read rules and data from JSON text or files
    - is_truthy(): The engine's truthiness policy ("0" is truthy)

Operators:
    - Logic: if ?: and or ! !!
    - Comparison: == != === !== > >= < <=
    - Arithmetic: + - * / % max min
    - String: cat substr contains startsWith endsWith match
    - Data: var val missing missing_some exists get keys length ?? in merge
      preserve value eachKey log
    - Iteration: map filter reduce all none some

Exceptions:
    - UnknownOperatorError: Operator is neither builtin nor registered
    - InvalidArgumentsError: Iteration operator got unusable operands
    - UndefinedLengthError: ``length`` of a value without a size
    - RegistryError: Custom rule registration or lookup failed
    - RuleLoadError: Rule or data document could not be loaded
"""

from .engine import Resolution, RuleEngine
from .errors import (
    InvalidArgumentsError,
    RegistryError,
    RuleFlowError,
    RuleLoadError,
    UndefinedLengthError,
    UnknownOperatorError,
)
from .loader import load_data, load_rule
from .registry import OperatorRegistry, default_registry
from .rules import CustomRule, MatchRule
from .utils import MISSING, is_truthy

__all__ = [
    "MISSING",
    "CustomRule",
    "InvalidArgumentsError",
    "MatchRule",
    "OperatorRegistry",
    "RegistryError",
    "Resolution",
    "RuleEngine",
    "RuleFlowError",
    "RuleLoadError",
    "UndefinedLengthError",
    "UnknownOperatorError",
    "default_registry",
    "is_truthy",
    "load_data",
    "load_rule",
]
