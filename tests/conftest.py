import pytest

from ruleflow import OperatorRegistry, RuleEngine, default_registry


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def engine(registry):
    return RuleEngine(registry)


@pytest.fixture
def bare_engine():
    return RuleEngine(OperatorRegistry())
