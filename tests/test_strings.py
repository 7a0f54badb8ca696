import pytest

from ruleflow import UnknownOperatorError


def test_cat_converts_operands_to_text(engine):
    assert engine.evaluate({"cat": ["a", 1, None, True, 2.0, [1, 2]]}, {}) == "a1true2[1,2]"
    assert engine.evaluate({"cat": "solo"}, {}) == "solo"
    assert engine.evaluate({"cat": ["Hi, ", {"var": "name"}]}, {"name": "Ada"}) == "Hi, Ada"


@pytest.mark.parametrize(
    "operands, expected",
    [
        (["jsonlogic", 4], "logic"),
        (["jsonlogic", -5], "logic"),
        (["jsonlogic", 1, 3], "son"),
        (["jsonlogic", 4, -2], "log"),
        (["jsonlogic", 20], ""),
        ([12345, 1, 2], "23"),
    ],
)
def test_substr(engine, operands, expected):
    assert engine.evaluate({"substr": operands}, {}) == expected


@pytest.mark.parametrize(
    "rule, expected",
    [
        ({"contains": ["hello world", "world"]}, True),
        ({"contains": ["hello", "z"]}, False),
        ({"contains": ["hello", 1]}, False),
        ({"contains": [[1, 2, 3], "2"]}, True),
        ({"contains": [None, "a"]}, False),
        ({"startsWith": ["prefix-x", "prefix"]}, True),
        ({"startsWith": ["x-prefix", "prefix"]}, False),
        ({"endsWith": ["a.json", ".json"]}, True),
        ({"endsWith": [5, "5"]}, False),
    ],
)
def test_string_predicates(engine, rule, expected):
    assert engine.evaluate(rule, {}) is expected


@pytest.mark.parametrize(
    "operands, expected",
    [
        (["abc", "b"], True),
        (["abc", "^b"], False),
        (["ABC", "/^abc$/i"], True),
        (["ABC", "^abc$", "i"], True),
        (["line1\nline2", "^line2", "m"], True),
        (["x", "("], False),
        (["x", ""], False),
        (["x"], False),
    ],
)
def test_match(engine, operands, expected):
    assert engine.evaluate({"match": operands}, {}) is expected


def test_match_reads_data(engine):
    rule = {"match": [{"var": "email"}, "/@example\\.com$/"]}
    assert engine.evaluate(rule, {"email": "ada@example.com"}) is True
    assert engine.evaluate(rule, {"email": "ada@example.org"}) is False


def test_match_is_a_registered_rule(bare_engine):
    with pytest.raises(UnknownOperatorError):
        bare_engine.evaluate({"match": ["abc", "b"]}, {})
