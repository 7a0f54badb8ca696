import pytest


@pytest.mark.parametrize(
    "rule, expected",
    [
        ({"and": [True, 0, "x"]}, 0),
        ({"and": [1, "a"]}, "a"),
        ({"and": []}, False),
        ({"or": [0, "", "b"]}, "b"),
        ({"or": [0, ""]}, ""),
        ({"or": []}, False),
        ({"or": ["0", True]}, "0"),
    ],
)
def test_and_or_return_deciding_value(engine, rule, expected):
    assert engine.evaluate(rule, {}) == expected


def test_and_short_circuits(engine):
    # The failing operator after the falsy value is never reached.
    assert engine.evaluate({"and": [False, {"length": 5}]}, {}) is False
    assert engine.evaluate({"or": [True, {"length": 5}]}, {}) is True


@pytest.mark.parametrize(
    "rule, expected",
    [
        ({"if": [True, "y", "n"]}, "y"),
        ({"if": [False, "y", "n"]}, "n"),
        ({"if": [False, "y"]}, None),
        ({"if": [False, "a", True, "b", "c"]}, "b"),
        ({"if": [False, "a", False, "b", "c"]}, "c"),
        ({"if": [False, "a", False, "b"]}, None),
        ({"if": ["x"]}, "x"),
        ({"if": []}, None),
        ({"?:": [0, "y", "n"]}, "n"),
        ({"if": ["0", "y", "n"]}, "y"),
        ({"if": [[], "y", "n"]}, "n"),
    ],
)
def test_if(engine, rule, expected):
    assert engine.evaluate(rule, {}) == expected


def test_if_resolves_branches_against_data(engine):
    rule = {"if": [{"<": [{"var": "temp"}, 0]}, "freezing", {"<": [{"var": "temp"}, 20]}, "cold", "warm"]}
    assert engine.evaluate(rule, {"temp": -4}) == "freezing"
    assert engine.evaluate(rule, {"temp": 12}) == "cold"
    assert engine.evaluate(rule, {"temp": 25}) == "warm"


@pytest.mark.parametrize(
    "operand, data, expected",
    [
        (True, {}, False),
        ([False], {}, True),
        ([], {}, True),
        (None, {}, True),
        ({"var": "a"}, {"a": 0}, True),
        ([{"var": "a"}], {"a": "0"}, False),
        ([[]], {}, True),
        ([0, 1], {}, True),
    ],
)
def test_not(engine, operand, data, expected):
    assert engine.evaluate({"!": operand}, data) is expected


@pytest.mark.parametrize(
    "operand, data, expected",
    [
        (["0"], {}, True),
        ([[]], {}, False),
        ([], {}, False),
        ([0], {}, False),
        (None, {}, False),
        ({"var": "a"}, {"a": [1]}, True),
        ([{"var": "a"}], {"a": ""}, False),
        ({"and": [1, 2]}, {}, True),
    ],
)
def test_double_not(engine, operand, data, expected):
    assert engine.evaluate({"!!": operand}, data) is expected
