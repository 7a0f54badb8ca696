import pytest


@pytest.mark.parametrize(
    "rule, expected",
    [
        ({"==": [1, "1"]}, True),
        ({"==": [1, 2]}, False),
        ({"==": [None, 0]}, True),
        ({"==": [0, ""]}, False),
        ({"==": [1, 1, "1"]}, True),
        ({"==": [1, 1, 2]}, False),
        ({"!=": [1, "2"]}, True),
        ({"!=": ["a", "a"]}, False),
        ({"===": [1, "1"]}, False),
        ({"===": [1, 1]}, True),
        ({"===": [[1, 2], [1, 2]]}, True),
        ({"!==": [1, "1"]}, True),
        ({"!==": [1]}, False),
    ],
)
def test_equality(engine, rule, expected):
    assert engine.evaluate(rule, {}) is expected


@pytest.mark.parametrize(
    "rule, expected",
    [
        ({">": [3, 2]}, True),
        ({">": [2, 3]}, False),
        ({">=": [2, 2]}, True),
        ({"<": ["10", 9]}, False),
        ({"<": ["apple", "banana"]}, True),
        ({"<": [1, 2, 3]}, True),
        ({"<": [1, 3, 2]}, False),
        ({"<=": [1, 1, 2]}, True),
        ({"<": [1, None, 3]}, False),
        ({"<": [[1, 2]]}, True),
        ({">": [None, -1]}, True),
        ({"<": [1]}, False),
        ({">": []}, False),
        ({">": 5}, False),
    ],
)
def test_ordering(engine, rule, expected):
    assert engine.evaluate(rule, {}) is expected


def test_ordering_reads_data(engine):
    rule = {"<=": [18, {"var": "age"}, 65]}
    assert engine.evaluate(rule, {"age": 30}) is True
    assert engine.evaluate(rule, {"age": 70}) is False
    # A missing value compares as 0.
    assert engine.evaluate({"<": [{"var": "x"}, 5]}, {}) is True


def test_ordering_of_containers(engine):
    data = {"a": {"x": 1, "y": 2}, "b": {"x": 2, "y": 1}, "c": [1, 2]}
    assert engine.evaluate({">": [{"var": "a"}, {"var": "b"}]}, data) is False
    assert engine.evaluate({"<": [{"var": "a"}, {"var": "b"}]}, data) is True
    assert engine.evaluate({">": [{"var": "a"}, {"var": "c"}]}, data) is True
    assert engine.evaluate({"<": [{"var": "a"}, {"var": "b"}, {"var": "c"}]}, data) is False
    assert engine.evaluate({"if": [{">": [{"var": "a"}, {"var": "b"}]}, "yes", "no"]}, data) == "no"
