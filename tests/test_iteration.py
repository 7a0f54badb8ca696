import pytest

from ruleflow import CustomRule, InvalidArgumentsError, RuleEngine


def test_reduce_sums(engine):
    rule = {"reduce": [{"var": "nums"}, {"+": [{"var": "current"}, {"var": "accumulator"}]}, 0]}
    assert engine.evaluate(rule, {"nums": [1, 2, 3, 4, 5]}) == 15


def test_reduce_scope_hides_outer_context(engine):
    rule = {
        "reduce": [
            {"var": "nums"},
            {"+": [{"var": "current"}, {"var": "accumulator"}, {"var": "bonus"}]},
            0,
        ]
    }
    assert engine.evaluate(rule, {"nums": [1, 2], "bonus": 100}) == 3


def test_reduce_of_non_list_returns_initial(engine):
    rule = {"reduce": [{"var": "missing"}, {"+": [{"var": "current"}, 1]}, 7]}
    assert engine.evaluate(rule, {}) == 7
    assert engine.evaluate({"reduce": [[], {"var": "current"}, "init"]}, {}) == "init"


def test_filter_even_numbers(engine):
    rule = {"filter": [{"var": "nums"}, {"==": [{"%": [{"var": ""}, 2]}, 0]}]}
    assert engine.evaluate(rule, {"nums": [1, 2, 3, 4, 5, 6]}) == [2, 4, 6]


def test_filter_on_item_keys(engine):
    rule = {"filter": [{"var": "items"}, {">": [{"var": "qty"}, {"var": "limit"}]}]}
    data = {"items": [{"qty": 1}, {"qty": 5}, {"qty": 3}], "limit": 2}
    assert engine.evaluate(rule, data) == [{"qty": 5}, {"qty": 3}]


def test_filter_by_truthiness(engine):
    assert engine.evaluate({"filter": [{"var": "xs"}, {"var": ""}]}, {"xs": [0, 1, "", "0", None]}) == [1, "0"]


def test_some_apple_pie(engine):
    rule = {"some": [{"var": "pies"}, {"==": [{"var": "filling"}, "apple"]}]}
    data = {"pies": [{"filling": "pumpkin", "temp": 110}, {"filling": "apple", "temp": 150}]}
    assert engine.evaluate(rule, data) is True


def test_map_identity(engine):
    assert engine.evaluate({"map": [{"var": "xs"}, {"var": ""}]}, {"xs": [1, "a", [2]]}) == [1, "a", [2]]


def test_map_sees_index_and_outer_context(engine):
    assert engine.evaluate({"map": [{"var": "xs"}, {"var": "index"}]}, {"xs": ["a", "b", "c"]}) == [0, 1, 2]
    rule = {"map": [{"var": "xs"}, {"*": [{"var": ""}, {"var": "factor"}]}]}
    assert engine.evaluate(rule, {"xs": [1, 2], "factor": 3}) == [3, 6]


def test_map_binds_scalar_item_to_underscore(engine):
    assert engine.evaluate({"map": [[1, 2], {"+": [{"var": "_"}, 1]}]}, {}) == [2, 3]


def test_nested_map_rebinds_current_item(engine):
    rule = {"map": [{"var": "rows"}, {"map": [{"var": ""}, {"*": [{"var": ""}, 10]}]}]}
    assert engine.evaluate(rule, {"rows": [[1, 2], [3]]}) == [[10, 20], [30]]


def test_each_key_inside_map_sees_current_item(engine):
    rule = {"map": [{"var": "xs"}, {"eachKey": [{"var": "o"}, {"cat": [{"var": ""}, ":", {"var": "key"}]}]}]}
    assert engine.evaluate(rule, {"xs": ["p", "q"], "o": {"a": 1}}) == [[["a", "p:a"]], [["a", "q:a"]]]


def test_map_keeps_container_items_literal(engine):
    rule = {"map": [{"var": "xs"}, {"merge": [{"var": ""}, "end"]}]}
    assert engine.evaluate(rule, {"xs": [{"var": "nope"}, [1]]}) == [[{"var": "nope"}, "end"], [1, "end"]]


@pytest.mark.parametrize(
    "operator, expected",
    [("map", []), ("filter", []), ("all", False), ("some", False), ("none", True)],
)
def test_empty_collection(engine, operator, expected):
    assert engine.evaluate({operator: [[], {"var": "x"}]}, {}) == expected


def test_all_and_none(engine):
    rule = {"all": [{"var": "xs"}, {">": [{"var": ""}, 0]}]}
    assert engine.evaluate(rule, {"xs": [1, 2, 3]}) is True
    assert engine.evaluate(rule, {"xs": [1, -2, 3]}) is False
    assert engine.evaluate({"none": [{"var": "xs"}, {">": [{"var": ""}, 10]}]}, {"xs": [1, 2]}) is True


def test_all_reads_property_from_items_then_outer_context(engine):
    rule = {"all": [{"var": "items"}, {"var": "ok"}]}
    assert engine.evaluate(rule, {"items": [{"ok": 1}, {"ok": True}]}) is True
    assert engine.evaluate(rule, {"items": [{"ok": 1}, {"ok": 0}]}) is False
    assert engine.evaluate(rule, {"items": [{}, {}], "ok": True}) is True


@pytest.mark.parametrize(
    "rule",
    [
        {"map": [None, {"var": ""}]},
        {"map": [{"var": "xs"}]},
        {"filter": [{"var": "xs"}, None]},
        {"filter": [5, {"var": ""}]},
        {"some": [{"var": "missing"}, {"var": ""}]},
        {"all": "xs"},
    ],
)
def test_invalid_arguments_raise_at_top_level(engine, rule):
    with pytest.raises(InvalidArgumentsError):
        engine.evaluate(rule, {"xs": [1]})


def test_invalid_arguments_nested_resolve_to_none(engine):
    assert engine.evaluate({"if": [{"map": [None, 1]}, "y", "n"]}, {}) == "n"


class Recorder(CustomRule):
    operator = "record"

    def __init__(self):
        self.seen = []

    def evaluate(self, resolved_values, data):
        self.seen.append(resolved_values)
        return resolved_values


@pytest.fixture
def recording_engine(registry):
    registry.register(Recorder)
    return RuleEngine(registry)


def test_some_stops_at_first_match(recording_engine):
    assert recording_engine.evaluate({"some": [[0, 2, 3], {"record": {"var": ""}}]}, {}) is True
    assert recording_engine.registry.get("record").seen == [0, 2]


def test_all_stops_at_first_failure(recording_engine):
    assert recording_engine.evaluate({"all": [[1, 0, 3], {"record": {"var": ""}}]}, {}) is False
    assert recording_engine.registry.get("record").seen == [1, 0]
