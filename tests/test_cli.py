import json

from ruleflow.cli import main


def test_evaluate_truthy_result(capsys):
    assert main(["evaluate", "--rule", '{"==": [1, 1]}']) == 0
    assert capsys.readouterr().out.strip() == "true"


def test_evaluate_falsy_result(capsys):
    assert main(["evaluate", "--rule", '{"<": [{"var": "age"}, 18]}', "--data", '{"age": 30}']) == 3
    assert capsys.readouterr().out.strip() == "false"


def test_evaluate_prints_json(capsys):
    assert main(["evaluate", "--rule", '{"var": "a"}', "--data", '{"a": {"y": [1, 2], "x": null}}']) == 0
    assert capsys.readouterr().out.strip() == '{"x": null, "y": [1, 2]}'


def test_evaluate_reads_files(tmp_path, capsys):
    rule_path = tmp_path / "rule.json"
    data_path = tmp_path / "data.json"
    rule_path.write_text(json.dumps({"filter": [{"var": "xs"}, {">": [{"var": ""}, 1]}]}), encoding="utf-8")
    data_path.write_text(json.dumps({"xs": [1, 2, 3]}), encoding="utf-8")

    assert main(["evaluate", "--rule", str(rule_path), "--data", str(data_path)]) == 0
    assert capsys.readouterr().out.strip() == "[2, 3]"


def test_evaluate_reports_load_errors(capsys):
    assert main(["evaluate", "--rule", '{"var": ']) == 1
    assert capsys.readouterr().err.startswith("error:")


def test_evaluate_reports_unknown_operator(capsys):
    assert main(["evaluate", "--rule", '{"nope": 1}']) == 1
    assert "nope" in capsys.readouterr().err


def test_operators_lists_builtins_and_custom(capsys):
    assert main(["operators"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert "var" in lines
    assert "reduce" in lines
    assert "match (custom)" in lines


def test_help_and_unknown_command(capsys):
    assert main([]) == 0
    assert "Usage" in capsys.readouterr().out
    assert main(["bogus"]) == 2
    assert "Unknown command" in capsys.readouterr().err


def test_evaluate_orders_container_operands(capsys):
    rule = '{">": [{"var": "a"}, {"var": "b"}]}'
    data = '{"a": {"x": 1, "y": 2}, "b": {"x": 2, "y": 1}}'
    assert main(["evaluate", "--rule", rule, "--data", data]) == 3
    assert capsys.readouterr().out.strip() == "false"
