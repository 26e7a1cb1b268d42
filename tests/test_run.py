import json

import pytest

import run
from tools.command_registry import CommandRegistry
from tools.plugin_tool import PluginToggleTool, register_plugin_commands


@pytest.fixture
def registry(make_workspace):
    return register_plugin_commands(CommandRegistry(), PluginToggleTool([str(make_workspace())]))


def test_parse_positional_and_named_arguments(registry):
    assert run.parse_command_line(registry, ["toggle", "bitcoin", "currency"]) == (
        "toggle", {"key": "bitcoin", "section": "currency"}
    )
    assert run.parse_command_line(registry, ["list", "filter=bit", "favorites_only=true"]) == (
        "list", {"filter": "bit", "favorites_only": True}
    )


def test_run_command_reports_problems(registry):
    assert run.run_command(registry, ["launch"]).startswith("Error: Unknown command 'launch'")
    assert run.run_command(registry, ["toggle"]) == "Error: Missing parameters for toggle: key"


def test_help_lists_every_command(registry):
    text = run.format_help(registry)

    assert "- toggle <key> [section]: Toggle one plugin" in text
    assert "- undo: Revert the files written by the last change" in text


def test_main_runs_one_command(make_workspace, capsys, monkeypatch):
    folder = make_workspace()
    monkeypatch.chdir(folder)

    run.main(["--workspace", str(folder), "--strategy", "allowlist", "disable_all", "currency"])

    assert capsys.readouterr().out.strip() == "currency plugins: none enabled"
    env = json.loads((folder / "env.json").read_text())
    assert env["FILTER_CURRENCY_PLUGINS"] == ["__none__"]


def test_main_interactive_session(make_workspace, capsys, monkeypatch):
    folder = make_workspace()
    monkeypatch.chdir(folder)
    lines = iter(["help", "enable litecoin", "quit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))

    run.main(["--workspace", str(folder), "--strategy", "comment"])

    out = capsys.readouterr().out
    assert "Available commands:" in out
    assert "currency:litecoin enabled" in out
    assert "Goodbye!" in out


def test_only_boolean_parameters_become_booleans(registry):
    assert run.parse_command_line(registry, ["toggle", "true"]) == ("toggle", {"key": "true"})
    assert run.parse_command_line(registry, ["list", "filter=False"]) == ("list", {"filter": "False"})


def test_main_with_a_key_named_true(make_workspace, capsys, monkeypatch):
    folder = make_workspace()
    monkeypatch.chdir(folder)

    run.main(["--workspace", str(folder), "--strategy", "comment", "toggle", "true"])

    assert capsys.readouterr().out.strip()


def test_main_rejects_unknown_strategy_from_environment(make_workspace, capsys, monkeypatch):
    folder = make_workspace()
    monkeypatch.chdir(folder)
    monkeypatch.setenv("PLUGIN_TOGGLER_STRATEGY", "magic")

    with pytest.raises(SystemExit):
        run.main(["--workspace", str(folder), "list"])

    assert "invalid strategy 'magic'" in capsys.readouterr().err
