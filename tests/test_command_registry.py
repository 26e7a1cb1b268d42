from tools.command_registry import CommandRegistry
from tools.plugin_tool import PluginToggleTool, register_plugin_commands


def test_register_and_lookup():
    registry = CommandRegistry()
    registry.register("echo", lambda text: text, "Echo text", {"text": {"type": "string"}}, ["text"])

    assert registry.list_commands() == ["echo"]
    assert registry.get_command("echo")(text="hi") == "hi"
    assert registry.get_command("missing") is None
    assert registry.get_command_specs() == [{
        "name": "echo",
        "description": "Echo text",
        "parameters": {"text": {"type": "string"}},
        "required": ["text"],
    }]


def test_missing_params():
    registry = CommandRegistry()
    registry.register("echo", lambda text: text, "Echo text", {"text": {"type": "string"}}, ["text"])

    assert registry.missing_params("echo", {}) == ["text"]
    assert registry.missing_params("echo", {"text": "x"}) == []
    assert registry.missing_params("nope", {}) == []


def test_plugin_commands_are_registered(make_workspace):
    folder = make_workspace()
    registry = register_plugin_commands(CommandRegistry(), PluginToggleTool([str(folder)], strategy="comment"))

    assert registry.list_commands() == [
        "list", "toggle", "enable", "disable", "toggle_all", "enable_all", "disable_all",
        "env", "env_toggle", "favorite", "undo",
    ]
    assert registry.get_command("disable")(key="lifi") == "swap:lifi disabled"
