"""
CommandRegistry - Registry for the commands a host can invoke
"""

import logging
from typing import Dict, List, Any, Callable, Optional

# Configure logging
logger = logging.getLogger("plugin_toggler.command_registry")


class CommandRegistry:
    """Registry for commands exposed by the plugin toggler"""

    def __init__(self):
        self.commands = {}

    def register(self, name: str, func: Callable, description: str, parameters: Dict[str, Any] = None, required_params: List[str] = None):
        """Register a command with the registry

        Args:
            name: The name of the command
            func: The function to call when the command is invoked
            description: A description of what the command does
            parameters: A dictionary of parameters the command accepts
            required_params: A list of required parameter names
        """
        if parameters is None:
            parameters = {}

        if required_params is None:
            required_params = []

        # Create command spec
        command_spec = {
            "name": name,
            "description": description,
            "parameters": dict(parameters),
            "required": list(required_params)
        }

        self.commands[name] = {
            "func": func,
            "spec": command_spec
        }

        logger.info(f"Registered command: {name}")

    def get_command(self, name: str) -> Optional[Callable]:
        """Get a command function by name"""
        if name in self.commands:
            return self.commands[name]["func"]
        return None

    def list_commands(self) -> List[str]:
        """List all registered command names"""
        return list(self.commands.keys())

    def get_command_specs(self) -> List[Dict[str, Any]]:
        """Get the specification of every command, for help output"""
        return [command["spec"] for command in self.commands.values()]

    def missing_params(self, name: str, params: Dict[str, Any]) -> List[str]:
        """List required parameters of a command that params does not provide"""
        if name not in self.commands:
            return []
        return [p for p in self.commands[name]["spec"]["required"] if p not in params]
