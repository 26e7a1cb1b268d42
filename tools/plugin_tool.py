"""
Plugin Toggle Tool

This file implements the command surface of the plugin toggler. Every command
locates the workspace, reads corePlugins.ts and env.json fresh, asks the
active enablement strategy for a planned change and writes that change as one
unit after backing up the files it touches.
"""

import os
import logging
import shutil
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from config.plugin_config import (
    BACKUP_DIR,
    CORE_PLUGINS_RELATIVE_PATH,
    ENV_JSON_RELATIVE_PATH,
    STATE_PATH,
)
from core.edit_planner import apply_edits
from core.env_flags import list_env_flags, toggle_env_boolean
from core.strategies import EnablementStrategy, get_strategy, section_state
from models.plugin_entry import Entry, PlannedChange, SECTIONS
from tools.plugin_view import FavoritesStore, build_plugin_groups, favorite_key, pick_entry, toggle_favorite
from utils.constants import DEFAULT_STRATEGY
from utils.output_formatter import OutputFormatter
from utils.workspace_locator import WorkspaceLocator

# Configure logging
logger = logging.getLogger("plugin_toggler.plugin_tool")


class Workspace(NamedTuple):
    """Files of the selected workspace folder, read fresh for one command"""
    folder: str
    source_path: str
    settings_path: str
    source_text: str
    settings_text: str


class PluginToggleTool:
    """Implementation of the plugin toggle commands"""

    def __init__(self, workspace_folders: Optional[List[str]] = None, strategy: Any = DEFAULT_STRATEGY,
                 backup_dir: str = BACKUP_DIR, state_path: str = STATE_PATH):
        """Initialize the plugin toggle tool

        Args:
            workspace_folders: Folders to search for edge-react-gui (None means the current directory)
            strategy: Strategy name or EnablementStrategy instance
            backup_dir: Directory to store file backups, relative to the workspace folder unless absolute
            state_path: Favorites state file, relative to the workspace folder unless absolute
        """
        self.locator = WorkspaceLocator(workspace_folders)
        self.strategy = strategy if isinstance(strategy, EnablementStrategy) else get_strategy(strategy)
        self.backup_dir = backup_dir
        self.state_path = state_path
        self.formatter = OutputFormatter()
        self.last_edits = {}  # Store the content each file had before the last change for undo

    def _in_workspace(self, folder: str, path: str) -> str:
        return path if os.path.isabs(path) else os.path.join(folder, path)

    def _read_file(self, path: str) -> str:
        with open(path, 'r', encoding='utf-8', newline='') as f:
            return f.read()

    def _write_file(self, path: str, content: str) -> None:
        with open(path, 'w', encoding='utf-8', newline='') as f:
            f.write(content)

    def _create_backup(self, folder: str, file_path: str) -> str:
        """Create a backup of a file before modifying it

        Args:
            folder: Workspace folder the backup directory belongs to
            file_path: Path to the file to backup

        Returns:
            Path to the backup file
        """
        if not os.path.exists(file_path):
            return ""

        backup_dir = self._in_workspace(folder, self.backup_dir)
        os.makedirs(backup_dir, exist_ok=True)
        backup_filename = os.path.join(backup_dir, f"{os.path.basename(file_path)}.bak")

        shutil.copy2(file_path, backup_filename)
        logger.info(f"Created backup of {file_path} at {backup_filename}")

        return backup_filename

    def _load_workspace(self) -> Tuple[Optional[Workspace], str]:
        """Locate the workspace folder and read both files

        Returns:
            Tuple of (workspace, error_message)
        """
        folder, error = self.locator.select_folder()
        if folder is None:
            return None, error

        source_path = os.path.join(folder, CORE_PLUGINS_RELATIVE_PATH)
        settings_path = os.path.join(folder, ENV_JSON_RELATIVE_PATH)
        texts = []
        for path, relative_path in ((source_path, CORE_PLUGINS_RELATIVE_PATH), (settings_path, ENV_JSON_RELATIVE_PATH)):
            try:
                texts.append(self._read_file(path))
            except UnicodeDecodeError as e:
                logger.error(f"Error decoding {path}: {str(e)}")
                return None, f"Could not read {relative_path}: file is not valid UTF-8"
            except OSError as e:
                logger.error(f"Error reading {path}: {str(e)}")
                return None, f"File not found in any workspace folder: {relative_path}"
        source_text, settings_text = texts

        return Workspace(folder, source_path, settings_path, source_text, settings_text), ""

    def _read_plugins(self) -> Tuple[Optional[Workspace], List[Entry], str]:
        """Read the workspace and the effective state of every entry

        Returns:
            Tuple of (workspace, entries, error_message)
        """
        workspace, error = self._load_workspace()
        if workspace is None:
            return None, [], error

        entries = self.strategy.read_entries(workspace.source_text, workspace.settings_text)
        if not entries:
            logger.warning(f"No plugin entries found in parsed {workspace.source_path}")
            return workspace, [], "No plugin entries found in currencyPlugins/swapPlugins."

        logger.info(f"Parsed {workspace.source_path}, entries={len(entries)}")
        return workspace, entries, ""

    def _apply_change(self, workspace: Workspace, change: PlannedChange) -> List[str]:
        """Write a planned change, backing up every file it touches

        All new contents are computed before the first write.

        Returns:
            Paths of the files written
        """
        writes = []
        if change.source_edits:
            new_source = apply_edits(workspace.source_text, list(change.source_edits))
            if new_source != workspace.source_text:
                writes.append((workspace.source_path, workspace.source_text, new_source))
        if change.settings_text is not None and change.settings_text != workspace.settings_text:
            writes.append((workspace.settings_path, workspace.settings_text, change.settings_text))

        if not writes:
            return []

        self.last_edits = {}
        for path, old_content, new_content in writes:
            backup_path = self._create_backup(workspace.folder, path)
            self._write_file(path, new_content)
            self.last_edits[path] = {
                "backup_path": backup_path,
                "old_content": old_content,
                "new_content": new_content
            }
            logger.info(f"Wrote {path}")
        return [path for path, _, _ in writes]

    def _section_param(self, params: Dict[str, Any], required: bool) -> Tuple[Optional[str], str]:
        section = params.get("section")
        if section is None or section == "":
            if required:
                return None, f"Error: section parameter is required ({', '.join(SECTIONS)})"
            return None, ""
        if section not in SECTIONS:
            return None, f"Error: Unknown section '{section}', expected one of: {', '.join(SECTIONS)}"
        return section, ""

    def handle_command(self, command_call: Dict[str, Any]) -> Dict[str, Any]:
        """Handle a command from the host

        Args:
            command_call: Mapping with the "command" name and its parameters

        Returns:
            Result with "content" and "is_error"
        """
        params = dict(command_call)
        command = params.pop("command", "")

        handlers = {
            "list": self._handle_list,
            "toggle": self._handle_toggle,
            "enable": self._handle_enable,
            "disable": self._handle_disable,
            "toggle_all": self._handle_toggle_all,
            "enable_all": self._handle_enable_all,
            "disable_all": self._handle_disable_all,
            "env": self._handle_env,
            "env_toggle": self._handle_env_toggle,
            "favorite": self._handle_favorite,
            "undo": self._handle_undo,
        }
        handler = handlers.get(command)
        if handler is None:
            result = f"Error: Unknown command '{command}'"
            logger.error(result)
            return {"content": result, "is_error": True}

        try:
            content, is_error = handler(params)
        except OSError as e:
            error_msg = f"Error executing {command} command: {str(e)}"
            logger.error(error_msg)
            return {"content": error_msg, "is_error": True}

        if is_error:
            logger.error(content)
        else:
            logger.info(f"Successfully executed {command} command")
        return {"content": content, "is_error": is_error}

    def _handle_list(self, params: Dict[str, Any]) -> Tuple[str, bool]:
        """Handle the list command

        Args:
            params: Optional section, filter and favorites_only

        Returns:
            Tuple of (content, is_error)
        """
        section, error = self._section_param(params, required=False)
        if error:
            return error, True

        workspace, entries, error = self._read_plugins()
        if not entries:
            return error, workspace is None

        favorites = FavoritesStore(self._in_workspace(workspace.folder, self.state_path)).load()
        blocks = []
        for name in ([section] if section else SECTIONS):
            groups = build_plugin_groups(entries, name, filter_text=params.get("filter"), favorites=favorites,
                                         sort_az=not params.get("document_order", False))
            if params.get("favorites_only"):
                groups = {"Favorites": groups["Favorites"]}
            blocks.append(self.formatter.format_plugin_groups(name, groups, favorites, section_state(entries, name)))
        return self.formatter.truncate_text("\n".join(blocks)), False

    def _resolve_entry(self, params: Dict[str, Any]) -> Tuple[Optional[Workspace], Optional[Entry], str, bool]:
        key = params.get("key", "")
        if not key:
            return None, None, "Error: key parameter is required", True
        section, error = self._section_param(params, required=False)
        if error:
            return None, None, error, True

        workspace, entries, error = self._read_plugins()
        if not entries:
            return workspace, None, error, workspace is None

        entry = pick_entry(entries, key, section)
        if entry is None:
            return workspace, None, f"No plugin matching '{key}'", False
        return workspace, entry, "", False

    def _set_plugin(self, params: Dict[str, Any], enable: Optional[bool]) -> Tuple[str, bool]:
        workspace, entry, message, is_error = self._resolve_entry(params)
        if entry is None:
            return message, is_error

        if enable is None:
            change = self.strategy.toggle_plugin(workspace.source_text, workspace.settings_text, entry)
            enable = not entry.enabled
        else:
            change = self.strategy.set_plugin_enabled(workspace.source_text, workspace.settings_text, entry, enable)

        state = "enabled" if enable else "disabled"
        if not self._apply_change(workspace, change):
            return f"{favorite_key(entry)} is already {state}", False
        return f"{favorite_key(entry)} {state}", False

    def _handle_toggle(self, params):
        return self._set_plugin(params, None)

    def _handle_enable(self, params):
        return self._set_plugin(params, True)

    def _handle_disable(self, params):
        return self._set_plugin(params, False)

    def _set_section(self, params: Dict[str, Any], enable: Optional[bool]) -> Tuple[str, bool]:
        section, error = self._section_param(params, required=True)
        if error:
            return error, True

        workspace, entries, error = self._read_plugins()
        if not entries:
            return error, workspace is None
        if not any(e.section == section for e in entries):
            return f"No {section} plugins found", False

        if enable is None:
            change = self.strategy.toggle_section(workspace.source_text, workspace.settings_text, section)
        else:
            change = self.strategy.set_section_enabled(workspace.source_text, workspace.settings_text, section, enable)
        written = self._apply_change(workspace, change)

        # Report the state the files are in now
        workspace, entries, _ = self._read_plugins()
        state = section_state(entries, section)
        if not written:
            return f"No changes; {section} plugins: {state} enabled", False
        return f"{section} plugins: {state} enabled", False

    def _handle_toggle_all(self, params):
        return self._set_section(params, None)

    def _handle_enable_all(self, params):
        return self._set_section(params, True)

    def _handle_disable_all(self, params):
        return self._set_section(params, False)

    def _handle_env(self, params: Dict[str, Any]) -> Tuple[str, bool]:
        workspace, error = self._load_workspace()
        if workspace is None:
            return error, True
        logger.info(f"Reading env.json at {workspace.settings_path}")
        return self.formatter.format_env_flags(list_env_flags(workspace.settings_text)), False

    def _handle_env_toggle(self, params: Dict[str, Any]) -> Tuple[str, bool]:
        key = params.get("key", "")
        if not key:
            return "Error: key parameter is required", True
        workspace, error = self._load_workspace()
        if workspace is None:
            return error, True

        updated = toggle_env_boolean(workspace.settings_text, key)
        if not self._apply_change(workspace, PlannedChange(settings_text=updated)):
            return f"No boolean value found for '{key}' in {ENV_JSON_RELATIVE_PATH}", False
        value = dict(list_env_flags(updated, [key]))[key]
        return f"{key} = {'true' if value else 'false'}", False

    def _handle_favorite(self, params: Dict[str, Any]) -> Tuple[str, bool]:
        workspace, entry, message, is_error = self._resolve_entry(params)
        if entry is None:
            return message, is_error

        store = FavoritesStore(self._in_workspace(workspace.folder, self.state_path))
        favorites = toggle_favorite(store.load(), entry)
        store.save(favorites)
        if favorite_key(entry) in favorites:
            return f"Added {favorite_key(entry)} to favorites", False
        return f"Removed {favorite_key(entry)} from favorites", False

    def _handle_undo(self, params: Dict[str, Any]) -> Tuple[str, bool]:
        """Handle the undo command

        Restores every file written by the last change.
        """
        if not self.last_edits:
            return "Error: No previous change to undo", True

        restored = []
        for path, last_edit in self.last_edits.items():
            if last_edit["backup_path"] and os.path.exists(last_edit["backup_path"]):
                # Restore from backup file
                shutil.copy2(last_edit["backup_path"], path)
            else:
                # Restore from stored old content
                self._write_file(path, last_edit["old_content"])
            restored.append(path)

        self.last_edits = {}
        return f"Successfully undid changes to: {', '.join(restored)}", False


def register_plugin_commands(registry, plugin_tool: PluginToggleTool):
    """Register the plugin toggle commands with a command registry

    Args:
        registry: CommandRegistry to register into
        plugin_tool: Tool executing the commands

    Returns:
        The registry
    """
    key_param = {
        "key": {
            "type": "string",
            "description": "Plugin key, optionally prefixed with 'currency:' or 'swap:'; close matches are accepted"
        }
    }
    section_param = {
        "section": {
            "type": "string",
            "description": "Plugin section",
            "enum": list(SECTIONS)
        }
    }

    def make_command(name):
        def run_command(**kwargs):
            result = plugin_tool.handle_command({"command": name, **kwargs})
            return result.get("content", "Error: No result content")
        return run_command

    commands = [
        ("list", "List plugins grouped into favorites, enabled and disabled",
         {**section_param,
          "filter": {"type": "string", "description": "Only show keys containing this text"},
          "favorites_only": {"type": "boolean", "description": "Only show the favorites group"}}, []),
        ("toggle", "Toggle one plugin", {**key_param, **section_param}, ["key"]),
        ("enable", "Enable one plugin", {**key_param, **section_param}, ["key"]),
        ("disable", "Disable one plugin", {**key_param, **section_param}, ["key"]),
        ("toggle_all", "Disable a fully enabled section, otherwise enable all of it", section_param, ["section"]),
        ("enable_all", "Enable every plugin of a section", section_param, ["section"]),
        ("disable_all", "Disable every plugin of a section", section_param, ["section"]),
        ("env", "List the debug flags of env.json", {}, []),
        ("env_toggle", "Toggle one boolean flag of env.json",
         {"key": {"type": "string", "description": "Flag name, e.g. DEBUG_CORE"}}, ["key"]),
        ("favorite", "Add or remove a plugin from the favorites", {**key_param, **section_param}, ["key"]),
        ("undo", "Revert the files written by the last change", {}, []),
    ]
    for name, description, parameters, required in commands:
        registry.register(
            name=name,
            func=make_command(name),
            description=description,
            parameters=parameters,
            required_params=required
        )

    logger.info(f"Registered plugin commands using the {plugin_tool.strategy.name} strategy")

    return registry
