"""
Workspace Locator for the plugin toggler

This module finds the one workspace folder that holds an edge-react-gui
checkout and resolves the files the toggler reads and writes inside it.
"""

import os
import json
import logging
from typing import List, Optional, Tuple

from config.plugin_config import (
    CORE_PLUGINS_RELATIVE_PATH,
    ENV_JSON_RELATIVE_PATH,
    PACKAGE_JSON_RELATIVE_PATH,
)

# Configure logging
logger = logging.getLogger("plugin_toggler.workspace_locator")


class WorkspaceLocator:
    """Selects the workspace folder containing the plugin source and env.json"""

    def __init__(self, folders: Optional[List[str]] = None):
        """Initialize the workspace locator

        Args:
            folders: Workspace folders to consider (None means the current directory)
        """
        self.folders = [os.path.abspath(folder) for folder in (folders or ["."])]

    def _read_package_name(self, folder: str) -> str:
        """Read the package name of a folder for logging

        Args:
            folder: Folder to inspect

        Returns:
            The package.json name, or "(none)"
        """
        path = os.path.join(folder, PACKAGE_JSON_RELATIVE_PATH)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                package = json.load(f)
        except (OSError, ValueError):
            return "(none)"
        if isinstance(package, dict) and isinstance(package.get("name"), str):
            return package["name"]
        return "(none)"

    def is_candidate(self, folder: str) -> bool:
        """Check whether a folder holds both the plugin source and env.json"""
        has_core = os.path.isfile(os.path.join(folder, CORE_PLUGINS_RELATIVE_PATH))
        has_env = os.path.isfile(os.path.join(folder, ENV_JSON_RELATIVE_PATH))
        logger.info(f"Check folder '{folder}': pkg.name='{self._read_package_name(folder)}', core={has_core}, env={has_env}")
        return has_core and has_env

    def select_folder(self) -> Tuple[Optional[str], str]:
        """Select the edge-react-gui folder

        Returns:
            Tuple of (folder, error_message); folder is None when no folder or
            more than one folder qualifies
        """
        if not self.folders:
            return None, "Open a workspace containing edge-react-gui (with corePlugins.ts)."

        logger.info(f"Workspace folders: {' | '.join(self.folders)}")
        candidates = [folder for folder in self.folders if self.is_candidate(folder)]

        if len(candidates) == 1:
            return candidates[0], ""
        if len(candidates) > 1:
            logger.error(f"Multiple candidates: {' | '.join(candidates)}")
            return None, (
                "Multiple edge-react-gui folders detected (contain both "
                f"{CORE_PLUGINS_RELATIVE_PATH} and {ENV_JSON_RELATIVE_PATH}). Please keep only one open."
            )

        logger.error("No candidates found for edge-react-gui")
        return None, (
            "Could not locate edge-react-gui. Ensure one workspace folder contains "
            f"{CORE_PLUGINS_RELATIVE_PATH} and {ENV_JSON_RELATIVE_PATH}."
        )
