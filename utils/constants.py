"""
Constants - Shared defaults for the plugin toggler
"""

import os

# Strategy constants
COMMENT_STRATEGY = "comment"
ALLOWLIST_STRATEGY = "allowlist"
DEFAULT_STRATEGY = ALLOWLIST_STRATEGY

# Workspace configuration
DEFAULT_WORKSPACE_PATH = "."  # Default to current directory

# Logging
DEFAULT_LOG_LEVEL = "ERROR"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Environment variable names read after load_dotenv()
WORKSPACE_ENV_VAR = "PLUGIN_TOGGLER_WORKSPACE"
STRATEGY_ENV_VAR = "PLUGIN_TOGGLER_STRATEGY"
LOG_LEVEL_ENV_VAR = "PLUGIN_TOGGLER_LOG_LEVEL"


def get_workspace_folders(default=DEFAULT_WORKSPACE_PATH):
    """Get the workspace folders configured in the environment

    Args:
        default: Folder to use when the environment names none

    Returns:
        List of folder paths
    """
    raw = os.getenv(WORKSPACE_ENV_VAR, "")
    folders = [part for part in raw.split(os.pathsep) if part.strip()]
    return folders or [default]
