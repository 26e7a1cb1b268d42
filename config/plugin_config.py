"""
Configuration for the core plugin toggler
"""

# Location of the plugin tables inside an edge-react-gui checkout
CORE_PLUGINS_RELATIVE_PATH = "src/util/corePlugins.ts"

# Companion settings document holding the allow-lists and debug flags
ENV_JSON_RELATIVE_PATH = "env.json"

# Only read for logging which package a workspace folder holds
PACKAGE_JSON_RELATIVE_PATH = "package.json"

# Declaration that introduces a plugin table, formatted with the table name
BLOCK_ANCHOR_TEMPLATE = "export const {name}"

# Section tag -> name of the object literal it lives in
SECTION_BLOCKS = {
    "currency": "currencyPlugins",
    "swap": "swapPlugins",
}

# Section tag -> allow-list key in env.json
SECTION_FILTER_KEYS = {
    "currency": "FILTER_CURRENCY_PLUGINS",
    "swap": "FILTER_SWAP_PLUGINS",
}

# Keeps an allow-list non-empty when nothing in the section is enabled
NONE_SENTINEL = "__none__"

# Boolean flags surfaced in the environment listing
ENV_FLAG_KEYS = [
    "DEBUG_PLUGINS",
    "DEBUG_CORE",
    "DEBUG_CURRENCY_PLUGINS",
    "DEBUG_ACCOUNTBASED",
    "DEBUG_EXCHANGES",
    "DEBUG_LOGBOX",
    "USE_FAKE_CORE",
]

# Line comment marker used by the comment-based model
COMMENT_MARKER = "//"

# Directory to store file backups (relative to the workspace folder)
BACKUP_DIR = ".plugin_toggler/backups"

# Favorites and other per-workspace state
STATE_PATH = ".plugin_toggler/state.json"
