"""
Environment Flag Reader/Writer - boolean switches of the settings document

Toggling rewrites only the literal true/false token so the rest of the
document keeps its formatting.
"""

import logging
import re
from typing import Dict, List, Tuple

from config.plugin_config import ENV_FLAG_KEYS
from core.allowlist_sync import load_settings

logger = logging.getLogger("plugin_toggler.env_flags")


def read_env_booleans(settings_text: str) -> Dict[str, bool]:
    """Read every boolean-valued key of the settings document"""
    settings = load_settings(settings_text) or {}
    return {key: value for key, value in settings.items() if isinstance(value, bool)}


def list_env_flags(settings_text: str, keys: List[str] = ENV_FLAG_KEYS) -> List[Tuple[str, bool]]:
    """List the known flags with their values, sorted by name

    Args:
        settings_text: Raw JSON text
        keys: Flags to report; a flag missing or non-boolean reads as False

    Returns:
        List of (key, value) pairs
    """
    values = read_env_booleans(settings_text)
    return [(key, values.get(key) is True) for key in sorted(keys)]


def toggle_env_boolean(settings_text: str, key: str) -> str:
    """Flip the literal true/false value of one key

    Args:
        settings_text: Raw JSON text
        key: Flag to flip

    Returns:
        The updated text; unchanged if the key has no boolean literal
    """
    pattern = re.compile(r'("' + re.escape(key) + r'"\s*:\s*)(true|false)')

    def _flip(match):
        return match.group(1) + ("false" if match.group(2) == "true" else "true")

    updated = pattern.sub(_flip, settings_text)
    if updated == settings_text:
        logger.info(f"No boolean literal found for {key}")
    else:
        logger.info(f"Toggled env key '{key}'")
    return updated
