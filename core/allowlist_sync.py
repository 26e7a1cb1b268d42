"""
Allow-list Synchronizer - keeps the FILTER_* lists of the settings document in step

An empty list means every entry of the section is enabled, a non-empty list
enables only the keys it names, and a list holding just the sentinel enables
nothing.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from config.plugin_config import NONE_SENTINEL, SECTION_FILTER_KEYS
from models.plugin_entry import Entry, SECTIONS

logger = logging.getLogger("plugin_toggler.allowlist_sync")


def load_settings(settings_text: str) -> Optional[Dict[str, Any]]:
    """Parse the settings document

    Args:
        settings_text: Raw JSON text

    Returns:
        The parsed object, or None if the text is not a JSON object
    """
    try:
        settings = json.loads(settings_text)
    except ValueError as e:
        logger.warning(f"Settings document is not valid JSON: {str(e)}")
        return None
    if not isinstance(settings, dict):
        logger.warning("Settings document is not a JSON object")
        return None
    return settings


def dump_settings(settings: Dict[str, Any]) -> str:
    return json.dumps(settings, indent=2, ensure_ascii=False) + "\n"


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def read_filters(settings_text: str) -> Dict[str, List[str]]:
    """Read the allow-list of every section

    Missing, malformed or unparsable lists read as empty (all enabled).
    """
    settings = load_settings(settings_text) or {}
    return {section: _string_list(settings.get(SECTION_FILTER_KEYS[section])) for section in SECTIONS}


def write_filters(settings_text: str, section: str, keys: List[str]) -> str:
    """Write one section's allow-list back into the settings document

    Args:
        settings_text: Current raw JSON text
        section: Section tag
        keys: New allow-list; duplicates are dropped, first occurrence wins

    Returns:
        The full replacement settings text
    """
    settings = load_settings(settings_text)
    if settings is None:
        settings = {}

    unique = []
    for key in keys:
        if isinstance(key, str) and key not in unique:
            unique.append(key)

    filter_key = SECTION_FILTER_KEYS[section]
    settings[filter_key] = unique
    logger.info(f"Updated {filter_key}: {unique}")
    return dump_settings(settings)


def is_enabled_by_filter(key: str, allow_list: List[str]) -> bool:
    return not allow_list or key in allow_list


def derive_enabled(entries: List[Entry], filters: Dict[str, List[str]]) -> List[Entry]:
    """Replace the comment-derived state of each entry with the allow-list state

    Args:
        entries: Entries as extracted from the source text
        filters: Allow-lists keyed by section

    Returns:
        New entries whose enabled flag follows the allow-lists
    """
    return [
        entry._replace(enabled=is_enabled_by_filter(entry.key, filters.get(entry.section, [])))
        for entry in entries
    ]


def plan_plugin_filter(target: Entry, enable: bool, section_keys: List[str],
                       filters: Dict[str, List[str]]) -> Optional[List[str]]:
    """Work out the allow-list that enables or disables one entry

    Args:
        target: Entry to change
        enable: Desired state
        section_keys: Every key of the target's section
        filters: Current allow-lists keyed by section

    Returns:
        The new allow-list for the target's section, or None if the entry
        already has the desired state
    """
    allow_list = list(filters.get(target.section, []))
    no_filter = not allow_list
    currently_enabled = is_enabled_by_filter(target.key, allow_list)

    if enable:
        if currently_enabled:
            return None
        allow_list = [key for key in allow_list if key != NONE_SENTINEL]
        allow_list.append(target.key)
        # Listing every key is the same as not filtering at all
        if all(key in allow_list for key in section_keys):
            allow_list = []
        return allow_list

    if not currently_enabled:
        return None
    if no_filter:
        allow_list = [key for key in section_keys if key != target.key]
    else:
        allow_list = [key for key in allow_list if key != target.key]
    # An empty list would mean "all", keep the filter active instead
    if not allow_list:
        allow_list = [NONE_SENTINEL]
    return allow_list


def section_filter(enable: bool) -> List[str]:
    """Allow-list that enables or disables a whole section"""
    return [] if enable else [NONE_SENTINEL]
