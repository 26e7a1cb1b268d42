"""
Enablement strategies - the two ways an entry can be switched on or off

CommentStrategy treats a commented-out line as disabled and edits the source
text. AllowListStrategy leaves the source alone and rewrites the FILTER_*
lists of the settings document instead. Both work on plain text and return a
PlannedChange; reading and writing files is left to the caller.
"""

import logging
from typing import List

from core.allowlist_sync import (
    derive_enabled,
    load_settings,
    plan_plugin_filter,
    read_filters,
    section_filter,
    write_filters,
)
from core.edit_planner import plan_entry_change, plan_section_change
from core.entry_extractor import extract_entries, find_entry
from models.plugin_entry import Entry, PlannedChange
from utils.constants import ALLOWLIST_STRATEGY, COMMENT_STRATEGY

logger = logging.getLogger("plugin_toggler.strategies")


def section_state(entries: List[Entry], section: str) -> str:
    """Summarize a section as "all", "none" or "mixed" enabled"""
    section_entries = [e for e in entries if e.section == section]
    enabled = sum(1 for e in section_entries if e.enabled)
    if enabled == 0:
        return "none"
    if enabled == len(section_entries):
        return "all"
    return "mixed"


class EnablementStrategy:
    """Base class for the enablement models"""

    name = ""

    def read_entries(self, source_text: str, settings_text: str) -> List[Entry]:
        """Get every entry with its effective enabled state"""
        raise NotImplementedError

    def set_plugin_enabled(self, source_text: str, settings_text: str, target: Entry, enable: bool) -> PlannedChange:
        raise NotImplementedError

    def set_section_enabled(self, source_text: str, settings_text: str, section: str, enable: bool) -> PlannedChange:
        raise NotImplementedError

    def toggle_plugin(self, source_text: str, settings_text: str, target: Entry) -> PlannedChange:
        """Flip one entry, judged by its current effective state"""
        entries = self.read_entries(source_text, settings_text)
        current = find_entry(entries, target.section, target.key, target.start)
        if current is None:
            return PlannedChange()
        return self.set_plugin_enabled(source_text, settings_text, current, not current.enabled)

    def toggle_section(self, source_text: str, settings_text: str, section: str) -> PlannedChange:
        """Disable a fully enabled section, otherwise enable all of it"""
        entries = [e for e in self.read_entries(source_text, settings_text) if e.section == section]
        if not entries:
            return PlannedChange()
        all_enabled = all(e.enabled for e in entries)
        return self.set_section_enabled(source_text, settings_text, section, not all_enabled)


class CommentStrategy(EnablementStrategy):
    """Entries are disabled by commenting out their line"""

    name = COMMENT_STRATEGY

    def read_entries(self, source_text, settings_text):
        return extract_entries(source_text)

    def set_plugin_enabled(self, source_text, settings_text, target, enable):
        return PlannedChange(source_edits=plan_entry_change(source_text, target, enable))

    def set_section_enabled(self, source_text, settings_text, section, enable):
        return PlannedChange(source_edits=plan_section_change(source_text, section, enable))


class AllowListStrategy(EnablementStrategy):
    """Entries are enabled by the FILTER_* allow-lists of the settings document

    Comment markers in the source are ignored; the allow-list always wins.
    """

    name = ALLOWLIST_STRATEGY

    def read_entries(self, source_text, settings_text):
        return derive_enabled(extract_entries(source_text), read_filters(settings_text))

    def set_plugin_enabled(self, source_text, settings_text, target, enable):
        entries = extract_entries(source_text)
        if find_entry(entries, target.section, target.key) is None:
            logger.info(f"No entry {target.section}:{target.key} to change")
            return PlannedChange()

        section_keys = [e.key for e in entries if e.section == target.section]
        allow_list = plan_plugin_filter(target, enable, section_keys, read_filters(settings_text))
        if allow_list is None:
            return PlannedChange()
        return PlannedChange(settings_text=write_filters(settings_text, target.section, allow_list))

    def set_section_enabled(self, source_text, settings_text, section, enable):
        allow_list = section_filter(enable)
        if read_filters(settings_text)[section] == allow_list and load_settings(settings_text) is not None:
            return PlannedChange()
        return PlannedChange(settings_text=write_filters(settings_text, section, allow_list))


STRATEGIES = {
    COMMENT_STRATEGY: CommentStrategy,
    ALLOWLIST_STRATEGY: AllowListStrategy,
}


def get_strategy(name: str) -> EnablementStrategy:
    """Create the strategy registered under name

    Raises:
        ValueError: If no strategy has that name
    """
    if name not in STRATEGIES:
        raise ValueError(f"Unknown strategy '{name}', expected one of: {', '.join(STRATEGIES)}")
    return STRATEGIES[name]()
