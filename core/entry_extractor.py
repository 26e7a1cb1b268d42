"""
Entry Extractor - turns the plugin tables of a source text into Entry records

Extraction always reports the raw comment state of each line. The allow-list
overlay is a separate step (see core.allowlist_sync.derive_enabled).
"""

import logging
import re
from typing import List, Optional

from config.plugin_config import COMMENT_MARKER, SECTION_BLOCKS
from core.block_locator import locate_block
from models.plugin_entry import Entry, SECTIONS

logger = logging.getLogger("plugin_toggler.entry_extractor")

# <indent><optional marker><identifier or quoted identifier>:
ENTRY_PATTERN = re.compile(
    r"^\s*(" + re.escape(COMMENT_MARKER) + r"\s*)?([\"']?[\w.-]+[\"']?)\s*:"
)


def extract_section_entries(text: str, section: str) -> List[Entry]:
    """Extract the entries of one section in document order

    Args:
        text: Full source text
        section: Section tag ("currency" or "swap")

    Returns:
        List of entries; empty if the section's block cannot be located
    """
    block = locate_block(text, SECTION_BLOCKS[section])
    if block is None:
        return []

    start, end = block
    entries = []
    offset = start
    for line in text[start:end].split("\n"):
        match = ENTRY_PATTERN.match(line)
        if match is not None:
            key = match.group(2).strip("\"'")
            line_end = offset + len(line)
            # Keep the carriage return of CRLF files outside the span
            if line.endswith("\r"):
                line_end -= 1
            entries.append(Entry(
                key=key,
                enabled=match.group(1) is None,
                section=section,
                start=offset,
                end=line_end
            ))
        offset += len(line) + 1
    return entries


def extract_entries(text: str) -> List[Entry]:
    """Extract the entries of every section, currency first then swap"""
    entries = []
    for section in SECTIONS:
        entries.extend(extract_section_entries(text, section))
    logger.info(f"Extracted {len(entries)} plugin entries")
    return entries


def find_entry(entries: List[Entry], section: str, key: str, start: Optional[int] = None) -> Optional[Entry]:
    """Find an entry among freshly extracted ones

    A previously read entry may carry stale offsets, so entries are matched by
    section and key. When the key occurs more than once, the occurrence at
    start wins, otherwise the last one.

    Args:
        entries: Fresh entries
        section: Section tag of the wanted entry
        key: Key of the wanted entry
        start: Offset the caller last saw the entry at, if any

    Returns:
        The matching entry or None
    """
    found = None
    for entry in entries:
        if entry.section != section or entry.key != key:
            continue
        if start is not None and entry.start == start:
            return entry
        found = entry
    return found
