"""
Edit Planner - computes the line replacements for enabling or disabling entries

Two strategies are provided. The per-entry plan patches one line and then
repairs commas over the freshly re-read section. The section plan works out
comment and comma state for every line of a section in one pass, which is
what bulk operations use.
"""

import logging
from typing import List

from core.entry_extractor import extract_section_entries, find_entry
from core.line_patcher import ensure_trailing_comma, remove_trailing_comma, set_comment_state
from models.plugin_entry import Entry, LineEdit

logger = logging.getLogger("plugin_toggler.edit_planner")


def apply_edits(text: str, edits: List[LineEdit]) -> str:
    """Apply non-overlapping edits to a text

    Args:
        text: Text the edit offsets refer to
        edits: Edits in any order

    Returns:
        The edited text
    """
    result = text
    for edit in sorted(edits, key=lambda e: e.start, reverse=True):
        result = result[:edit.start] + edit.text + result[edit.end:]
    return result


def diff_line_edits(old_text: str, new_text: str) -> List[LineEdit]:
    """Express a rewrite that keeps the line count as per-line edits

    Args:
        old_text: Original text
        new_text: Rewritten text with the same number of lines

    Returns:
        One edit per changed line, with offsets into old_text
    """
    old_lines = old_text.split("\n")
    new_lines = new_text.split("\n")
    if len(old_lines) != len(new_lines):
        # Not a line-for-line rewrite, replace everything
        return [LineEdit(0, len(old_text), new_text)]

    edits = []
    offset = 0
    for old_line, new_line in zip(old_lines, new_lines):
        if old_line != new_line:
            edits.append(LineEdit(offset, offset + len(old_line), new_line))
        offset += len(old_line) + 1
    return edits


def _comma_fixed(line: str, is_last: bool) -> str:
    return remove_trailing_comma(line) if is_last else ensure_trailing_comma(line)


def plan_comma_fix(text: str, section: str) -> List[LineEdit]:
    """Rewrite trailing commas so only the last enabled entry lacks one

    Args:
        text: Current source text
        section: Section tag

    Returns:
        Edits against text; empty when the section has no enabled entries
    """
    enabled = [e for e in extract_section_entries(text, section) if e.enabled]
    enabled.sort(key=lambda e: e.start)

    edits = []
    for index, entry in enumerate(enabled):
        line = text[entry.start:entry.end]
        updated = _comma_fixed(line, index == len(enabled) - 1)
        if updated != line:
            edits.append(LineEdit(entry.start, entry.end, updated))
    return edits


def plan_entry_change(text: str, target: Entry, enable: bool) -> List[LineEdit]:
    """Plan enabling or disabling a single entry

    The target is looked up again in text, so an entry read before an
    earlier edit still resolves to the right line.

    Args:
        text: Current source text
        target: Entry to change (only section, key and start are used)
        enable: Desired state

    Returns:
        Edits against text; empty if the entry is missing or already in the
        desired state
    """
    current = find_entry(extract_section_entries(text, target.section), target.section, target.key, target.start)
    if current is None:
        logger.info(f"No entry {target.section}:{target.key} in current text")
        return []
    if current.enabled == enable:
        return []

    line = text[current.start:current.end]
    patched = apply_edits(text, [LineEdit(current.start, current.end, set_comment_state(line, enable))])

    # Offsets after the patched line have shifted, re-read before fixing commas
    fixed = apply_edits(patched, plan_comma_fix(patched, target.section))
    return diff_line_edits(text, fixed)


def plan_section_change(text: str, section: str, enable: bool) -> List[LineEdit]:
    """Plan enabling or disabling every entry of a section in one pass

    Args:
        text: Current source text
        section: Section tag
        enable: Desired state for all entries

    Returns:
        Edits against text covering every changed line
    """
    entries = sorted(extract_section_entries(text, section), key=lambda e: e.start)
    enabled_after = [e for e in entries if enable]
    last_enabled = enabled_after[-1] if enabled_after else None

    edits = []
    for entry in entries:
        line = text[entry.start:entry.end]
        updated = set_comment_state(line, enable)
        if enable:
            updated = _comma_fixed(updated, entry == last_enabled)
        if updated != line:
            edits.append(LineEdit(entry.start, entry.end, updated))
    logger.info(f"Planned {len(edits)} line edits to {'enable' if enable else 'disable'} {section}")
    return edits


def plan_section_toggle(text: str, section: str) -> List[LineEdit]:
    """Disable a fully enabled section, otherwise enable all of it"""
    entries = extract_section_entries(text, section)
    if not entries:
        return []
    all_enabled = all(e.enabled for e in entries)
    return plan_section_change(text, section, not all_enabled)
