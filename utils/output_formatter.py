"""
Output Formatter for the plugin toggler

This module renders entries, groups and flags as plain text for the CLI and
keeps long listings within a size limit.
"""

from typing import Dict, List, Tuple

from models.plugin_entry import Entry


class OutputFormatter:
    """Utility for rendering command results"""

    @staticmethod
    def truncate_text(text: str, max_chars: int = 10000, add_note: bool = True) -> str:
        """Truncate text to a maximum number of characters

        Args:
            text: The text to truncate
            max_chars: Maximum number of characters
            add_note: Whether to add a note about truncation

        Returns:
            Truncated text
        """
        if len(text) <= max_chars:
            return text

        truncated = text[:max_chars]

        if add_note:
            note = f"\n\n[Output truncated to {max_chars} characters. Original length: {len(text)} characters]"
            # Make sure we have room for the note
            truncated = truncated[:max_chars - len(note)] + note

        return truncated

    @staticmethod
    def format_entry(entry: Entry, favorite: bool = False) -> str:
        mark = "[x]" if entry.enabled else "[ ]"
        star = " *" if favorite else ""
        return f"{mark} {entry.key}{star}"

    @staticmethod
    def format_plugin_groups(section: str, groups: Dict[str, List[Entry]], favorites=(), state: str = "",
                             max_chars: int = 10000) -> str:
        """Format the groups of one section

        Args:
            section: Section tag
            groups: Ordered mapping of group label to entries
            favorites: Favorite keys ("section:key") to mark with a star
            state: Section summary ("all", "none" or "mixed")
            max_chars: Maximum number of characters in the output

        Returns:
            Formatted listing
        """
        header = f"{section} plugins"
        if state:
            header += f" ({state} enabled)"
        content = header + "\n"

        for label, entries in groups.items():
            content += f"\n{label} ({len(entries)}):\n"
            for entry in entries:
                is_favorite = f"{entry.section}:{entry.key}" in favorites
                content += f"  {OutputFormatter.format_entry(entry, is_favorite)}\n"

        return OutputFormatter.truncate_text(content, max_chars)

    @staticmethod
    def format_env_flags(flags: List[Tuple[str, bool]]) -> str:
        if not flags:
            return "No environment flags found"
        return "\n".join(f"{'[x]' if value else '[ ]'} {key}" for key, value in flags)
