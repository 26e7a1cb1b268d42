"""
Plugin entry models - records shared by the parser, planner and views
"""

from typing import NamedTuple, Optional, Sequence

CURRENCY = "currency"
SWAP = "swap"
SECTIONS = (CURRENCY, SWAP)


class Entry(NamedTuple):
    """One toggleable line inside a plugin table

    start/end cover exactly one line of the source text, without its newline.
    """
    key: str
    enabled: bool
    section: str
    start: int
    end: int

    @property
    def span(self):
        return (self.start, self.end)


class LineEdit(NamedTuple):
    """Replacement of the text between start and end"""
    start: int
    end: int
    text: str


class PlannedChange(NamedTuple):
    """Everything one operation wants written

    source_edits apply to the plugin source text; settings_text, when not
    None, replaces the whole settings document.
    """
    source_edits: Sequence[LineEdit] = ()
    settings_text: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.source_edits and self.settings_text is None
