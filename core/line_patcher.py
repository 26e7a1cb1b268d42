"""
Line Patcher - pure single-line transforms for comment markers and commas

Every function here is total: lines that do not look like an entry come back
unchanged rather than raising.
"""

import re

from config.plugin_config import COMMENT_MARKER

# indent, optional marker (plus one following space), rest of the line
_LINE_PATTERN = re.compile(r"^(\s*)(" + re.escape(COMMENT_MARKER) + r" ?)?(.*)$", re.DOTALL)
_TRAILING_COMMA = re.compile(r"\s*,\s*$")


def _split_line(line: str):
    match = _LINE_PATTERN.match(line)
    if match is None:
        return None
    return match.group(1), match.group(2) is not None, match.group(3)


def has_comment_marker(line: str) -> bool:
    """Check whether a line starts with the comment marker after its indent"""
    return line.lstrip().startswith(COMMENT_MARKER)


def toggle_comment(line: str) -> str:
    """Flip the comment state of a line

    Args:
        line: Line text without its newline

    Returns:
        The line with the marker removed if present, otherwise inserted
        after the indent
    """
    parts = _split_line(line)
    if parts is None:
        return line
    indent, commented, rest = parts
    if commented:
        return f"{indent}{rest}"
    return f"{indent}{COMMENT_MARKER} {rest}"


def set_comment_state(line: str, enable: bool) -> str:
    """Force a line to be uncommented (enable) or commented (disable)"""
    parts = _split_line(line)
    if parts is None:
        return line
    indent, commented, rest = parts
    if enable:
        return f"{indent}{rest}" if commented else line
    return line if commented else f"{indent}{COMMENT_MARKER} {rest}"


def _split_inline_comment(line: str):
    """Split a line into its code and a trailing inline comment

    A leading marker (a commented-out line) is part of the code. Markers
    inside quoted strings are skipped.
    """
    quote = None
    index = 0
    while index < len(line):
        char = line[index]
        if quote:
            if char == "\\":
                index += 1
            elif char == quote:
                quote = None
        elif char in "'\"`":
            quote = char
        elif line.startswith(COMMENT_MARKER, index) and line[:index].strip():
            code = line[:index].rstrip()
            return code, line[len(code):]
        index += 1
    return line, ""


def ensure_trailing_comma(line: str) -> str:
    code, comment = _split_inline_comment(line)
    if _TRAILING_COMMA.search(code):
        return line
    return code.rstrip() + "," + comment


def remove_trailing_comma(line: str) -> str:
    code, comment = _split_inline_comment(line)
    return _TRAILING_COMMA.sub("", code) + comment
