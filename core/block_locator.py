"""
Block Locator - finds the body of a named object literal by brace depth
"""

import logging
from typing import Optional, Tuple

from config.plugin_config import BLOCK_ANCHOR_TEMPLATE

logger = logging.getLogger("plugin_toggler.block_locator")


def locate_block(text: str, block_name: str) -> Optional[Tuple[int, int]]:
    """Locate the brace-delimited body declared under block_name

    Args:
        text: Full source text
        block_name: Name of the declaration, e.g. "currencyPlugins"

    Returns:
        (start, end) offsets strictly between the opening brace and its
        matching closing brace, or None if the anchor or opening brace is
        missing or the braces never balance
    """
    anchor = text.find(BLOCK_ANCHOR_TEMPLATE.format(name=block_name))
    if anchor < 0:
        logger.info(f"No declaration found for {block_name}")
        return None

    open_index = text.find("{", anchor)
    if open_index < 0:
        logger.info(f"No opening brace after declaration of {block_name}")
        return None

    depth = 0
    for index in range(open_index, len(text)):
        ch = text[index]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return open_index + 1, index

    logger.warning(f"Unbalanced braces in {block_name}, reached end of text")
    return None
