"""
Plugin View - groups, filtering, favorites and lookup for presenting entries

Nothing here keeps state between calls: filter text, sort order and the
favorites set are passed in by the caller every time.
"""

import os
import json
import logging
from typing import Dict, Iterable, List, Optional, Set

# For fuzzy entry lookup
from fuzzywuzzy import fuzz

from models.plugin_entry import Entry, SECTIONS

# Configure logging
logger = logging.getLogger("plugin_toggler.plugin_view")

GROUP_LABELS = ("Favorites", "Enabled", "Disabled")

# Minimum partial_ratio score for a fuzzy match
FUZZY_THRESHOLD = 70


def favorite_key(entry: Entry) -> str:
    return f"{entry.section}:{entry.key}"


def toggle_favorite(favorites: Iterable[str], entry: Entry) -> Set[str]:
    """Return a new favorites set with entry added or removed"""
    updated = set(favorites)
    key = favorite_key(entry)
    if key in updated:
        updated.remove(key)
    else:
        updated.add(key)
    return updated


def build_plugin_groups(entries: List[Entry], section: str, filter_text: Optional[str] = None,
                        favorites: Iterable[str] = (), sort_az: bool = True) -> Dict[str, List[Entry]]:
    """Split one section's entries into the Favorites, Enabled and Disabled groups

    Args:
        entries: Entries with their effective enabled state
        section: Section to show
        filter_text: Case-insensitive substring the key must contain
        favorites: Favorite keys ("section:key")
        sort_az: Sort each group by key instead of document order

    Returns:
        Ordered mapping of group label to entries
    """
    favorites = set(favorites)
    needle = (filter_text or "").strip().lower()

    listed = [e for e in entries if e.section == section]
    if needle:
        listed = [e for e in listed if needle in e.key.lower()]
    if sort_az:
        listed = sorted(listed, key=lambda e: e.key.lower())

    return {
        "Favorites": [e for e in listed if favorite_key(e) in favorites],
        "Enabled": [e for e in listed if e.enabled],
        "Disabled": [e for e in listed if not e.enabled],
    }


def pick_entry(entries: List[Entry], query: str, section: Optional[str] = None) -> Optional[Entry]:
    """Find the entry a user most likely meant

    Args:
        entries: Candidate entries
        query: Key typed by the user, possibly prefixed with "section:"
        section: Restrict the search to one section

    Returns:
        The exact match if there is one, otherwise the best fuzzy match
        scoring above the threshold, otherwise None
    """
    query = query.strip()
    if ":" in query and section is None:
        prefix, _, rest = query.partition(":")
        if prefix in SECTIONS:
            section, query = prefix, rest.strip()

    candidates = [e for e in entries if section is None or e.section == section]
    if not query or not candidates:
        return None

    for entry in candidates:
        if entry.key == query:
            return entry

    # Use fuzzywuzzy to find the best match
    best = None
    best_score = 0
    for entry in candidates:
        score = fuzz.partial_ratio(query.lower(), entry.key.lower())
        if score > best_score:
            best, best_score = entry, score

    if best_score < FUZZY_THRESHOLD:
        logger.info(f"No entry close enough to '{query}' (best score {best_score})")
        return None
    logger.info(f"Matched '{query}' to {favorite_key(best)} (score {best_score})")
    return best


class FavoritesStore:
    """Persists the favorites set of a workspace as a small JSON document"""

    def __init__(self, state_path: str):
        self.state_path = state_path

    def load(self) -> Set[str]:
        try:
            with open(self.state_path, 'r', encoding='utf-8') as f:
                state = json.load(f)
        except FileNotFoundError:
            return set()
        except (OSError, ValueError) as e:
            logger.error(f"Error loading favorites from {self.state_path}: {str(e)}")
            return set()
        favorites = state.get("favorites", []) if isinstance(state, dict) else []
        return {item for item in favorites if isinstance(item, str)}

    def save(self, favorites: Iterable[str]) -> None:
        """Write the favorites, keeping any other state in the file"""
        state = {}
        if os.path.exists(self.state_path):
            try:
                with open(self.state_path, 'r', encoding='utf-8') as f:
                    loaded = json.load(f)
                if isinstance(loaded, dict):
                    state = loaded
            except (OSError, ValueError) as e:
                logger.error(f"Error reading state from {self.state_path}: {str(e)}")

        state["favorites"] = sorted(set(favorites))
        os.makedirs(os.path.dirname(os.path.abspath(self.state_path)), exist_ok=True)
        with open(self.state_path, 'w', encoding='utf-8') as f:
            json.dump(state, f, indent=2)
            f.write("\n")
        logger.info(f"Saved {len(state['favorites'])} favorites to {self.state_path}")
