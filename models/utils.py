"""Utility functions for Hue Dashboard.

This module contains helper functions used across the application:
- display_width: Calculate terminal display width for Unicode/emojis
- create_name_lookup: Build ID-to-name mappings for resources
- find_resource: Look up an exported resource by ID or name
- similarity_score: Canonical fuzzy string matching algorithm
- find_similar_strings: Find similar strings using fuzzy matching
"""


def display_width(text: str) -> int:
    """Calculate the display width of text accounting for wide characters.

    Emojis and certain Unicode characters take up 2 columns in the terminal.
    Variation selectors and zero-width joiners take up none.
    """
    width = 0
    for char in text:
        code = ord(char)
        if code in (0xFE0F, 0x200D):
            continue
        # Rightwards arrow (used in cycle output) displays as 2 columns
        elif char == '→':
            width += 2
        # Otherwise emoji characters are in these ranges
        elif code >= 0x1F300 or 0x2600 <= code <= 0x27BF:
            width += 2
        else:
            width += 1
    return width


def resource_name(resource: dict, default: str = 'Unknown') -> str:
    """Get a resource's name from exported ('name') or raw v2 ('metadata.name') data."""
    return resource.get('name') or resource.get('metadata', {}).get('name') or default


def create_name_lookup(resources) -> dict[str, str]:
    """Create a lookup dict mapping resource IDs to names.

    Args:
        resources: Exported resources (dict of ID -> resource) or a list of
            v2 API resource dicts with 'id' and 'metadata.name' fields

    Returns:
        Dict mapping resource ID to name
    """
    values = resources.values() if isinstance(resources, dict) else resources
    return {r['id']: resource_name(r) for r in values if 'id' in r}


def find_resource(resources: dict[str, dict], query: str) -> dict | None:
    """Find an exported resource by ID, exact name, or unique name substring.

    Name matching is case-insensitive. Returns None if nothing (or more than
    one resource) matches the substring.
    """
    if query in resources:
        return resources[query]

    query_lower = query.lower()
    values = list(resources.values())

    for resource in values:
        if resource_name(resource, '').lower() == query_lower:
            return resource

    matches = [r for r in values if query_lower in resource_name(r, '').lower()]
    if len(matches) == 1:
        return matches[0]
    return None


def _ordered_matches(needle: str, haystack: str) -> int:
    """Count characters of needle found in haystack in order, scanning greedily."""
    remaining = iter(haystack)
    return sum(1 for char in needle if char in remaining)


def similarity_score(s1: str, s2: str) -> int:
    """Score how alike two strings are, ignoring case.

    Used for command typo suggestions and for suggesting resource names
    when a lookup fails.

    Returns:
        100 for equal strings, 80 when one starts with the other, 60 when
        one contains the other, otherwise up to 50 in proportion to the
        characters shared in order (scores of 20 or less count as 0)
    """
    a, b = s1.lower(), s2.lower()

    if a == b:
        return 100
    if a.startswith(b) or b.startswith(a):
        return 80
    if a in b or b in a:
        return 60

    longest = max(len(a), len(b))
    score = _ordered_matches(a, b) * 50 // longest if longest else 0
    return score if score > 20 else 0


def find_similar_strings(target: str, candidates: list[str], limit: int = 5) -> list[str]:
    """Candidates that resemble target, best match first (at most limit)."""
    scored = [(similarity_score(target, candidate), candidate) for candidate in candidates]
    ranked = sorted((pair for pair in scored if pair[0] > 0), key=lambda pair: pair[0], reverse=True)
    return [candidate for _, candidate in ranked[:limit]]
