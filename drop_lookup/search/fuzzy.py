"""Fuzzy subsequence matching for entity names."""


def fold_case(text: str) -> str:
    """Lowercase ``text`` one character at a time, the same way the matcher does."""
    return "".join(ch.lower() for ch in text)


def is_subsequence(haystack: str, needle: str) -> bool:
    """Check whether every character of ``needle`` occurs in ``haystack`` in order.

    Matching is case-insensitive and allows gaps, so "fswd" matches
    "Fire Sword". Case folding is applied one character at a time, which keeps
    the comparison aligned for characters whose lowercase form is longer than
    one code point.

    Args:
        haystack: Candidate text (usually an entity name)
        needle: Query text

    Returns:
        True if needle is empty or is a subsequence of haystack
    """
    if not needle:
        return True
    if not haystack:
        return False

    needle_len = len(needle)
    pos = 0
    wanted = needle[0].lower()
    for ch in haystack:
        if ch.lower() == wanted:
            pos += 1
            if pos == needle_len:
                return True
            wanted = needle[pos].lower()
    return False
