"""Shared utility functions for linkcopy."""


def shorten(text: str, max_length: int, suffix: str = "...") -> str:
    """Cut ``text`` to at most ``max_length`` characters, marking the cut with ``suffix``."""
    if len(text) <= max_length:
        return text
    keep = max(max_length - len(suffix), 0)
    return text[:keep] + suffix
