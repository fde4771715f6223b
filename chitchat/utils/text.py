"""
Text utilities used when fingerprinting message payloads.
"""

from typing import List, Optional


def split_words(text: Optional[str]) -> List[str]:
    """
    Split text on runs of whitespace.

    Args:
        text: Text to split (None is treated as empty)

    Returns:
        List of words, without empty entries
    """
    if not text:
        return []
    return text.split()


def first_and_last_words(text: Optional[str]) -> str:
    """
    Join the first and last word of a text.

    A single word is returned once, not doubled. Empty or blank text
    yields an empty string.

    Args:
        text: Text to take the words from

    Returns:
        First word followed directly by the last word
    """
    words = split_words(text)

    if not words:
        return ""
    if len(words) == 1:
        return words[0]
    return words[0] + words[-1]
