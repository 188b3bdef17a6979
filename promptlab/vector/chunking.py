"""
Character-window chunking with overlap, preferring sentence or line breaks.
"""

from typing import List


def chunk_text(text: str, max_chars: int = 8000, overlap: int = 200) -> List[str]:
    """
    Split text into overlapping chunks of at most max_chars characters.

    A chunk ends at the last '.' or newline inside the window when that break
    lies past the middle of the window; otherwise the window is cut hard.

    Args:
        text: Text to split
        max_chars: Maximum characters per chunk
        overlap: Characters shared between consecutive chunks

    Returns:
        Non-empty, stripped chunks in document order
    """
    if max_chars < 1:
        raise ValueError("max_chars must be >= 1")
    if overlap < 0 or overlap >= max_chars:
        raise ValueError("overlap must be in [0, max_chars)")

    if len(text) <= max_chars:
        stripped = text.strip()
        return [stripped] if stripped else []

    chunks = []
    start = 0
    while start < len(text):
        end = min(start + max_chars, len(text))

        if end < len(text):
            break_point = max(text.rfind(".", 0, end), text.rfind("\n", 0, end))
            if break_point > start + max_chars * 0.5:
                end = break_point + 1

        chunks.append(text[start:end].strip())
        if end >= len(text):
            break
        # next window overlaps the previous one but always advances
        start = max(end - overlap, start + 1)

    return [chunk for chunk in chunks if chunk]
