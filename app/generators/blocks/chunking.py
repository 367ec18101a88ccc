"""Length-bounded text splitting."""
from typing import List


def _last_whitespace(text: str, upper: int) -> int:
    """Index of the last whitespace character at or before ``upper``, or -1."""
    for index in range(min(upper, len(text) - 1), -1, -1):
        if text[index].isspace():
            return index
    return -1


def split_text(text: str, max_length: int) -> List[str]:
    """
    Split text into chunks no longer than max_length.

    Breaks at the last whitespace at or before max_length. When there is
    none, or it falls in the first half of the window, the text is cut at
    exactly max_length. Chunks are trimmed and never empty.

    Args:
        text: Text to split
        max_length: Maximum chunk length, at least 1

    Returns:
        Chunks in original order
    """
    if max_length < 1:
        raise ValueError(f"max_length must be at least 1, got {max_length}")

    chunks: List[str] = []
    remaining = text.strip()

    while len(remaining) > max_length:
        break_point = _last_whitespace(remaining, max_length)
        if break_point == -1 or break_point < max_length / 2:
            break_point = max_length
        chunk = remaining[:break_point].strip()
        if chunk:
            chunks.append(chunk)
        remaining = remaining[break_point:].strip()

    if remaining:
        chunks.append(remaining)

    return chunks
