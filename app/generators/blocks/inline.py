"""Inline markdown tokenizer producing rich text spans."""
import re
from typing import List
from app.generators.blocks.types import RichTextSpan

# Alternation order matters only when two forms start at the same offset:
# "**" is tried before "*". Otherwise the leftmost match wins.
INLINE_PATTERN = re.compile(
    r"\*\*(?P<bold>.+?)\*\*"
    r"|\*(?P<italic>.+?)\*"
    r"|`(?P<code>.+?)`"
    r"|\[(?P<label>.+?)\]\((?P<url>.+?)\)"
)


def tokenize_inline(text: str) -> List[RichTextSpan]:
    """Split a line of markdown into annotated spans.

    Plain runs between markup become unannotated spans. Nested or
    overlapping markup is not interpreted: ``code **bold**`` inside
    backticks stays literal code, and the first delimiter found wins.
    """
    spans: List[RichTextSpan] = []
    last_index = 0

    for match in INLINE_PATTERN.finditer(text):
        if match.start() > last_index:
            spans.append(RichTextSpan(text[last_index:match.start()]))

        if match.group("bold") is not None:
            spans.append(RichTextSpan(match.group("bold"), bold=True))
        elif match.group("italic") is not None:
            spans.append(RichTextSpan(match.group("italic"), italic=True))
        elif match.group("code") is not None:
            spans.append(RichTextSpan(match.group("code"), code=True))
        else:
            spans.append(RichTextSpan(match.group("label"), link=match.group("url")))

        last_index = match.end()

    if last_index < len(text):
        spans.append(RichTextSpan(text[last_index:]))

    return spans
