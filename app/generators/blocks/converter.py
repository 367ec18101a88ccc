"""Markdown to block conversion."""
import re
from typing import List
from app.generators.blocks.chunking import split_text
from app.generators.blocks.inline import tokenize_inline
from app.generators.blocks.types import (
    Block,
    Heading,
    Paragraph,
    BulletItem,
    NumberedItem,
)

# Notion rejects rich text content over 2000 characters
PARAGRAPH_CHUNK_LIMIT = 1800

BULLET_PATTERN = re.compile(r"^[-*]\s")
NUMBERED_PATTERN = re.compile(r"^\d+\.\s")

HEADING_PREFIXES = (
    ("# ", 1),
    ("## ", 2),
    ("### ", 3),
)


def markdown_to_blocks(markdown: str, paragraph_limit: int = PARAGRAPH_CHUNK_LIMIT) -> List[Block]:
    """
    Convert a markdown document into blocks in reading order.

    Recognizes level 1-3 headings, bullet and numbered list items, and
    paragraphs separated by blank lines. Consecutive paragraph lines are
    joined with a single space. Paragraphs longer than paragraph_limit are
    split into several Paragraph blocks.
    """
    blocks: List[Block] = []
    pending: List[str] = []

    def flush_paragraph() -> None:
        if not pending:
            return
        text = " ".join(pending).strip()
        pending.clear()
        if not text:
            return
        for chunk in split_text(text, paragraph_limit):
            blocks.append(Paragraph(spans=tokenize_inline(chunk)))

    for raw_line in markdown.split("\n"):
        line = raw_line.rstrip("\r")

        heading = _heading_level(line)
        if heading:
            level, prefix_length = heading
            flush_paragraph()
            blocks.append(Heading(level=level, spans=tokenize_inline(line[prefix_length:].strip())))
        elif BULLET_PATTERN.match(line):
            flush_paragraph()
            blocks.append(BulletItem(spans=tokenize_inline(line[2:].strip())))
        elif NUMBERED_PATTERN.match(line):
            flush_paragraph()
            blocks.append(NumberedItem(spans=tokenize_inline(NUMBERED_PATTERN.sub("", line, count=1).strip())))
        elif line.strip() == "":
            flush_paragraph()
        else:
            pending.append(line)

    flush_paragraph()
    return blocks


def _heading_level(line: str):
    for prefix, level in HEADING_PREFIXES:
        if line.startswith(prefix):
            return level, len(prefix)
    return None


def blocks_to_plain_text(blocks: List[Block]) -> str:
    """Render blocks back to unannotated text, one block per line."""
    return "\n".join(block.plain_text() for block in blocks)
