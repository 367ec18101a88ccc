"""Dataclasses for document blocks."""
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional


@dataclass(frozen=True)
class RichTextSpan:
    """A run of text with optional inline annotations."""
    text: str
    bold: bool = False
    italic: bool = False
    code: bool = False
    link: Optional[str] = None

    def to_notion(self) -> Dict[str, Any]:
        text: Dict[str, Any] = {"content": self.text}
        if self.link:
            text["link"] = {"url": self.link}
        payload: Dict[str, Any] = {"type": "text", "text": text}
        annotations = {
            name: True
            for name, enabled in (("bold", self.bold), ("italic", self.italic), ("code", self.code))
            if enabled
        }
        if annotations:
            payload["annotations"] = annotations
        return payload


@dataclass(frozen=True)
class Block:
    """Base for all block variants."""
    spans: List[RichTextSpan] = field(default_factory=list)

    block_type = "paragraph"

    def plain_text(self) -> str:
        return "".join(span.text for span in self.spans)

    def to_notion(self) -> Dict[str, Any]:
        return {
            "object": "block",
            "type": self.block_type,
            self.block_type: {"rich_text": [span.to_notion() for span in self.spans]},
        }


@dataclass(frozen=True)
class Heading(Block):
    level: int = 1

    def __post_init__(self):
        if self.level not in (1, 2, 3):
            raise ValueError(f"Heading level must be 1, 2 or 3, got {self.level}")

    @property
    def block_type(self) -> str:  # type: ignore[override]
        return f"heading_{self.level}"


@dataclass(frozen=True)
class Paragraph(Block):
    block_type = "paragraph"


@dataclass(frozen=True)
class BulletItem(Block):
    block_type = "bulleted_list_item"


@dataclass(frozen=True)
class NumberedItem(Block):
    block_type = "numbered_list_item"
