import base64
import logging
from typing import Optional
from app.core.notion import NotionClient
from app.generators.blocks.converter import markdown_to_blocks

log = logging.getLogger(__name__)

NOTION_BATCH_SIZE = 100
FALLBACK_URL_PREFIX = "data:text/markdown;base64,"


def encode_fallback(markdown: str) -> str:
    """Self-contained data URL holding the raw markdown."""
    payload = base64.b64encode(markdown.encode("utf-8")).decode("ascii")
    return f"{FALLBACK_URL_PREFIX}{payload}"


class DeliverablePublisher:
    def __init__(self, notion: Optional[NotionClient], parent_page_id: Optional[str]):
        self.notion = notion
        self.parent_page_id = parent_page_id

    async def publish(self, markdown: str, title: str) -> str:
        """
        Publish markdown as a Notion page and return its URL.

        Falls back to a base64 data URL when Notion is not configured or
        page creation fails. Never raises.
        """
        if self.notion is None or not self.parent_page_id:
            log.warning("Notion not configured, using data URL fallback")
            return encode_fallback(markdown)

        try:
            blocks = [block.to_notion() for block in markdown_to_blocks(markdown)]
            log.info(f"Converted to {len(blocks)} Notion blocks")
            page = await self.notion.create_page(self.parent_page_id, title, blocks[:NOTION_BATCH_SIZE])
        except Exception as e:
            log.error(f"Notion page creation failed, using data URL fallback: {e}")
            return encode_fallback(markdown)

        page_url = page.get("url")
        if not page_url:
            log.error(f"Notion returned page {page.get('id')} without a URL, using data URL fallback")
            return encode_fallback(markdown)
        log.info(f"Notion page created successfully: {page.get('id')} {page_url}")

        remaining = blocks[NOTION_BATCH_SIZE:]
        failed_batches = 0
        for start in range(0, len(remaining), NOTION_BATCH_SIZE):
            batch = remaining[start:start + NOTION_BATCH_SIZE]
            try:
                await self.notion.append_block_children(page["id"], batch)
            except Exception as e:
                # The page already holds the earlier batches; keep going.
                failed_batches += 1
                log.error(f"Failed to append blocks {start + NOTION_BATCH_SIZE}-"
                          f"{start + NOTION_BATCH_SIZE + len(batch) - 1} to page {page['id']}: {e}")

        if failed_batches:
            log.warning(f"Page {page_url} is missing {failed_batches} batch(es) of trailing content")
        return page_url
