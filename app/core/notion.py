from __future__ import annotations
import httpx
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from app.core.config import settings


class NotionError(Exception):
    """Non-2xx response from the Notion API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"Notion API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message


@dataclass
class NotionClient:
    token: str
    api_base: str = settings.notion_api_base
    notion_version: str = settings.notion_version
    timeout: float = settings.http_timeout_seconds
    transport: Optional[httpx.AsyncBaseTransport] = None

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
            "Notion-Version": self.notion_version,
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    @staticmethod
    def _raise_for_error(r: httpx.Response) -> None:
        if r.is_error:
            try:
                message = r.json().get("message", r.text)
            except ValueError:
                message = r.text
            raise NotionError(r.status_code, message)

    async def create_page(self, parent_page_id: str, title: str, children: List[Dict[str, Any]]) -> dict:
        """Create a child page; children must hold at most 100 blocks."""
        url = f"{self.api_base}/pages"
        async with self._client() as client:
            r = await client.post(
                url,
                headers=self._headers(),
                json={
                    "parent": {"page_id": parent_page_id},
                    "properties": {
                        "title": {"title": [{"text": {"content": title}}]},
                    },
                    "children": children,
                },
            )
            self._raise_for_error(r)
            return r.json()

    async def append_block_children(self, block_id: str, children: List[Dict[str, Any]]) -> dict:
        url = f"{self.api_base}/blocks/{block_id}/children"
        async with self._client() as client:
            r = await client.patch(url, headers=self._headers(), json={"children": children})
            self._raise_for_error(r)
            return r.json()
