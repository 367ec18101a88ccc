from __future__ import annotations
import httpx
from dataclasses import dataclass
from typing import Optional
from app.core.config import settings


class GitHubError(Exception):
    """Non-2xx response from the GitHub REST API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"GitHub API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text
    parts = [payload.get("message", "")]
    # Validation failures carry the useful detail in errors[].message
    for error in payload.get("errors") or []:
        if isinstance(error, dict) and error.get("message"):
            parts.append(error["message"])
    return "; ".join(p for p in parts if p)


@dataclass
class GitHubClient:
    token: str
    api_base: str = settings.github_api_base
    timeout: float = settings.http_timeout_seconds
    transport: Optional[httpx.AsyncBaseTransport] = None

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def create_repo(self, name: str, description: str, private: bool = False) -> dict:
        url = f"{self.api_base}/user/repos"
        async with self._client() as client:
            r = await client.post(
                url,
                headers=self._headers(),
                json={
                    "name": name,
                    "description": description,
                    "private": private,
                    "auto_init": True,
                    "has_issues": True,
                    "has_projects": True,
                },
            )
            if r.is_error:
                raise GitHubError(r.status_code, _error_message(r))
            return r.json()

    async def get_authenticated_user(self) -> dict:
        url = f"{self.api_base}/user"
        async with self._client() as client:
            r = await client.get(url, headers=self._headers())
            if r.is_error:
                raise GitHubError(r.status_code, _error_message(r))
            return r.json()
