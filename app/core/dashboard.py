from __future__ import annotations
import logging
import httpx
from dataclasses import dataclass
from typing import Any, Optional
from app.core.config import settings

log = logging.getLogger(__name__)


@dataclass
class DashboardClient:
    """Writes project fields back to the origin dashboard's pipeline API."""
    base_url: str = settings.dashboard_base_url
    timeout: float = settings.http_timeout_seconds
    transport: Optional[httpx.AsyncBaseTransport] = None

    async def update_project_field(self, project_id: str, field: str, value: Any) -> bool:
        """Fire-and-forget update; failures are logged and reported as False."""
        url = f"{self.base_url.rstrip('/')}/api/pipeline"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.put(url, json={"id": project_id, field: value})
        except httpx.HTTPError as e:
            log.error(f"Failed to update project {project_id} field {field}: {e}")
            return False
        if r.is_error:
            log.error(f"Dashboard rejected update of {field} for project {project_id}: {r.status_code}")
            return False
        return True
