from dataclasses import dataclass
from typing import Optional
from app.core.workflow import StageState
from app.schemas.tasks import StageRequest

# Percent reported once context is gathered; generation progress starts here
STREAM_START_PERCENT = 15


@dataclass(frozen=True)
class RepositoryInfo:
    url: str
    name: str


@dataclass
class ExecutionContext:
    """Mutable state of a single stage execution; never shared between requests."""
    request: StageRequest
    state: StageState = StageState.VALIDATING
    content: str = ""
    last_percent: int = STREAM_START_PERCENT
    last_message_offset: int = 0
    message_cursor: int = 0
    repository_url: Optional[str] = None
