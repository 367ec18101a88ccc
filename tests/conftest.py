"""Shared fakes for stage pipeline tests (no network calls)."""
import asyncio
import pytest
from app.core.channel import EventChannel
from app.core.config import Settings
from app.core.github import GitHubError
from app.core.llm import TextGenerator
from app.core.notion import NotionError
from app.schemas.tasks import StageRequest


class ScriptedGenerator(TextGenerator):
    """Yields a fixed sequence of tokens, optionally failing or hanging afterwards."""

    def __init__(self, tokens, error=None, hang=False):
        self.tokens = list(tokens)
        self.error = error
        self.hang = hang
        self.calls = []
        self.started = asyncio.Event()

    async def stream_text(self, system_instruction, prompt):
        self.calls.append((system_instruction, prompt))
        for token in self.tokens:
            self.started.set()
            yield token
        if self.error is not None:
            raise self.error
        if self.hang:
            self.started.set()
            await asyncio.Event().wait()


class FakeNotion:
    """Records calls; fails page creation or specific append batches on request."""

    def __init__(self, fail_create=False, fail_appends=(), url="https://www.notion.so/page-123"):
        self.fail_create = fail_create
        self.fail_appends = set(fail_appends)
        self.url = url
        self.created = []
        self.appended = []

    async def create_page(self, parent_page_id, title, children):
        self.created.append((parent_page_id, title, children))
        if self.fail_create:
            raise NotionError(400, "body failed validation")
        return {"id": "page-123", "url": self.url}

    async def append_block_children(self, block_id, children):
        index = len(self.appended)
        self.appended.append((block_id, children))
        if index in self.fail_appends:
            raise NotionError(500, "internal error")
        return {"results": children}


class FakeGitHub:
    def __init__(self, repo=None, error=None, login="acme"):
        self.repo = repo
        self.error = error
        self.login = login
        self.created = []

    async def create_repo(self, name, description, private=False):
        self.created.append({"name": name, "description": description, "private": private})
        if self.error is not None:
            raise self.error
        return self.repo or {"html_url": f"https://github.com/{self.login}/{name}", "name": name}

    async def get_authenticated_user(self):
        return {"login": self.login}


class FakeDashboard:
    def __init__(self, ok=True):
        self.ok = ok
        self.updates = []

    async def update_project_field(self, project_id, field, value):
        self.updates.append((project_id, field, value))
        return self.ok


def make_request(**overrides) -> StageRequest:
    body = {
        "taskId": "task_1",
        "projectId": "proj_1",
        "projectTitle": "Recipe App",
        "stageIndex": 1,
        "stageName": "2. Research",
        "stageDescription": "Research the market for recipe sharing",
        "agentId": "product_researcher",
        "deliverableKey": "research",
    }
    body.update(overrides)
    return StageRequest.model_validate({k: v for k, v in body.items() if v is not None})


async def collect_events(executor, request):
    channel = EventChannel()
    await executor.execute(request, channel)
    return [event async for event in channel]


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        anthropic_api_key="test-key",
        github_token=None,
        notion_token=None,
        notion_root_page="root-page",
    )


@pytest.fixture
def conflict_error():
    return GitHubError(422, "Repository creation failed.; name already exists on this account")
