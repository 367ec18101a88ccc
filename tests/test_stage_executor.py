"""Tests for StageExecutor orchestration with fake collaborators (no network calls)."""
import asyncio
import base64
import httpx
import pytest
from conftest import (
    ScriptedGenerator,
    FakeNotion,
    FakeGitHub,
    FakeDashboard,
    make_request,
    collect_events,
)
from app.core.channel import EventChannel
from app.core.engine import StageExecutor, StageValidationError, short_stage_name
from app.core.github import GitHubClient
from app.schemas.events import (
    ThoughtEvent,
    ActionEvent,
    ProgressUpdateEvent,
    ResultEvent,
    DeliverableEvent,
    CompleteEvent,
    ErrorEvent,
)


def _types(events):
    return [e.type for e in events]


def _executor(settings, generator, **kwargs):
    return StageExecutor(settings, generator=generator, **kwargs)


def test_short_stage_name():
    assert short_stage_name("2. Research") == "Research"
    assert short_stage_name("Research") == "Research"


class TestValidation:
    """Requests that must be rejected before any work starts."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["taskId", "projectId", "projectTitle"])
    async def test_missing_required_field(self, test_settings, field):
        generator = ScriptedGenerator(["never"])
        executor = _executor(test_settings, generator)

        events = await collect_events(executor, make_request(**{field: None}))

        assert events == [ErrorEvent(content=f"Missing required fields: {field}")]
        assert generator.calls == []

    @pytest.mark.asyncio
    async def test_empty_string_counts_as_missing(self, test_settings):
        executor = _executor(test_settings, ScriptedGenerator([]))

        events = await collect_events(executor, make_request(projectTitle="  ", agentId=""))

        assert events == [ErrorEvent(content="Missing required fields: projectTitle, agentId")]

    @pytest.mark.asyncio
    async def test_stage_index_zero_is_present(self, test_settings):
        executor = _executor(test_settings, ScriptedGenerator(["ok"]))

        executor.validate(make_request(stageIndex=0))

    @pytest.mark.asyncio
    async def test_missing_credential(self, test_settings):
        test_settings.anthropic_api_key = None
        generator = ScriptedGenerator(["never"])
        executor = _executor(test_settings, generator)

        events = await collect_events(executor, make_request())

        assert events == [ErrorEvent(content="ANTHROPIC_API_KEY not configured")]
        with pytest.raises(StageValidationError) as exc:
            executor.validate(make_request())
        assert exc.value.status_code == 500
        assert generator.calls == []


class TestExecution:
    """End-to-end event sequences."""

    @pytest.mark.asyncio
    async def test_without_deliverable_key_emits_truncated_result(self, test_settings):
        content = "z" * 650
        notion = FakeNotion()
        executor = _executor(test_settings, ScriptedGenerator([content]), notion=notion)

        events = await collect_events(executor, make_request(deliverableKey=None))

        assert events[0] == ThoughtEvent(content="Analyzing requirements for 2. Research...")
        assert ActionEvent(content="Starting Research work...") in events
        results = [e for e in events if isinstance(e, ResultEvent)]
        assert results == [ResultEvent(content="z" * 500 + "...")]
        assert not any(isinstance(e, DeliverableEvent) for e in events)
        assert events[-2:] == [ProgressUpdateEvent(percent=100, step="Complete"), CompleteEvent()]
        assert notion.created == []

    @pytest.mark.asyncio
    async def test_short_result_not_truncated(self, test_settings):
        executor = _executor(test_settings, ScriptedGenerator(["Short ", "answer."]))

        events = await collect_events(executor, make_request(deliverableKey=None))

        assert ResultEvent(content="Short answer.") in events

    @pytest.mark.asyncio
    async def test_generic_prompt_without_deliverable_key(self, test_settings):
        generator = ScriptedGenerator(["done"])
        executor = _executor(test_settings, generator)

        await collect_events(executor, make_request(deliverableKey=None))

        system, prompt = generator.calls[0]
        assert system.startswith("You are a Product Researcher AI agent")
        assert prompt.startswith('Complete the 2. Research phase for "Recipe App". Research the market')

    @pytest.mark.asyncio
    async def test_notion_failure_falls_back_to_data_url(self, test_settings):
        markdown = "# Research\n\nMarket is **large**."
        notion = FakeNotion(fail_create=True)
        executor = _executor(test_settings, ScriptedGenerator([markdown]), notion=notion)

        events = await collect_events(executor, make_request())

        tail = [e for e in events if not isinstance(e, ProgressUpdateEvent)][-3:]
        assert tail[0].type == "deliverable"
        assert tail[0].key == "research"
        assert tail[0].url.startswith("data:text/markdown;base64,")
        assert base64.b64decode(tail[0].url.split(",", 1)[1]).decode("utf-8") == markdown
        assert tail[1] == ResultEvent(content="Research deliverable created successfully.")
        assert tail[2] == CompleteEvent()
        assert notion.created[0][1] == "Recipe App - Research Report"

    @pytest.mark.asyncio
    async def test_publishes_to_notion(self, test_settings):
        notion = FakeNotion()
        executor = _executor(test_settings, ScriptedGenerator(["# Spec\n", "- story"]), notion=notion)

        events = await collect_events(executor, make_request(deliverableKey="testReport", agentId="user_testing"))

        assert DeliverableEvent(key="testReport", url="https://www.notion.so/page-123") in events
        assert ResultEvent(content="TestReport deliverable created successfully.") in events
        assert ActionEvent(content="Saving deliverable to Notion...") in events
        assert notion.created[0][1] == "Recipe App - Test Report"

    @pytest.mark.asyncio
    async def test_unknown_keys_use_default_arms(self, test_settings):
        generator = ScriptedGenerator(["text"])
        notion = FakeNotion()
        executor = _executor(test_settings, generator, notion=notion)

        events = await collect_events(executor, make_request(agentId="janitor", deliverableKey="poem"))

        system, prompt = generator.calls[0]
        assert system.startswith("You are the CEO")
        assert prompt.startswith("Complete the assigned task and provide a comprehensive deliverable.")
        assert notion.created[0][1] == "Recipe App - Deliverable"
        assert DeliverableEvent(key="poem", url="https://www.notion.so/page-123") in events

    @pytest.mark.asyncio
    async def test_progress_monotonic_and_ends_at_100(self, test_settings):
        executor = _executor(test_settings, ScriptedGenerator(["w" * 150] * 40), notion=FakeNotion())

        events = await collect_events(executor, make_request())

        percents = [e.percent for e in events if isinstance(e, ProgressUpdateEvent)]
        assert percents == sorted(percents)
        assert all(0 <= p <= 100 for p in percents)
        assert percents[0] == 5
        assert percents[-1] == 100
        thoughts = [e.content for e in events if isinstance(e, ThoughtEvent)]
        assert "Analyzing market landscape..." in thoughts

    @pytest.mark.asyncio
    async def test_stream_failure_emits_error_and_skips_publishing(self, test_settings):
        notion = FakeNotion()
        generator = ScriptedGenerator(["partial "], error=RuntimeError("upstream overloaded"))
        executor = _executor(test_settings, generator, notion=notion)

        events = await collect_events(executor, make_request())

        assert events[-1] == ErrorEvent(content="Execution failed: upstream overloaded")
        assert not any(isinstance(e, (DeliverableEvent, CompleteEvent)) for e in events)
        assert notion.created == []

    @pytest.mark.asyncio
    async def test_cancellation_closes_channel_without_terminal_event(self, test_settings):
        generator = ScriptedGenerator(["x" * 900], hang=True)
        executor = _executor(test_settings, generator)
        channel = EventChannel()

        task = asyncio.create_task(executor.execute(make_request(), channel))
        await generator.started.wait()
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert channel.closed
        events = [e async for e in channel]
        assert not any(isinstance(e, (CompleteEvent, ErrorEvent)) for e in events)


class TestCodebaseStage:
    """Repository provisioning for the codebase deliverable."""

    @pytest.mark.asyncio
    async def test_repository_created_and_linked(self, test_settings):
        github = FakeGitHub(login="acme")
        dashboard = FakeDashboard()
        generator = ScriptedGenerator(["# Code"])
        executor = _executor(
            test_settings, generator, github=github, dashboard=dashboard, notion=FakeNotion()
        )

        events = await collect_events(
            executor, make_request(deliverableKey="codebase", agentId="developer", stageName="6. Development")
        )

        assert ResultEvent(content="GitHub repository created: https://github.com/acme/recipe-app") in events
        assert ResultEvent(content="Repository linked to project dashboard") in events
        assert dashboard.updates == [("proj_1", "githubUrl", "https://github.com/acme/recipe-app")]
        percents = [e.percent for e in events if isinstance(e, ProgressUpdateEvent)]
        assert percents[:4] == [5, 8, 12, 15]
        _, prompt = generator.calls[0]
        assert prompt.startswith("The GitHub repository has been created at: https://github.com/acme/recipe-app")
        assert "Include instructions for cloning and setting up this repository." in prompt

    @pytest.mark.asyncio
    async def test_existing_repository_reused(self, test_settings, conflict_error):
        github = FakeGitHub(error=conflict_error, login="octo")
        executor = _executor(test_settings, ScriptedGenerator(["# Code"]), github=github, dashboard=FakeDashboard())

        events = await collect_events(executor, make_request(deliverableKey="codebase"))

        assert ResultEvent(content="GitHub repository created: https://github.com/octo/recipe-app") in events

    @pytest.mark.asyncio
    async def test_provisioning_skipped_without_token(self, test_settings):
        generator = ScriptedGenerator(["# Code"])
        executor = _executor(test_settings, generator)

        events = await collect_events(executor, make_request(deliverableKey="codebase"))

        assert ThoughtEvent(content="GitHub repo creation skipped (no token or error)") in events
        assert ProgressUpdateEvent(percent=12, step="Repository ready") in events
        assert events[-1] == CompleteEvent()
        _, prompt = generator.calls[0]
        assert prompt.startswith('Create the implementation code for "Recipe App"')

    @pytest.mark.asyncio
    async def test_dashboard_link_failure_is_soft(self, test_settings):
        executor = _executor(
            test_settings, ScriptedGenerator(["# Code"]), github=FakeGitHub(), dashboard=FakeDashboard(ok=False)
        )

        events = await collect_events(executor, make_request(deliverableKey="codebase"))

        assert ThoughtEvent(content="Repository could not be linked to the project dashboard") in events
        assert events[-1] == CompleteEvent()
        assert not any(isinstance(e, ErrorEvent) for e in events)

    @pytest.mark.asyncio
    async def test_other_stages_do_not_provision(self, test_settings):
        github = FakeGitHub()
        executor = _executor(test_settings, ScriptedGenerator(["text"]), github=github)

        await collect_events(executor, make_request(deliverableKey="design"))

        assert github.created == []

    @pytest.mark.asyncio
    async def test_malformed_github_reply_skips_provisioning(self, test_settings):
        transport = httpx.MockTransport(lambda request: httpx.Response(201, text="<html>created</html>"))
        github = GitHubClient(token="t", api_base="https://api.github.com", transport=transport)
        dashboard = FakeDashboard()
        executor = _executor(
            test_settings, ScriptedGenerator(["# Code"]), github=github, dashboard=dashboard, notion=FakeNotion()
        )

        events = await collect_events(executor, make_request(deliverableKey="codebase"))

        assert ThoughtEvent(content="GitHub repo creation skipped (no token or error)") in events
        assert events[-1] == CompleteEvent()
        assert not any(isinstance(e, ErrorEvent) for e in events)
        assert dashboard.updates == []
