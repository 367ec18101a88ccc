from __future__ import annotations
import logging
from typing import Optional
from app.agents.base import ExecutionContext
from app.agents.content_streamer import ContentStreamer, STREAM_START_PERCENT
from app.agents.deliverable_publisher import DeliverablePublisher
from app.agents.registry import PromptRegistry
from app.agents.repo_provisioner import RepositoryProvisioner
from app.agents.prompts import RESPONSE_GUIDELINES
from app.core.channel import EventChannel, ProgressEmitter
from app.core.config import Settings
from app.core.dashboard import DashboardClient
from app.core.github import GitHubClient
from app.core.llm import TextGenerator
from app.core.logging import StageLogAdapter
from app.core.notion import NotionClient
from app.core.workflow import DeliverableKind, StageState
from app.schemas.tasks import StageRequest

log = logging.getLogger(__name__)

RESULT_PREVIEW_LENGTH = 500


class StageValidationError(ValueError):
    """Request rejected before any work starts."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


def short_stage_name(stage_name: str) -> str:
    """Drop a numbered prefix: '2. Research' -> 'Research'."""
    parts = stage_name.split(". ")
    return parts[1] if len(parts) > 1 and parts[1] else stage_name


class StageExecutor:
    def __init__(
        self,
        settings: Settings,
        generator: Optional[TextGenerator] = None,
        github: Optional[GitHubClient] = None,
        notion: Optional[NotionClient] = None,
        dashboard: Optional[DashboardClient] = None,
        prompts: Optional[PromptRegistry] = None,
    ):
        self.settings = settings
        self.generator = generator
        self.prompts = prompts or PromptRegistry.default()
        self.dashboard = dashboard
        self.streamer = ContentStreamer(generator)
        self.provisioner = RepositoryProvisioner(github, web_base=settings.github_web_base)
        self.publisher = DeliverablePublisher(notion, settings.notion_root_page)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        generator: Optional[TextGenerator] = None,
        prompts: Optional[PromptRegistry] = None,
    ) -> "StageExecutor":
        """
        Build an executor with a client for every configured service.

        The generator is shared across requests and owned by the caller,
        which closes it; the HTTP clients open a connection per call.
        """
        timeout = settings.http_timeout_seconds
        github = None
        if settings.github_token:
            github = GitHubClient(token=settings.github_token, api_base=settings.github_api_base, timeout=timeout)
        notion = None
        if settings.notion_token:
            notion = NotionClient(
                token=settings.notion_token,
                api_base=settings.notion_api_base,
                notion_version=settings.notion_version,
                timeout=timeout,
            )
        dashboard = DashboardClient(base_url=settings.dashboard_base_url, timeout=timeout)
        return cls(settings, generator=generator, github=github, notion=notion, dashboard=dashboard, prompts=prompts)

    def validate(self, request: StageRequest) -> None:
        missing = request.missing_fields()
        if missing:
            raise StageValidationError(f"Missing required fields: {', '.join(missing)}", status_code=400)
        if not self.settings.anthropic_api_key or self.generator is None:
            raise StageValidationError("ANTHROPIC_API_KEY not configured", status_code=500)

    async def execute(self, request: StageRequest, channel: EventChannel) -> None:
        """
        Run one stage, reporting every step on the channel.

        The channel is closed exactly once when this returns, raises, or
        is cancelled. Failures become a single Error event; cancellation
        closes the channel without a terminal event.
        """
        ctx = ExecutionContext(request=request)
        async with ProgressEmitter.open(channel) as emitter:
            try:
                self.validate(request)
            except StageValidationError as e:
                StageLogAdapter(log, ctx).warning(f"Rejected stage request: {e}")
                ctx.state = StageState.FAILED
                await emitter.error(str(e))
                return

            try:
                await self._run(ctx, emitter)
            except Exception as e:
                StageLogAdapter(log, ctx).exception("Stage execution failed")
                self._enter(ctx, StageState.FAILED)
                await emitter.error(f"Execution failed: {e}")

    def _enter(self, ctx: ExecutionContext, state: StageState) -> None:
        ctx.state = state
        StageLogAdapter(log, ctx).info(f"Entering {state.value}")

    async def _run(self, ctx: ExecutionContext, emitter: ProgressEmitter) -> None:
        req = ctx.request
        deliverable_key = req.deliverable_key

        await emitter.thought(f"Analyzing requirements for {req.stage_name}...")
        await emitter.progress(5, "Analyzing requirements")

        if DeliverableKind.resolve(deliverable_key) is DeliverableKind.CODEBASE:
            self._enter(ctx, StageState.PROVISIONING)
            await self._provision(ctx, emitter)

        self._enter(ctx, StageState.STREAMING)
        system_instruction = self.prompts.system_prompt(
            req.agent_id, req.stage_name, req.stage_description, req.project_title
        )
        prompt = self._build_prompt(ctx)

        await emitter.action(f"Starting {short_stage_name(req.stage_name)} work...")
        await emitter.progress(STREAM_START_PERCENT, "Gathering context")

        content = await self.streamer.stream(
            ctx,
            emitter,
            system_instruction=system_instruction,
            prompt=prompt,
            status_messages=self.prompts.progress_messages(deliverable_key),
            step=f"Generating {deliverable_key or 'deliverable'}...",
        )

        await emitter.progress(90, "Finalizing deliverable")

        if deliverable_key and content:
            self._enter(ctx, StageState.PUBLISHING)
            await emitter.action("Saving deliverable to Notion...")
            title = f"{req.project_title} - {self.prompts.deliverable_title(deliverable_key)}"
            StageLogAdapter(log, ctx).info(f"Publishing {len(content)} characters as {title!r}")
            url = await self.publisher.publish(content, title)
            await emitter.deliverable(deliverable_key, url)
            await emitter.result(f"{deliverable_key[:1].upper()}{deliverable_key[1:]} deliverable created successfully.")
        else:
            preview = content[:RESULT_PREVIEW_LENGTH]
            if len(content) > RESULT_PREVIEW_LENGTH:
                preview += "..."
            await emitter.result(preview)

        self._enter(ctx, StageState.COMPLETE)
        await emitter.progress(100, "Complete")
        await emitter.complete()

    async def _provision(self, ctx: ExecutionContext, emitter: ProgressEmitter) -> None:
        req = ctx.request
        await emitter.action("Creating GitHub repository...")
        await emitter.progress(8, "Creating GitHub repository")

        repo = await self.provisioner.provision(req.project_title, req.stage_description)
        if repo:
            ctx.repository_url = repo.url
            await emitter.result(f"GitHub repository created: {repo.url}")
            await emitter.action("Linking repository to project...")
            linked = False
            if self.dashboard is not None:
                linked = await self.dashboard.update_project_field(req.project_id, "githubUrl", repo.url)
            if linked:
                await emitter.result("Repository linked to project dashboard")
            else:
                await emitter.thought("Repository could not be linked to the project dashboard")
        else:
            await emitter.thought("GitHub repo creation skipped (no token or error)")

        await emitter.progress(12, "Repository ready")

    def _build_prompt(self, ctx: ExecutionContext) -> str:
        req = ctx.request
        if req.deliverable_key:
            prompt = self.prompts.deliverable_prompt(req.deliverable_key, req.project_title)
        else:
            prompt = f'Complete the {req.stage_name} phase for "{req.project_title}". {req.stage_description}'

        if ctx.repository_url and DeliverableKind.resolve(req.deliverable_key) is DeliverableKind.CODEBASE:
            prompt = (
                f"The GitHub repository has been created at: {ctx.repository_url}\n\n"
                f"{prompt}\n\n"
                "Include instructions for cloning and setting up this repository."
            )
        return f"{prompt}\n\n{RESPONSE_GUIDELINES}"
