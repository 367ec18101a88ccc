import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from app.agents.registry import PromptRegistry
from app.core.config import settings
from app.core.llm import build_generator
from app.core.logging import configure_logging
from app.api.routes import router as api_router

configure_logging(settings.log_level)
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup
    log.info("Starting API server...")
    app.state.prompts = PromptRegistry.default()
    app.state.generator = build_generator(settings)
    if app.state.generator is None:
        log.warning("ANTHROPIC_API_KEY not set, stage execution requests will be rejected")
    if not (settings.notion_token and settings.notion_root_page):
        log.warning("Notion not configured, deliverables will use data URL fallback")
    if not settings.github_token:
        log.warning("GITHUB_TOKEN not set, repository provisioning will be skipped")
    log.info("API server startup complete")
    yield
    # Shutdown
    log.info("Shutting down API server...")
    generator = app.state.generator
    del app.state.generator
    del app.state.prompts
    if generator is not None:
        await generator.aclose()


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    lifespan=lifespan
)
app.include_router(api_router, prefix="/api")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.api_host, port=settings.api_port, log_config=None)
