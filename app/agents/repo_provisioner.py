import logging
import re
from typing import Optional
import httpx
from app.agents.base import RepositoryInfo
from app.core.config import settings
from app.core.github import GitHubClient, GitHubError

log = logging.getLogger(__name__)

REPO_NAME_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 350

# Malformed GitHub replies surface as ValueError (body is not JSON) or KeyError (field missing)
PROVISIONING_ERRORS = (GitHubError, httpx.HTTPError, ValueError, KeyError)


def repo_slug(project_title: str) -> str:
    """Lowercase, URL-safe repository name derived from a project title."""
    slug = re.sub(r"[^a-z0-9]+", "-", project_title.lower())
    return slug.strip("-")[:REPO_NAME_MAX_LENGTH]


class RepositoryProvisioner:
    def __init__(self, github: Optional[GitHubClient], web_base: str = settings.github_web_base):
        self.github = github
        self.web_base = web_base.rstrip("/")

    async def provision(self, project_title: str, description: str) -> Optional[RepositoryInfo]:
        """
        Create a public repository for the project.

        An "already exists" conflict counts as success: the URL is rebuilt
        from the authenticated account. Any other failure, including a
        malformed success reply, returns None.
        """
        if self.github is None:
            log.warning("GITHUB_TOKEN not set, skipping repo creation")
            return None

        name = repo_slug(project_title)
        if not name:
            log.warning(f"Project title {project_title!r} yields an empty repository name, skipping")
            return None

        log.info(f"Creating GitHub repo: {name}")
        try:
            repo = await self.github.create_repo(
                name=name,
                description=(description or "")[:DESCRIPTION_MAX_LENGTH],
                private=False,
            )
            info = RepositoryInfo(url=repo["html_url"], name=repo["name"])
        except GitHubError as e:
            if "already exists" not in e.message.lower():
                log.error(f"GitHub repo creation failed: {e}")
                return None
            return await self._existing(name)
        except PROVISIONING_ERRORS as e:
            log.error(f"Failed to create GitHub repo {name}: {e!r}")
            return None

        log.info(f"GitHub repo created: {info.url}")
        return info

    async def _existing(self, name: str) -> Optional[RepositoryInfo]:
        try:
            user = await self.github.get_authenticated_user()
            login = user["login"]
        except PROVISIONING_ERRORS as e:
            log.error(f"Repository {name} exists but the owning account could not be resolved: {e!r}")
            return None
        log.info(f"GitHub repo {name} already exists, reusing it")
        return RepositoryInfo(url=f"{self.web_base}/{login}/{name}", name=name)
