"""Resolution of the GitHub repository that hosts the projects."""

from __future__ import annotations

from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict

from openpronounce.core.config.models import ContentSourceConfig


class ConfigurationError(RuntimeError):
    """The content source cannot be determined from configuration."""


class RepoSpec(BaseModel):
    """Owner/repository pair."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str


def infer_repo_from_pages_url(url: str) -> RepoSpec | None:
    """Infer owner/repo from a GitHub Pages URL.

    ``https://alice.github.io/names/`` maps to ``alice/names``; a user site
    with no path (``https://alice.github.io/``) maps to ``alice/alice.github.io``.

    Args:
        url: Pages URL

    Returns:
        RepoSpec, or None if the host is not a github.io host

    Example:
        >>> infer_repo_from_pages_url("https://alice.github.io/names/index.html")
        RepoSpec(owner='alice', repo='names')
    """
    parts = urlsplit(url if "://" in url else f"https://{url}")
    host = (parts.hostname or "").lower()
    if not host.endswith("github.io"):
        return None

    owner = host.split(".")[0]
    if not owner:
        return None

    segments = [s for s in parts.path.split("/") if s]
    repo = segments[0] if segments else f"{owner}.github.io"
    return RepoSpec(owner=owner, repo=repo)


def resolve_repo_spec(content: ContentSourceConfig) -> RepoSpec:
    """Determine the repository to read projects from.

    Raises:
        ConfigurationError: If neither owner/repo nor an inferable pages_url is set
    """
    if content.owner and content.repo:
        return RepoSpec(owner=content.owner, repo=content.repo)

    if content.pages_url:
        inferred = infer_repo_from_pages_url(content.pages_url)
        if inferred is not None:
            return inferred

    raise ConfigurationError(
        "Could not determine the GitHub repository. Set content.owner and content.repo "
        "(or OPENPRONOUNCE_OWNER / OPENPRONOUNCE_REPO), or a GitHub Pages URL in "
        "content.pages_url."
    )


def repo_url(content: ContentSourceConfig) -> str:
    """Human-facing GitHub URL of the configured repository."""
    try:
        spec = resolve_repo_spec(content)
    except ConfigurationError:
        return "https://github.com"
    return f"https://github.com/{spec.owner}/{spec.repo}"
