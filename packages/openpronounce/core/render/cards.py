"""Terminal rendering of projects as rich cards."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from openpronounce.core.projects.models import Project

NO_DESCRIPTION = "(No description yet. Add description.txt)"
NO_RESULTS = "No projects match your search."
MISSING_MP3 = "Missing MP3"
SOURCE_LINK_TEXT = "View on GitHub"

PLAY_MARKER = "▶"
ICON_MARKER = "◆"


def _meta_line(project: Project) -> Text:
    parts: list[Text] = []

    if project.source_url:
        parts.append(Text(SOURCE_LINK_TEXT, style=f"link {project.source_url} cyan"))

    if project.has_audio:
        parts.append(Text(f"{PLAY_MARKER} {project.audio_asset_url}", style="green"))
    else:
        parts.append(Text(MISSING_MP3, style="yellow"))

    if project.has_icon:
        parts.append(Text(f"{ICON_MARKER} icon", style="magenta"))

    return Text("  ").join(parts)


def render_card(project: Project) -> Panel:
    """Render one project as a panel.

    Args:
        project: Project to render

    Returns:
        Panel titled with the project name; body is the description (or a
        placeholder) followed by the meta line
    """
    if project.has_description:
        body = Text(project.description)
    else:
        body = Text(NO_DESCRIPTION, style="dim italic")

    title = Text(project.name, style="bold")
    if project.has_icon:
        title = Text(f"{ICON_MARKER} ", style="magenta") + title

    return Panel(
        Group(body, Text(), _meta_line(project)),
        title=title,
        title_align="left",
        border_style="blue" if project.has_audio else "dim",
    )


def render_projects(projects: Sequence[Project]) -> RenderableType:
    """Render all cards in order, or the empty-state message."""
    if not projects:
        return Text(NO_RESULTS, style="dim")
    return Group(*(render_card(p) for p in projects))


def render_count(count: int) -> Text:
    """Label for the number of listed projects."""
    noun = "project" if count == 1 else "projects"
    return Text(f"{count} {noun}", style="bold")
