"""Rich renderables for projects."""

from openpronounce.core.render.cards import (
    NO_DESCRIPTION,
    NO_RESULTS,
    render_card,
    render_count,
    render_projects,
)

__all__ = [
    "NO_DESCRIPTION",
    "NO_RESULTS",
    "render_card",
    "render_count",
    "render_projects",
]
