"""Pipeline stages that turn the projects directory into a snapshot.

discover -> resolve (fan-out, one execution per project directory) -> assemble
"""

from __future__ import annotations

import logging
from typing import Any

from openpronounce.core.api.http import ApiError
from openpronounce.core.config.repo import ConfigurationError
from openpronounce.core.content.models import DirectoryEntry
from openpronounce.core.pipeline import (
    PipelineContext,
    StageResult,
    failure_result,
    success_result,
)
from openpronounce.core.projects.assets import select_audio, select_description, select_icon
from openpronounce.core.projects.models import Project, Snapshot
from openpronounce.core.utils.logging import get_logger

logger = logging.getLogger(__name__)


class DiscoveryStage:
    """Lists the projects root and keeps the sub-directories.

    Input: projects root path. Output: list[DirectoryEntry].
    """

    @property
    def name(self) -> str:
        return "discover"

    async def execute(self, input: str, context: PipelineContext) -> StageResult[Any]:
        try:
            entries = await context.fetcher.list_directory(input)
        except (ApiError, ConfigurationError) as e:
            logger.error(f"Project discovery failed for '{input}': {e}")
            return failure_result(error=str(e), stage_name=self.name, exception=e)

        directories = [e for e in entries if e.is_directory]
        context.add_metric("directories_discovered", len(directories))
        logger.debug(f"Discovered {len(directories)} project directories in '{input}'")
        return success_result(directories, stage_name=self.name)


class ResolveProjectStage:
    """Resolves one project directory into a Project.

    Only a failed listing of the directory itself fails the stage; a
    description that cannot be read becomes an empty description.
    """

    @property
    def name(self) -> str:
        return "resolve"

    async def execute(self, input: DirectoryEntry, context: PipelineContext) -> StageResult[Any]:
        log = get_logger(__name__, project=input.name)
        projects_path = context.app_config.content.projects_path.strip("/")
        location = input.location or f"{projects_path}/{input.name}"

        try:
            entries = await context.fetcher.list_directory(location)
        except ApiError as e:
            log.warning(f"Could not list project directory '{input.name}': {e}")
            context.add_warning(f"{input.name}: {e}")
            return failure_result(error=f"{input.name}: {e}", stage_name=self.name, exception=e)

        audio = select_audio(input.name, entries)
        icon = select_icon(entries)
        description = await self._read_description(entries, context, log)

        context.increment_metric("projects_resolved")
        project = Project(
            name=input.name,
            description=description,
            audio_asset_url=audio.download_url if audio else None,
            icon_asset_url=icon.download_url if icon else None,
            source_url=input.public_url,
        )
        return success_result(project, stage_name=self.name)

    async def _read_description(
        self,
        entries: list[DirectoryEntry],
        context: PipelineContext,
        log: logging.Logger | logging.LoggerAdapter,
    ) -> str:
        desc_file = select_description(entries)
        if desc_file is None or not desc_file.download_url:
            return ""

        try:
            text = await context.fetcher.read_text(desc_file.download_url)
        except ApiError as e:
            log.warning(f"description.txt unreadable, using empty description: {e}")
            return ""
        return text.strip()


class AssembleSnapshotStage:
    """Sorts the resolved projects into a Snapshot with the run's warnings."""

    @property
    def name(self) -> str:
        return "assemble"

    async def execute(self, input: list[Project], context: PipelineContext) -> StageResult[Any]:
        snapshot = Snapshot.build(input, warnings=sorted(context.warnings))
        context.add_metric("projects_in_snapshot", len(snapshot))
        return success_result(snapshot, stage_name=self.name)
