"""Project aggregation: projects directory -> published Snapshot.

Discovery must succeed for a run to produce anything. Each project directory
is then resolved concurrently; what happens when one of those directories
cannot be listed is decided by ``AggregationConfig.on_directory_failure``:

- ``skip`` (default): the directory is left out and a warning is recorded
  on the snapshot.
- ``abort``: the run fails with PipelineError.

The snapshot is published to the store only after every resolution has
settled and the run succeeded. A failed run publishes nothing, so the
previous snapshot stays in place.
"""

from __future__ import annotations

import asyncio
import logging

from openpronounce.core.config.models import AppConfig, ResolutionPolicy
from openpronounce.core.content.fetcher import ContentFetcher
from openpronounce.core.pipeline import (
    ExecutionPattern,
    PipelineContext,
    PipelineDefinition,
    PipelineExecutor,
    StageDefinition,
)
from openpronounce.core.projects.models import Snapshot
from openpronounce.core.projects.stages import (
    AssembleSnapshotStage,
    DiscoveryStage,
    ResolveProjectStage,
)
from openpronounce.core.projects.store import SnapshotStore

logger = logging.getLogger(__name__)


class PipelineError(RuntimeError):
    """Aggregation could not produce a snapshot.

    The underlying error (ConfigurationError, NetworkError, RemoteError, ...)
    is chained as ``__cause__`` when there is one.

    Attributes:
        failed_stage: ID of the stage that failed, if known
    """

    def __init__(self, message: str, *, failed_stage: str | None = None) -> None:
        super().__init__(message)
        self.failed_stage = failed_stage


class AggregationPipeline:
    """Discovers project directories and resolves them into a Snapshot.

    Args:
        fetcher: Content source reads
        config: Application configuration (defaults to AppConfig())
        store: Snapshot store to publish to on success (optional)
        executor: Pipeline executor (defaults to PipelineExecutor())

    Example:
        >>> pipeline = AggregationPipeline(fetcher, config, store=store)
        >>> snapshot = await pipeline.discover_and_resolve()
        >>> snapshot.names()
        ['Apple', 'apricot', 'Banana']
    """

    def __init__(
        self,
        fetcher: ContentFetcher,
        config: AppConfig | None = None,
        *,
        store: SnapshotStore | None = None,
        executor: PipelineExecutor | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.config = config or AppConfig()
        self.store = store
        self.executor = executor or PipelineExecutor()

    def build_definition(self) -> PipelineDefinition:
        """Pipeline definition for the configured failure policy."""
        aggregation = self.config.aggregation
        return PipelineDefinition(
            name="aggregate_projects",
            stages=[
                StageDefinition("discover", DiscoveryStage()),
                StageDefinition(
                    "resolve",
                    ResolveProjectStage(),
                    pattern=ExecutionPattern.FAN_OUT,
                    critical=aggregation.on_directory_failure is ResolutionPolicy.ABORT,
                    max_concurrency=aggregation.max_concurrency,
                ),
                StageDefinition("assemble", AssembleSnapshotStage()),
            ],
        )

    async def discover_and_resolve(self, cancel_token: asyncio.Event | None = None) -> Snapshot:
        """Run one aggregation and publish its snapshot.

        Args:
            cancel_token: Optional event; when set, the run stops before its
                next stage (reads already in flight still complete)

        Returns:
            The new snapshot

        Raises:
            PipelineError: If no snapshot could be produced
        """
        projects_path = self.config.content.projects_path
        context = PipelineContext(
            fetcher=self.fetcher,
            app_config=self.config,
            cancel_token=cancel_token,
        )

        result = await self.executor.execute(self.build_definition(), projects_path, context)

        if result.cancelled:
            raise PipelineError(
                "Project aggregation was cancelled", failed_stage=result.failed_stage
            )
        if not result.success:
            failure = result.failure
            reason = failure.error if failure is not None else "unknown error"
            cause = failure.exception if failure is not None else None
            raise PipelineError(
                f"Could not load projects: {reason}", failed_stage=result.failed_stage
            ) from cause

        snapshot: Snapshot = result.outputs["assemble"]
        for warning in snapshot.warnings:
            logger.warning(f"Skipped project directory: {warning}")

        logger.info(
            f"Aggregated {len(snapshot)} projects from '{projects_path}' "
            f"in {result.duration_ms:.0f}ms"
        )

        if self.store is not None:
            self.store.publish(snapshot)
        return snapshot
