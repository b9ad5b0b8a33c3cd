"""Small linear pipeline: ordered stages, optional fan-out, cancel token.

Example:
    >>> definition = PipelineDefinition(
    ...     name="aggregate_projects",
    ...     stages=[
    ...         StageDefinition("discover", DiscoveryStage()),
    ...         StageDefinition("resolve", ResolveProjectStage(), pattern=ExecutionPattern.FAN_OUT),
    ...         StageDefinition("assemble", AssembleSnapshotStage()),
    ...     ],
    ... )
    >>> result = await PipelineExecutor().execute(definition, "projects", context)
"""

from openpronounce.core.pipeline.context import PipelineContext
from openpronounce.core.pipeline.definition import (
    ExecutionPattern,
    PipelineDefinition,
    StageDefinition,
)
from openpronounce.core.pipeline.executor import PipelineExecutor
from openpronounce.core.pipeline.result import (
    PipelineResult,
    StageResult,
    failure_result,
    success_result,
)
from openpronounce.core.pipeline.stage import PipelineStage

__all__ = [
    "ExecutionPattern",
    "PipelineContext",
    "PipelineDefinition",
    "PipelineExecutor",
    "PipelineResult",
    "PipelineStage",
    "StageDefinition",
    "StageResult",
    "failure_result",
    "success_result",
]
