"""Stage and run outcomes."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class StageResult(BaseModel, Generic[T]):
    """Outcome of one stage execution.

    Stages report failure through this object instead of raising. When a
    failure came from an exception, that exception rides along in
    ``exception`` (never serialized) so the caller can chain it.

    Example:
        >>> result = success_result(entries, stage_name="discover")
        >>> result.success
        True
    """

    success: bool
    stage_name: str
    output: T | None = None
    error: str | None = None
    exception: BaseException | None = Field(default=None, exclude=True, repr=False)
    metadata: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)


def success_result(
    output: T, stage_name: str = "unknown", metadata: dict[str, Any] | None = None
) -> StageResult[T]:
    return StageResult(success=True, stage_name=stage_name, output=output, metadata=metadata or {})


def failure_result(
    error: str,
    stage_name: str = "unknown",
    metadata: dict[str, Any] | None = None,
    exception: BaseException | None = None,
) -> StageResult[Any]:
    """Failed StageResult carrying ``error`` and, optionally, its exception."""
    return StageResult(
        success=False,
        stage_name=stage_name,
        error=error,
        exception=exception,
        metadata=metadata or {},
    )


class PipelineResult(BaseModel):
    """Outcome of a whole run.

    Attributes:
        success: True when every stage succeeded
        outputs: stage id -> output, for the stages that succeeded
        stage_results: stage id -> StageResult, for the stages that ran
        failed_stage: The stage that ended the run, if one did
        cancelled: True when the cancel token stopped the run
        duration_ms: Wall time of the run
        metrics: Counters the stages recorded on the context
    """

    success: bool
    outputs: dict[str, Any] = Field(default_factory=dict)
    stage_results: dict[str, StageResult[Any]] = Field(default_factory=dict)
    failed_stage: str | None = None
    cancelled: bool = False
    duration_ms: float = 0.0
    metrics: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def failure(self) -> StageResult[Any] | None:
        """StageResult of the stage that ended the run."""
        if self.failed_stage is None:
            return None
        return self.stage_results.get(self.failed_stage)
