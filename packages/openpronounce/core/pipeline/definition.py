"""Linear pipeline definitions.

A pipeline is an ordered list of stages. The first stage receives the run's
initial input and every later stage receives the output of the one before it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExecutionPattern(str, Enum):
    """How a stage consumes its input.

    Values:
        SINGLE: One execution with the whole input
        FAN_OUT: One concurrent execution per item of a list input
    """

    SINGLE = "single"
    FAN_OUT = "fan_out"


@dataclass(frozen=True)
class StageDefinition:
    """One step of a pipeline.

    Attributes:
        id: Stage identifier, unique within the pipeline
        stage: Object implementing the PipelineStage protocol
        pattern: SINGLE or FAN_OUT
        critical: For FAN_OUT, whether one failed item fails the stage.
            A failed SINGLE stage always ends the run.
        max_concurrency: Cap on simultaneous FAN_OUT executions (None: no cap)

    Example:
        >>> StageDefinition(
        ...     "resolve",
        ...     ResolveProjectStage(),
        ...     pattern=ExecutionPattern.FAN_OUT,
        ...     critical=False,
        ... )
    """

    id: str
    stage: Any  # PipelineStage; pydantic cannot validate Protocols
    pattern: ExecutionPattern = ExecutionPattern.SINGLE
    critical: bool = True
    max_concurrency: int | None = None


class PipelineDefinition(BaseModel):
    """Named, ordered sequence of stages."""

    name: str = Field(description="Pipeline name used in log lines")
    stages: list[StageDefinition] = Field(description="Stages in execution order")

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    @field_validator("stages")
    @classmethod
    def _check_stages(cls, stages: list[StageDefinition]) -> list[StageDefinition]:
        if not stages:
            raise ValueError("a pipeline needs at least one stage")
        ids = [s.id for s in stages]
        repeated = sorted({i for i in ids if ids.count(i) > 1})
        if repeated:
            raise ValueError(f"stage ids must be unique, repeated: {repeated}")
        return stages
