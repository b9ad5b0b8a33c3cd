"""Stage protocol."""

from __future__ import annotations

from typing import Any, Protocol

from openpronounce.core.pipeline.context import PipelineContext
from openpronounce.core.pipeline.result import StageResult


class PipelineStage(Protocol):
    """Anything with a ``name`` and an async ``execute`` is a stage.

    ``execute`` reports failure with failure_result() rather than raising;
    the executor still turns a stray exception into a failed result.
    """

    @property
    def name(self) -> str: ...

    async def execute(self, input: Any, context: PipelineContext) -> StageResult[Any]: ...
