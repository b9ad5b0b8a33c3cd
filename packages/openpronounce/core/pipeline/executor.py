"""Runs a linear pipeline one stage at a time."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

from openpronounce.core.pipeline.context import PipelineContext
from openpronounce.core.pipeline.definition import (
    ExecutionPattern,
    PipelineDefinition,
    StageDefinition,
)
from openpronounce.core.pipeline.result import (
    PipelineResult,
    StageResult,
    failure_result,
    success_result,
)

logger = logging.getLogger(__name__)


class PipelineExecutor:
    """Feeds each stage's output into the next one.

    The cancel token is checked before every stage. The first failed stage
    ends the run. FAN_OUT stages wait for all of their executions to settle
    before deciding whether they failed.

    Example:
        >>> result = await PipelineExecutor().execute(definition, "projects", context)
        >>> result.outputs["assemble"]
    """

    async def execute(
        self,
        pipeline: PipelineDefinition,
        initial_input: Any,
        context: PipelineContext,
    ) -> PipelineResult:
        started = time.perf_counter()
        outputs: dict[str, Any] = {}
        stage_results: dict[str, StageResult[Any]] = {}
        value = initial_input

        def finish(**kwargs: Any) -> PipelineResult:
            return PipelineResult(
                outputs=outputs,
                stage_results=stage_results,
                duration_ms=(time.perf_counter() - started) * 1000,
                metrics=dict(context.metrics),
                **kwargs,
            )

        for stage_def in pipeline.stages:
            if context.is_cancelled():
                logger.warning(f"{pipeline.name}: cancelled before stage '{stage_def.id}'")
                return finish(success=False, failed_stage=stage_def.id, cancelled=True)

            if stage_def.pattern is ExecutionPattern.FAN_OUT:
                result = await self._run_fan_out(stage_def, value, context)
            else:
                result = await self._run_single(stage_def, value, context)
            stage_results[stage_def.id] = result

            if not result.success:
                logger.error(f"{pipeline.name}: stage '{stage_def.id}' failed: {result.error}")
                return finish(success=False, failed_stage=stage_def.id)

            outputs[stage_def.id] = result.output
            value = result.output

        logger.debug(f"{pipeline.name}: {len(pipeline.stages)} stages succeeded")
        return finish(success=True)

    async def _run_single(
        self, stage_def: StageDefinition, value: Any, context: PipelineContext
    ) -> StageResult[Any]:
        try:
            return await stage_def.stage.execute(value, context)
        except Exception as e:
            logger.exception(f"Stage '{stage_def.id}' raised")
            return failure_result(str(e), stage_name=stage_def.stage.name, exception=e)

    async def _run_fan_out(
        self, stage_def: StageDefinition, items: Any, context: PipelineContext
    ) -> StageResult[list[Any]]:
        """Execute the stage once per item and collect the outputs in item order.

        Non-critical: failed items are dropped and counted in the metadata.
        Critical: any failed item fails the stage, after every item settled.
        """
        stage_name = stage_def.stage.name
        if not isinstance(items, (list, tuple)):
            return failure_result(
                f"fan-out stage '{stage_def.id}' needs a list, got {type(items).__name__}",
                stage_name=stage_name,
            )

        limit = stage_def.max_concurrency
        gate = asyncio.Semaphore(limit) if limit else None

        async def run_one(item: Any) -> StageResult[Any]:
            if gate is None:
                return await stage_def.stage.execute(item, context)
            async with gate:
                return await stage_def.stage.execute(item, context)

        settled = await asyncio.gather(*(run_one(i) for i in items), return_exceptions=True)

        outputs: list[Any] = []
        errors: list[str] = []
        first_exception: BaseException | None = None
        for outcome in settled:
            if isinstance(outcome, BaseException):
                errors.append(str(outcome))
                first_exception = first_exception or outcome
            elif outcome.success:
                outputs.append(outcome.output)
            else:
                errors.append(outcome.error or "unknown error")
                first_exception = first_exception or outcome.exception

        counts = {"succeeded": len(outputs), "failed": len(errors)}
        logger.debug(f"Fan-out {stage_name}: {len(outputs)}/{len(items)} succeeded")

        if errors and stage_def.critical:
            return failure_result(
                "; ".join(errors),
                stage_name=stage_name,
                metadata=counts,
                exception=first_exception,
            )
        return success_result(outputs, stage_name=stage_name, metadata=counts)
