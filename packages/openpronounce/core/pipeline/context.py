"""Per-run context handed to every stage."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

from openpronounce.core.config.models import AppConfig
from openpronounce.core.content.fetcher import ContentFetcher


@dataclass
class PipelineContext:
    """Dependencies and run-scoped bookkeeping shared by the stages.

    All stages run on one event loop, so appending warnings and bumping
    metrics needs no lock.

    Attributes:
        fetcher: Content source reads
        app_config: Application configuration
        warnings: Notes about directories that were skipped
        metrics: Counters reported on the PipelineResult
        cancel_token: Checked by the executor before each stage
    """

    fetcher: ContentFetcher
    app_config: AppConfig = field(default_factory=AppConfig)
    warnings: list[str] = field(default_factory=list)
    metrics: dict[str, Any] = field(default_factory=dict)
    cancel_token: asyncio.Event | None = None

    def is_cancelled(self) -> bool:
        return self.cancel_token is not None and self.cancel_token.is_set()

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def add_metric(self, key: str, value: Any) -> None:
        self.metrics[key] = value

    def increment_metric(self, key: str, delta: int = 1) -> None:
        self.metrics[key] = self.metrics.get(key, 0) + delta
