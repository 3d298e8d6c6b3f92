"""Per-item results collected while a pipeline runs.

Each schema or message a stage touches ends up as exactly one
:class:`ItemResult`.  Fatal problems are not recorded here; they are raised
and abort the pipeline.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from src.shared.errors import AppError

logger = logging.getLogger(__name__)


class ItemOutcome(str, Enum):
    """What happened to a single schema or message in a stage."""
    OK = "ok"
    SKIPPED = "skipped"
    IGNORED = "ignored"


def _empty_counts() -> dict[str, int]:
    return {outcome.value: 0 for outcome in ItemOutcome}


@dataclass
class ItemResult:
    """Outcome of one stage for one document entry."""
    stage: str
    item: str
    outcome: ItemOutcome = ItemOutcome.OK
    reason: str = ""


@dataclass
class PipelineReport:
    """Aggregated outcome of a ``convert`` or ``for-import`` run."""
    command: str
    results: list[ItemResult] = field(default_factory=list)
    stages: list[str] = field(default_factory=list)

    def start_stage(self, stage: str) -> None:
        if stage not in self.stages:
            self.stages.append(stage)

    def ok(self, stage: str, item: str) -> None:
        self.results.append(ItemResult(stage=stage, item=item))

    def ignore(self, stage: str, item: str, reason: str) -> None:
        self.results.append(
            ItemResult(stage=stage, item=item, outcome=ItemOutcome.IGNORED, reason=reason)
        )

    def skip(
        self, stage: str, item: str, reason: str | AppError, warn: bool = True
    ) -> None:
        """Record a skipped item and, unless already reported, emit a warning."""
        reason = str(reason)
        if warn:
            logger.warning("%s Skipping...", reason)
        self.results.append(
            ItemResult(stage=stage, item=item, outcome=ItemOutcome.SKIPPED, reason=reason)
        )

    @property
    def skipped(self) -> list[ItemResult]:
        return [r for r in self.results if r.outcome is ItemOutcome.SKIPPED]

    def for_stage(self, stage: str) -> list[ItemResult]:
        return [r for r in self.results if r.stage == stage]

    def counts(self) -> dict[str, dict[str, int]]:
        """Return ``{stage: {outcome: count}}`` in stage order."""
        summary: dict[str, dict[str, int]] = {
            stage: _empty_counts() for stage in self.stages
        }
        for result in self.results:
            bucket = summary.setdefault(result.stage, _empty_counts())
            bucket[result.outcome.value] += 1
        return summary

    def is_skipped(self, stage: str, item: str) -> bool:
        return any(
            r.stage == stage and r.item == item and r.outcome is ItemOutcome.SKIPPED
            for r in self.results
        )
