"""Startup lifecycle tracking.

Startup runs as a fixed sequence of stages (connect, then seed). Each stage
records its own outcome so that a failed connection and a failed seed are
distinguishable from the health endpoint instead of collapsing into one
log line.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class StageStatus(str, Enum):
    PENDING = "pending"
    OK = "ok"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class StageResult:
    status: StageStatus = StageStatus.PENDING
    error: str | None = None

    def to_dict(self) -> dict:
        return {"status": self.status.value, "error": self.error}


@dataclass
class StartupLifecycle:
    """Ordered record of startup stage outcomes.

    Usage::

        lifecycle = StartupLifecycle(stages=["connect", "seed"])
        lifecycle.mark_ok("connect")
        lifecycle.mark_failed("seed", "duplicate key")
        lifecycle.healthy  # False
    """

    stages: list[str] = field(default_factory=lambda: ["connect", "seed"])
    results: dict[str, StageResult] = field(default_factory=dict)

    def __post_init__(self):
        for name in self.stages:
            self.results.setdefault(name, StageResult())

    def _result(self, stage: str) -> StageResult:
        if stage not in self.results:
            raise KeyError(f"Unknown startup stage: {stage}")
        return self.results[stage]

    def mark_ok(self, stage: str) -> None:
        self._result(stage).status = StageStatus.OK

    def mark_failed(self, stage: str, error: str) -> None:
        result = self._result(stage)
        result.status = StageStatus.FAILED
        result.error = error
        logger.warning("Startup stage %r failed: %s", stage, error)

    def mark_skipped(self, stage: str, reason: str | None = None) -> None:
        result = self._result(stage)
        result.status = StageStatus.SKIPPED
        result.error = reason

    def status_of(self, stage: str) -> StageStatus:
        return self._result(stage).status

    @property
    def healthy(self) -> bool:
        return all(
            r.status in (StageStatus.OK, StageStatus.SKIPPED)
            for r in self.results.values()
        )

    def to_dict(self) -> dict:
        return {name: self.results[name].to_dict() for name in self.stages}
