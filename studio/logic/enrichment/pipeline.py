"""Progressive enrichment of a Plan: one illustration per exercise.

Exercises are visited depth-first, left to right (weeks, then days, then
exercises, each in list order). Requests are issued strictly one at a time;
the next request is not sent until the previous result has been merged into
the store. A failed leaf is logged and skipped, it never stops the walk.

Each run carries the generation token handed out by the store when the plan
was published. Before every request the token is checked, and the run stops
as soon as a newer plan has been published.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional

from studio.domain.Exercise import LeafAddress
from studio.domain.Plan import Plan
from studio.domain.errors import LeafEnrichmentFailure
from studio.infra.Plan_Store import PlanStore

logger = logging.getLogger(__name__)

Enricher = Callable[[str], Awaitable[Optional[str]]]


@dataclass(frozen=True)
class LeafEvent:
    """State update emitted once per visited exercise."""
    address: LeafAddress
    artifact: Optional[str] = None
    failure: Optional[LeafEnrichmentFailure] = None
    snapshot: Optional[Plan] = None

    @property
    def succeeded(self) -> bool:
        return self.failure is None


@dataclass
class EnrichmentReport:
    plan_id: str
    visited: List[str] = field(default_factory=list)
    succeeded: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    superseded: bool = False

    def to_dict(self):
        return {
            "plan_id": self.plan_id,
            "visited": len(self.visited),
            "succeeded": len(self.succeeded),
            "failed": len(self.failed),
            "superseded": self.superseded,
        }


class EnrichmentPipeline:
    def __init__(self, enrich: Enricher, store: PlanStore,
                 on_event: Optional[Callable[[LeafEvent], None]] = None):
        self._enrich = enrich
        self._store = store
        self._on_event = on_event

    async def _fetch(self, address: LeafAddress, query: str) -> str:
        try:
            artifact = await self._enrich(query)
        except Exception as e:
            raise LeafEnrichmentFailure(address, LeafEnrichmentFailure.BACKEND, str(e)) from e
        if not artifact:
            raise LeafEnrichmentFailure(address, LeafEnrichmentFailure.EMPTY)
        return artifact

    def _emit(self, event: LeafEvent) -> None:
        if self._on_event is None:
            return
        try:
            self._on_event(event)
        except Exception:
            logger.exception("Enrichment listener failed for %s", event.address)

    async def run(self, plan: Plan, token: int) -> EnrichmentReport:
        report = EnrichmentReport(plan_id=plan.plan_id)
        for address, exercise in plan.leaves():
            if not self._store.is_current(token):
                report.superseded = True
                logger.info("Plan %s superseded; stopping enrichment after %s leaves",
                            plan.plan_id, len(report.visited))
                break
            report.visited.append(address.key)
            try:
                artifact = await self._fetch(address, exercise.image_query)
            except LeafEnrichmentFailure as failure:
                logger.warning("Image for %s skipped (%s) %s", address, failure.reason, failure.detail)
                report.failed.append(address.key)
                self._emit(LeafEvent(address, failure=failure, snapshot=self._store.snapshot))
                continue
            snapshot = self._store.merge(address, artifact)
            report.succeeded.append(address.key)
            self._emit(LeafEvent(address, artifact=artifact, snapshot=snapshot))
        logger.info("Enrichment of plan %s finished: %s ok, %s failed",
                    plan.plan_id, len(report.succeeded), len(report.failed))
        return report


__all__ = ["EnrichmentPipeline", "EnrichmentReport", "LeafEvent", "Enricher"]
