"""In-memory holder of the current Plan snapshot (one browser session).

Every generation request takes a new token with begin_generation(), which
also clears the previous plan. A parsed plan is only published while its
token is still the latest one, so a slower, older request can never replace
the plan of a newer one, and enrichment runs holding an old token stop.
The routes touching the store are all ``async def``, so reads and writes
happen on the event loop thread and no lock is used.
"""
from __future__ import annotations
import logging
from typing import Optional

from studio.domain.Exercise import LeafAddress
from studio.domain.Plan import Plan
from studio.logic.enrichment.merge import merge_artifact

logger = logging.getLogger(__name__)


class PlanStore:
    def __init__(self):
        self._plan: Optional[Plan] = None
        self._token = 0

    @property
    def snapshot(self) -> Optional[Plan]:
        return self._plan

    @property
    def token(self) -> int:
        return self._token

    def begin_generation(self) -> int:
        """Supersede whatever is current (plan and enrichment run); returns the new token."""
        self._token += 1
        self._plan = None
        return self._token

    def publish_plan(self, plan: Plan, token: int) -> bool:
        """Make ``plan`` the current snapshot unless a newer generation has started."""
        if not self.is_current(token):
            logger.info("Dropping plan %s from superseded generation %s", plan.plan_id, token)
            return False
        self._plan = plan
        logger.info("Published plan %s (generation %s)", plan.plan_id, token)
        return True

    def is_current(self, token: int) -> bool:
        return token == self._token

    def merge(self, address: LeafAddress, artifact: str) -> Optional[Plan]:
        merged = merge_artifact(self._plan, address, artifact)
        if merged is self._plan:
            logger.debug("Merge for %s left the snapshot unchanged", address)
        self._plan = merged
        return merged


# A singleton-like instance shared by the web layer
PLAN_STORE = PlanStore()

__all__ = ["PlanStore", "PLAN_STORE"]
