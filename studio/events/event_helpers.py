"""Event helper utilities.

Quick import:
    from studio.events.event_helpers import (
        publish_plan_generated, publish_leaf_event, publish_enrichment_done
    )
"""
from __future__ import annotations
from typing import Any
from .Event_Bus import (
    publish,
    PLAN_GENERATED, PLAN_LEAF_ENRICHED, PLAN_LEAF_FAILED, PLAN_ENRICHMENT_DONE,
)

__all__ = ['publish_plan_generated', 'publish_leaf_event', 'publish_enrichment_done']


def publish_plan_generated(plan: Any):
    """Publish a plan.generated event for a freshly parsed plan (no images yet)."""
    publish(PLAN_GENERATED, {'plan': plan})


def publish_leaf_event(event: Any):
    """Publish plan.leaf_enriched or plan.leaf_failed depending on the outcome."""
    publish(PLAN_LEAF_ENRICHED if event.succeeded else PLAN_LEAF_FAILED, {'event': event})


def publish_enrichment_done(report: Any):
    publish(PLAN_ENRICHMENT_DONE, {'report': report})
