"""Simple Event Bus / Observer implementation for plan generation progress.

Event names used so far:
  plan.generated        -> payload {"plan": Plan}
  plan.leaf_enriched    -> payload {"event": LeafEvent}
  plan.leaf_failed      -> payload {"event": LeafEvent}
  plan.enrichment_done  -> payload {"report": EnrichmentReport}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
PLAN_GENERATED = "plan.generated"
PLAN_LEAF_ENRICHED = "plan.leaf_enriched"
PLAN_LEAF_FAILED = "plan.leaf_failed"
PLAN_ENRICHMENT_DONE = "plan.enrichment_done"

Listener = Callable[[str, Any], None]


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Listener]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Listener):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Listener):
		if callback in self._subscribers.get(event_name, []):
			self._subscribers[event_name].remove(callback)

	def publish(self, event_name: str, payload: Any):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


def publish(event_name: str, payload: Any = None) -> None:
	"""Publish an event on the global bus (sugar function)."""
	GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'publish', 'Listener',
	'PLAN_GENERATED', 'PLAN_LEAF_ENRICHED', 'PLAN_LEAF_FAILED', 'PLAN_ENRICHMENT_DONE'
]
