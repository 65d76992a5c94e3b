"""Web-facing observers for plan progress events.

This module subscribes to the GLOBAL_EVENT_BUS for plan events and stores a
lightweight in-memory ring buffer that the coach page polls, so exercise
images appear one by one without reloading the page.

Design:
  * Each event stored with an auto-increment integer id (cursor) so clients
    can request only newer events (since=<last_id_seen>).
  * Leaf events carry the exercise key only, never the image itself; the page
    re-reads /api/plan to pick up new illustrations.
  * A MAX_EVENTS cap prevents unbounded memory growth.
  * A Lock guards the buffer; events are recorded from the enrichment task and
    read from request handlers.
"""
from __future__ import annotations
from threading import Lock
from typing import List, Dict, Any
from datetime import datetime, timezone

from .Event_Bus import (
    GLOBAL_EVENT_BUS, PLAN_GENERATED, PLAN_LEAF_ENRICHED, PLAN_LEAF_FAILED, PLAN_ENRICHMENT_DONE
)

_events: List[Dict[str, Any]] = []
_next_id = 1
_lock = Lock()
MAX_EVENTS = 300
_started = False


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    evt: Dict[str, Any] = {
        'type': event_name,
        'ts': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
    }
    payload = payload or {}
    if 'plan' in payload:
        evt['plan_id'] = payload['plan'].plan_id
    if 'event' in payload:
        leaf = payload['event']
        evt['plan_id'] = leaf.address.plan_id
        evt['key'] = leaf.address.key
    if 'report' in payload:
        evt.update(payload['report'].to_dict())
    with _lock:
        evt['id'] = _next_id
        _events.append(evt)
        _next_id += 1
        # Trim buffer
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in (PLAN_GENERATED, PLAN_LEAF_ENRICHED, PLAN_LEAF_FAILED, PLAN_ENRICHMENT_DONE):
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True


def current_cursor() -> int:
    """Id of the newest recorded event (0 when none); poll with since=<this>."""
    with _lock:
        return _events[-1]['id'] if _events else 0


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive).

    If since is None, returns the last N (up to MAX_EVENTS) events.
    Response includes next_cursor (largest id) so client can poll with since=next_cursor.
    """
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events', 'current_cursor']
