import asyncio

import pytest

from studio.domain.errors import LeafEnrichmentFailure
from studio.infra.Plan_Store import PlanStore
from studio.logic.enrichment.pipeline import EnrichmentPipeline
from studio.logic.parsing.plan_parser import parse_plan
from studio.tests.fakes import FakeBackend, plan_text


def _setup(**backend_kwargs):
    store = PlanStore()
    plan = parse_plan(plan_text(weeks=(1, 4), days=2, exercises=2), plan_id="run")
    token = store.begin_generation()
    store.publish_plan(plan, token)
    return store, plan, token, FakeBackend(**backend_kwargs)


@pytest.mark.asyncio
async def test_visits_every_leaf_depth_first():
    store, plan, token, backend = _setup()
    events = []
    report = await EnrichmentPipeline(backend.generate_image, store, events.append).run(plan, token)

    expected = [ex.image_query for week in plan.weeks for day in week.days for ex in day.exercises]
    assert backend.image_queries == expected
    assert report.visited == [address.key for address, _ in plan.leaves()]
    assert len(report.succeeded) == 8 and not report.failed
    assert [e.address.key for e in events] == report.visited
    assert all(not ex.pending for _, ex in store.snapshot.leaves())


@pytest.mark.asyncio
async def test_failures_are_skipped_and_leave_snapshot_untouched():
    # "exercise 1 1" matches both exercises of week 1 day 1; "4 0 1" one leaf of week 4
    store, plan, token, backend = _setup(fail_on=("exercise 1 1",), raise_on=("exercise 4 0 1",))
    events = []
    report = await EnrichmentPipeline(backend.generate_image, store, events.append).run(plan, token)

    assert len(backend.image_queries) == 8
    assert report.failed == ["w1-d1-e0", "w1-d1-e1", "w4-d0-e1"]
    assert len(report.succeeded) == 5

    failures = [e for e in events if not e.succeeded]
    assert [f.failure.reason for f in failures] == [
        LeafEnrichmentFailure.EMPTY, LeafEnrichmentFailure.EMPTY, LeafEnrichmentFailure.BACKEND,
    ]
    # a failed leaf does not change the snapshot
    for event in failures:
        index = events.index(event)
        before = events[index - 1].snapshot if index else plan
        assert event.snapshot == before

    final = {address.key: ex for address, ex in store.snapshot.leaves()}
    assert final["w1-d1-e0"].pending and final["w4-d0-e1"].pending
    assert not final["w4-d1-e1"].pending


@pytest.mark.asyncio
async def test_requests_are_sequential():
    store, plan, token, _ = _setup()
    in_flight = 0
    peak = 0

    async def enrich(query):
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.001)
        in_flight -= 1
        return "data:image/jpeg;base64,x"

    await EnrichmentPipeline(enrich, store).run(plan, token)
    assert peak == 1


@pytest.mark.asyncio
async def test_superseded_run_stops_early():
    store, plan, token, _ = _setup()
    newer = parse_plan(plan_text(), plan_id="newer")
    calls = []

    async def enrich(query):
        calls.append(query)
        if len(calls) == 2:
            store.publish_plan(newer, store.begin_generation())
        return "data:image/jpeg;base64,x"

    report = await EnrichmentPipeline(enrich, store).run(plan, token)
    assert report.superseded
    assert len(calls) == 2
    # the in-flight result belonged to the old plan and was not merged into the new one
    assert store.snapshot is newer
    assert all(ex.pending for _, ex in newer.leaves())


@pytest.mark.asyncio
async def test_listener_errors_do_not_stop_the_walk():
    store, plan, token, backend = _setup()

    def broken(event):
        raise RuntimeError("render failed")

    report = await EnrichmentPipeline(backend.generate_image, store, broken).run(plan, token)
    assert len(report.visited) == 8
