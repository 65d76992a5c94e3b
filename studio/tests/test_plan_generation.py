import asyncio

import pytest

from studio.api.api_ai import generate_plan
from studio.domain.errors import GenerationSuperseded, MalformedResponse
from studio.infra.Plan_Store import PlanStore
from studio.tests.fakes import FakeBackend, plan_text

PROFILE = {
    "age": 35, "sex": "mujer", "weight_kg": 62, "height_cm": 165,
    "level": "intermedio", "goal": "ganar fuerza", "days_per_week": 3, "weeks": 1,
}


@pytest.mark.asyncio
async def test_slower_older_request_does_not_replace_newer_plan():
    store = PlanStore()
    slow = FakeBackend(text=plan_text(weeks=(1,)), text_delay=0.05)
    fast = FakeBackend(text=plan_text(weeks=(1, 2)))

    older, newer = await asyncio.gather(
        generate_plan(PROFILE, slow, store),
        generate_plan(PROFILE, fast, store),
        return_exceptions=True,
    )

    assert isinstance(older, GenerationSuperseded)
    plan, token = newer
    assert store.snapshot is plan
    assert store.is_current(token)
    assert [w.week for w in store.snapshot.weeks] == [1, 2]


@pytest.mark.asyncio
async def test_token_of_published_plan_is_current():
    store = PlanStore()
    plan, token = await generate_plan(PROFILE, FakeBackend(), store)
    assert store.snapshot is plan
    assert store.is_current(token)


@pytest.mark.asyncio
async def test_failed_generation_still_supersedes_previous_run():
    store = PlanStore()
    _, token = await generate_plan(PROFILE, FakeBackend(), store)
    with pytest.raises(MalformedResponse):
        await generate_plan(PROFILE, FakeBackend(text="no es json"), store)
    assert not store.is_current(token)
    assert store.snapshot is None
