import logging
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Body, Depends, Query
from fastapi.responses import JSONResponse, Response

from studio.domain.Plan import Plan
from studio.domain.errors import GenerationSuperseded, StudioError
from studio.events.event_helpers import publish_enrichment_done, publish_leaf_event, publish_plan_generated
from studio.events.web_observers import current_cursor, get_events
from studio.infra.Backend_Client import BackendClient
from studio.infra.Plan_Store import PLAN_STORE, PlanStore
from studio.infra.pdf_utils import generate_pdf_for_plan
from studio.logic.batch.generator import generate_batch
from studio.logic.enrichment.pipeline import EnrichmentPipeline, EnrichmentReport
from studio.logic.parsing.plan_parser import parse_plan
from studio.logic.prompts.builder import build_ad_prompt, build_exercise_image_prompt, build_plan_prompt
from studio.logic.rendering.view import plan_view
from studio.utilities.config import StudioConfig
from studio.utilities.constants import AD_FORMATS
from studio.utilities.validators import AdRequestInput, ProfileInput, validate_input

logger = logging.getLogger(__name__)


# === Dependencies ===
@lru_cache(maxsize=1)
def get_backend_client() -> BackendClient:
    """Return the process-wide backend client built from the environment."""
    return BackendClient(StudioConfig.from_env())


def get_plan_store() -> PlanStore:
    return PLAN_STORE


def _error_response(e: StudioError) -> JSONResponse:
    return JSONResponse(status_code=e.status_code, content=e.to_dict())


# === Coach flow ===
async def generate_plan(profile_data: dict, backend, store: PlanStore) -> tuple[Plan, int]:
    """Validate the profile, request the plan text, parse it and publish the snapshot.

    The generation token is taken before the backend call; if another request
    starts meanwhile, this plan is dropped and GenerationSuperseded is raised.
    """
    profile = validate_input(ProfileInput, profile_data)
    token = store.begin_generation()
    raw_text = await backend.generate_text(build_plan_prompt(profile))
    try:
        plan = parse_plan(raw_text)
    except StudioError:
        logger.error("Unparseable plan response (%s chars): %r", len(raw_text), raw_text[:500])
        raise
    if not store.publish_plan(plan, token):
        raise GenerationSuperseded(f"generation {token} superseded")
    publish_plan_generated(plan)
    return plan, token


async def enrich_plan(plan: Plan, token: int, backend, store: PlanStore) -> EnrichmentReport:
    """Fill in one illustration per exercise, one request at a time."""
    async def enrich(query: str) -> Optional[str]:
        return await backend.generate_image(build_exercise_image_prompt(query))

    pipeline = EnrichmentPipeline(enrich, store, on_event=publish_leaf_event)
    report = await pipeline.run(plan, token)
    publish_enrichment_done(report)
    return report


# === Ad studio flow ===
async def generate_ads(request_data: dict, backend) -> list:
    request = validate_input(AdRequestInput, request_data)
    base_prompt = build_ad_prompt(request)
    logger.info("Generating %s ad formats for %r (%s)", len(AD_FORMATS), request.title, request.style)
    return await generate_batch(backend, base_prompt, AD_FORMATS, title=request.title)


# === FastAPI Endpoints ===
router = APIRouter()


@router.post("/api/plan")
async def api_generate_plan(
    background_tasks: BackgroundTasks,
    profile: dict = Body(...),
    backend=Depends(get_backend_client),
    store: PlanStore = Depends(get_plan_store),
):
    # the page polls /api/plan/events from here on
    cursor = current_cursor()
    try:
        plan, token = await generate_plan(profile, backend, store)
    except StudioError as e:
        logger.warning("Plan generation failed: %s", e.message)
        return _error_response(e)
    background_tasks.add_task(enrich_plan, plan, token, backend, store)
    return {**plan_view(plan), "cursor": cursor}


@router.get("/api/plan")
async def api_current_plan(store: PlanStore = Depends(get_plan_store)):
    return plan_view(store.snapshot)


@router.get("/api/plan/events")
async def api_plan_events(since: Optional[int] = Query(default=None)):
    return get_events(since)


@router.get("/api/plan/pdf")
async def api_plan_pdf(store: PlanStore = Depends(get_plan_store)):
    plan = store.snapshot
    if plan is None:
        return JSONResponse(status_code=404, content={"error": "Todavía no hay ningún plan generado."})
    pdf_bytes = generate_pdf_for_plan(plan)
    headers = {"Content-Disposition": 'attachment; filename="plan_entrenamiento.pdf"'}
    return Response(content=pdf_bytes, media_type="application/pdf", headers=headers)


@router.post("/api/ads")
async def api_generate_ads(request: dict = Body(...), backend=Depends(get_backend_client)):
    try:
        images = await generate_ads(request, backend)
    except StudioError as e:
        logger.warning("Ad batch failed: %s", e.message)
        return _error_response(e)
    return {"images": [image.to_dict() for image in images]}
