from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from datetime import datetime
import logging

from studio.api.api_ai import router as ai_router
from studio.events.web_observers import start as start_event_observers
from studio.utilities.config import STATIC_DIR, TEMPLATES_DIR
from studio.utilities.constants import AD_FORMATS, AD_STYLES, DEFAULT_AD_STYLE, EXPERIENCE_LEVELS

# Logging
logger = logging.getLogger("studio_app")

# Initialize FastAPI app
app = FastAPI(title="Coach & Ad Studio")

# Include routers
app.include_router(ai_router)

# Static files
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

# Templates
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for progress polling when the app starts."""
    start_event_observers()
    logger.info("Web observers for plan events started")


def _ts() -> int:
    """Cache-busting timestamp for static assets."""
    return int(datetime.now().timestamp())


# -------------------- UI PAGES --------------------
@app.get("/", response_class=HTMLResponse)
def coach_page(request: Request):
    return templates.TemplateResponse(request, "coach.html", {
        "levels": EXPERIENCE_LEVELS,
        "ts": _ts(),
    })


@app.get("/ads", response_class=HTMLResponse)
def ads_page(request: Request):
    return templates.TemplateResponse(request, "ads.html", {
        "styles": AD_STYLES,
        "default_style": DEFAULT_AD_STYLE,
        "formats": AD_FORMATS,
        "ts": _ts(),
    })
