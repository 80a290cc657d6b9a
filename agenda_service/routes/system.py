import resource
import time
from datetime import datetime, timezone

from fastapi import APIRouter

from ..config import SERVICE_DESCRIPTION, SERVICE_NAME, SERVICE_VERSION
from ..schemas import HealthResponse
from ..services.renderer import browser_manager

router = APIRouter(tags=["System"])

STARTED_AT = time.monotonic()


def memory_usage() -> dict:
    usage = resource.getrusage(resource.RUSAGE_SELF)
    # ru_maxrss is reported in kilobytes on Linux
    return {"maxRssKb": usage.ru_maxrss}


@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        uptime=round(time.monotonic() - STARTED_AT, 3),
        memory=memory_usage(),
        browserConnected=browser_manager.is_connected,
    )


@router.get("/")
async def service_info():
    return {
        "name": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "description": SERVICE_DESCRIPTION,
        "endpoints": {
            "POST /generate-image": "Generate an image from HTML",
            "POST /agenda/preview": "Render daily agenda HTML",
            "POST /jobs/daily-agenda": "Queue the daily agenda notification run",
            "GET /jobs/status/{job_id}": "Status of a queued job",
            "GET /health": "Service status",
            "GET /": "Service information",
        },
    }
