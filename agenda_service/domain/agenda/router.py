"""Agenda router - markup preview for the daily agenda layout"""

import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse

from . import render_agenda_html
from .schemas import AgendaRenderRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/agenda", tags=["Agenda"])


@router.post("/preview", response_class=HTMLResponse)
async def preview_agenda(data: AgendaRenderRequest):
    """Return the agenda HTML exactly as it would be rasterized, without rendering or uploading"""
    try:
        html = render_agenda_html(data.organization, data.membersWithAppointments, data.date)
    except ValueError as e:
        # Malformed HH:MM values
        logger.warning(f"⚠️ Agenda preview rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e)) from e
    return HTMLResponse(content=html)
