"""
Outbound webhook delivery for daily agenda notifications.

Delivery is fire-and-log: failures are logged and reported as False, never raised.
"""

import json
import logging
from typing import Optional

import httpx

from ..config import AGENDA_WEBHOOK_TIMEOUT, AGENDA_WEBHOOK_URL

logger = logging.getLogger(__name__)


async def send_webhook(
    payload: dict,
    url: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> bool:
    """
    POST payload as JSON.

    Args:
        payload: JSON-serializable body
        url: Target URL (defaults to AGENDA_WEBHOOK_URL)
        client: Optional shared client; one is created per call otherwise

    Returns:
        True on a 2xx response, False otherwise
    """
    url = url or AGENDA_WEBHOOK_URL
    if not url:
        logger.warning("⚠️ AGENDA_WEBHOOK_URL not configured - skipping webhook")
        return False

    logger.info(f"📤 Sending webhook to: {url}")
    try:
        if client is not None:
            response = await client.post(url, json=payload, timeout=AGENDA_WEBHOOK_TIMEOUT)
        else:
            async with httpx.AsyncClient(timeout=AGENDA_WEBHOOK_TIMEOUT) as http_client:
                response = await http_client.post(url, json=payload)
    except httpx.HTTPError as e:
        logger.error(f"❌ Webhook request error: {type(e).__name__}: {e}")
        return False

    if not response.is_success:
        logger.error(f"⚠️ Webhook failed: {response.status_code} {response.reason_phrase}")
        logger.info(f"📋 Payload was: {json.dumps(payload, indent=2, default=str)}")
        return False

    logger.info(f"✅ Webhook delivered ({response.status_code})")
    return True
