"""
Daily Agenda Notifications - one-off run
Runs a single trigger cycle without the ARQ worker: python run_agenda_job.py
"""

import asyncio
import json
import logging
import sys

from agenda_service.database import SessionLocal
from agenda_service.domain.agenda.service import AgendaNotificationService
from agenda_service.services.renderer import BrowserManager

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


async def run_once() -> dict:
    browser = BrowserManager()
    db = SessionLocal()
    try:
        return await AgendaNotificationService(db, renderer=browser).run()
    finally:
        db.close()
        await browser.close()


if __name__ == "__main__":
    logger.info("🚀 Starting daily agenda notification run...")
    try:
        summary = asyncio.run(run_once())
        print(json.dumps(summary, indent=2, default=str))
    except KeyboardInterrupt:
        logger.info("👋 Run stopped by user")
    except Exception as e:
        logger.error(f"❌ Daily agenda run crashed: {e}")
        sys.exit(1)
