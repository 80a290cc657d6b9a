"""
Headless Chromium rendering: HTML string in, PNG bytes out.

One browser per process is launched lazily and re-created whenever it is
found disconnected; every render gets its own page, which is always closed.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from playwright.async_api import Browser, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from ..config import CHROMIUM_EXECUTABLE_PATH, RENDER_TIMEOUT_MS

logger = logging.getLogger(__name__)

BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-features=VizDisplayCompositor",
    "--run-all-compositor-stages-before-draw",
    "--disable-background-timer-throttling",
    "--disable-renderer-backgrounding",
    "--disable-backgrounding-occluded-windows",
    "--disable-ipc-flooding-protection",
]


class RenderError(Exception):
    """Rendering failed or timed out"""


@dataclass(frozen=True)
class Viewport:
    width: int
    height: int
    device_scale_factor: float = 1


# POST /generate-image: landscape at 2x
HIGH_DPI_VIEWPORT = Viewport(width=1200, height=800, device_scale_factor=2)
# Daily agenda job: portrait
AGENDA_VIEWPORT = Viewport(width=800, height=1200)


class BrowserManager:
    """Process-wide Chromium instance shared by all renders"""

    def __init__(self, executable_path: Optional[str] = CHROMIUM_EXECUTABLE_PATH):
        self.executable_path = executable_path
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._browser is not None and self._browser.is_connected()

    async def get_browser(self) -> Browser:
        async with self._lock:
            if self.is_connected:
                return self._browser

            logger.info("🚀 Launching new Chromium instance...")
            if self._playwright is None:
                self._playwright = await async_playwright().start()

            self._browser = await self._playwright.chromium.launch(
                headless=True,
                args=BROWSER_ARGS,
                executable_path=self.executable_path,
            )
            logger.info("✅ Chromium instance launched")
            return self._browser

    async def html_to_image(
        self,
        html_content: str,
        viewport: Viewport = HIGH_DPI_VIEWPORT,
        settle_delay_ms: int = 0,
        timeout_ms: int = RENDER_TIMEOUT_MS,
    ) -> bytes:
        """
        Render HTML to a full-page PNG.

        Raises:
            RenderError: On any browser failure, including timeouts
        """
        page = None
        try:
            browser = await self.get_browser()
            page = await browser.new_page(
                viewport={"width": viewport.width, "height": viewport.height},
                device_scale_factor=viewport.device_scale_factor,
            )
            await page.set_content(html_content, wait_until="networkidle", timeout=timeout_ms)

            if settle_delay_ms > 0:
                # Give fonts and styles time to settle
                await page.wait_for_timeout(settle_delay_ms)

            image_bytes = await page.screenshot(type="png", full_page=True, timeout=timeout_ms)
            logger.info(f"✅ Screenshot generated ({len(image_bytes)} bytes)")
            return image_bytes

        except PlaywrightError as e:
            logger.error(f"❌ Error generating image: {e}")
            raise RenderError(f"Image generation error: {e}") from e
        except Exception as e:
            logger.error(f"❌ Unexpected error generating image: {type(e).__name__}: {e}")
            raise RenderError(f"Image generation error: {e}") from e
        finally:
            if page is not None:
                try:
                    await page.close()
                except Exception as e:
                    logger.debug(f"Page close failed (non-critical): {e}")

    async def close(self) -> None:
        logger.info("🧹 Closing browser resources...")
        async with self._lock:
            if self._browser is not None:
                try:
                    await self._browser.close()
                    logger.info("✅ Browser closed")
                except Exception as e:
                    logger.error(f"❌ Error closing browser: {e}")
                finally:
                    self._browser = None

            if self._playwright is not None:
                try:
                    await self._playwright.stop()
                except Exception as e:
                    logger.error(f"❌ Error stopping Playwright: {e}")
                finally:
                    self._playwright = None


browser_manager = BrowserManager()
