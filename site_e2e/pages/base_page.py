"""Common page-object helpers shared by every page and component"""

import logging
import re
from typing import List, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator, Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from ..config import SiteConfig
from ..tabs import open_in_new_tab

logger = logging.getLogger(__name__)

# =============================================================================
# TIMEOUTS
# =============================================================================

VISIBLE_CHECK_TIMEOUT_MS = 5000
ELEMENT_WAIT_TIMEOUT_MS = 10000
URL_WAIT_TIMEOUT_MS = 10000
CONSENT_CHECK_TIMEOUT_MS = 2000

# Pause after dismissing an overlay or before retrying a click
SETTLE_MS = 500

# Where failed live tests leave their screenshots
FAILURE_SCREENSHOT_DIR = "test-results/screenshots"


class ConsentSelectors:
    """Cookie consent buttons seen on the site (Cookiebot and the site's own banner)"""
    ACCEPT = (
        'button:has-text("Accept"), button:has-text("同意"), '
        '#CybotCookiebotDialogBodyLevelButtonLevelOptinAllowAll, '
        '[id*="cookie"] button:has-text("OK")'
    )


class BasePage:
    """Base page object: navigation, waits and element helpers"""

    def __init__(self, page: Page, config: SiteConfig):
        self.page = page
        self.config = config

    @property
    def base_url(self) -> str:
        return self.config.base_url

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def goto(self, path: str = ""):
        """Navigate to a site path (or an absolute URL) and wait for the DOM"""
        self.page.goto(self.config.url_for(path), wait_until="domcontentloaded")

    def wait_for_page_load(self):
        """Wait until the network goes quiet"""
        self.page.wait_for_load_state("networkidle")

    def reload(self):
        self.page.reload(wait_until="domcontentloaded")

    def go_back(self):
        self.page.go_back(wait_until="domcontentloaded")

    @property
    def current_url(self) -> str:
        return self.page.url

    def title(self) -> str:
        return self.page.title()

    def url_contains(self, text: str) -> bool:
        return text in self.current_url

    def wait_for_url_contains(self, text: str, timeout: int = URL_WAIT_TIMEOUT_MS):
        self.page.wait_for_url(lambda url: text in url, timeout=timeout)

    # -------------------------------------------------------------------------
    # Element helpers
    # -------------------------------------------------------------------------

    def click(self, locator: Locator):
        """Click once the element is visible; force past sticky headers"""
        locator.wait_for(state="visible")
        locator.click(force=True)

    def fill(self, locator: Locator, text: str):
        locator.wait_for(state="visible")
        locator.fill(text)

    def hover(self, locator: Locator):
        locator.wait_for(state="visible")
        locator.hover()

    def get_text(self, locator: Locator) -> str:
        """Trimmed text content, empty string when the element has none"""
        locator.wait_for(state="visible")
        text = locator.text_content()
        return (text or "").strip()

    def is_visible(self, locator: Locator, timeout: int = VISIBLE_CHECK_TIMEOUT_MS) -> bool:
        """Wait up to timeout for the element to show; False instead of raising"""
        try:
            locator.wait_for(state="visible", timeout=timeout)
            return True
        except PlaywrightTimeoutError:
            return False

    def is_enabled(self, locator: Locator) -> bool:
        return locator.is_enabled()

    def wait_for_element(self, locator: Locator, timeout: int = ELEMENT_WAIT_TIMEOUT_MS):
        locator.wait_for(state="visible", timeout=timeout)

    def scroll_to_element(self, locator: Locator):
        locator.scroll_into_view_if_needed()

    def get_attribute(self, locator: Locator, attribute: str) -> Optional[str]:
        locator.wait_for(state="attached")
        return locator.get_attribute(attribute)

    def element_count(self, locator: Locator) -> int:
        return locator.count()

    def link_texts(self, locator: Locator) -> List[str]:
        """Non-empty texts of every element the locator matches"""
        texts = []
        for link in locator.all():
            text = (link.text_content() or "").strip()
            if text:
                texts.append(text)
        return texts

    def press_key(self, key: str):
        self.page.keyboard.press(key)

    def wait(self, milliseconds: int):
        self.page.wait_for_timeout(milliseconds)

    def take_screenshot(self, name: str, directory: str = "screenshots") -> str:
        path = f"{directory}/{name}.png"
        self.page.screenshot(path=path, full_page=True)
        return path

    def capture_failure(self, test_name: str, directory: str = FAILURE_SCREENSHOT_DIR) -> Optional[str]:
        """Screenshot named after a failed test; None if the page can no longer be captured"""
        name = re.sub(r"[^\w.-]+", "_", test_name)
        try:
            return self.take_screenshot(name, directory)
        except PlaywrightError as e:
            logger.warning(f"Could not capture failure screenshot for {test_name}: {e}")
            return None

    def collect_console_errors(self) -> List[str]:
        """Start recording console errors; the returned list fills up as they arrive"""
        errors = []

        def on_console(msg):
            if msg.type == "error":
                errors.append(msg.text)

        self.page.on("console", on_console)
        return errors

    # -------------------------------------------------------------------------
    # Overlays and new tabs
    # -------------------------------------------------------------------------

    def dismiss_cookie_consent(self) -> bool:
        """Click the consent banner away if it is showing.

        Safe to call any number of times: no banner means nothing to do.

        Returns:
            True if a banner was dismissed
        """
        accept = self.page.locator(ConsentSelectors.ACCEPT).first
        try:
            accept.wait_for(state="visible", timeout=CONSENT_CHECK_TIMEOUT_MS)
        except PlaywrightTimeoutError:
            return False

        try:
            accept.click(force=True)
        except PlaywrightError as e:
            # Banner animated away between the check and the click
            logger.debug(f"Consent banner vanished before click: {e}")
            return False
        self.wait(SETTLE_MS)
        return True

    def prepare_for_click(self, locator: Locator):
        """Bring the element back on screen and clear anything covering it"""
        self.scroll_to_element(locator)
        self.dismiss_cookie_consent()
        self.wait(SETTLE_MS)

    def open_in_new_tab(self, locator: Locator, description: str) -> Page:
        """Click a link that opens a new tab and return the loaded tab.

        Retries with backoff (see site_e2e.tabs). The caller closes the tab.
        """
        return open_in_new_tab(
            self.page,
            lambda: self.click(locator),
            description=description,
            recover=lambda: self.prepare_for_click(locator),
            max_attempts=self.config.new_tab_attempts,
            tab_open_timeout_ms=self.config.new_tab_timeout_ms,
            load_timeout_ms=self.config.new_tab_timeout_ms,
        )
