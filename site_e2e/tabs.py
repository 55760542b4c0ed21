"""Open-in-new-tab actions with tenacity-based retries and linear backoff

Links that open a new tab (social links, the media kit, careers) are flaky on
slow engines: the popup event sometimes never fires, or the new tab never gets
past its first paint before the timeout. Every such click goes through
open_in_new_tab(), which re-clicks a bounded number of times and only then
fails the test.
"""

import logging
from typing import Callable, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page
from tenacity import (
    RetryError,
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_incrementing,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_TAB_OPEN_TIMEOUT_MS = 30 * 1000
DEFAULT_LOAD_TIMEOUT_MS = 30 * 1000
BASE_DELAY_SECONDS = 1.0

# Readiness state a new tab has to reach before it is handed back
READY_STATE = "domcontentloaded"


class NewTabError(Exception):
    """A new-tab action failed on every attempt"""

    def __init__(self, description: str, attempts: int, last_error: BaseException):
        super().__init__(
            f"Could not complete new-tab action '{description}' after {attempts} attempts: {last_error}"
        )
        self.description = description
        self.attempts = attempts
        self.last_error = last_error


def _open_once(page: Page, trigger: Callable[[], None], tab_open_timeout_ms: int, load_timeout_ms: int) -> Page:
    """Single attempt: listen for the popup, click, then wait for it to load"""
    # expect_page registers before trigger() runs, so a popup that opens
    # while the click is still in flight is not missed
    with page.context.expect_page(timeout=tab_open_timeout_ms) as new_page_info:
        trigger()
    new_page = new_page_info.value

    try:
        new_page.wait_for_load_state(READY_STATE, timeout=load_timeout_ms)
    except PlaywrightError:
        # Half-loaded tab is ours until we return it
        new_page.close()
        raise
    return new_page


def _close_stray_tabs(page: Page, known_tabs) -> None:
    """Close popups that showed up after an earlier attempt had already timed out"""
    for tab in page.context.pages:
        if tab in known_tabs:
            continue
        logger.info(f"Closing stray tab {tab.url}")
        try:
            tab.close()
        except PlaywrightError as e:
            logger.warning(f"Could not close stray tab {tab.url}: {e}")


def open_in_new_tab(
    page: Page,
    trigger: Callable[[], None],
    description: str = "new-tab action",
    recover: Optional[Callable[[], None]] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    tab_open_timeout_ms: int = DEFAULT_TAB_OPEN_TIMEOUT_MS,
    load_timeout_ms: int = DEFAULT_LOAD_TIMEOUT_MS,
    base_delay: float = BASE_DELAY_SECONDS,
    sleep: Optional[Callable[[float], None]] = None,
) -> Page:
    """
    Run an action that should open a new tab and return the loaded tab.

    Attempt k that fails with a Playwright error is followed by a pause of
    k * base_delay seconds, then recover() (scroll back, dismiss overlays),
    then attempt k + 1. Attempts never overlap. A tab that opens after its
    attempt already timed out is closed before the next attempt (or before
    NewTabError is raised), so it can never be handed back by mistake.

    Args:
        page: Page whose browsing context the new tab will open in
        trigger: Action that causes the tab to open (usually a click)
        description: Name of the action, used in logs and the final error
        recover: Called before every attempt except the first
        max_attempts: Total attempts, at least 1
        tab_open_timeout_ms: How long each attempt waits for the popup event
        load_timeout_ms: How long the new tab gets to reach domcontentloaded
        base_delay: Backoff unit in seconds (delays are 1x, 2x, 3x ...)
        sleep: Pause function taking seconds (defaults to page.wait_for_timeout)

    Returns:
        The new tab; the caller owns it and must close it

    Raises:
        NewTabError: If every attempt failed
        ValueError: If max_attempts < 1
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    # Tabs already open before the first click are never ours to close
    known_tabs = list(page.context.pages)

    if sleep is None:
        def sleep(seconds: float) -> None:
            page.wait_for_timeout(seconds * 1000)

    def before_attempt(retry_state) -> None:
        if retry_state.attempt_number == 1:
            return
        _close_stray_tabs(page, known_tabs)
        if recover is None:
            return
        logger.info(f"Recovering before attempt {retry_state.attempt_number}/{max_attempts} of {description}")
        try:
            recover()
        except PlaywrightError as e:
            # The next attempt decides whether this mattered
            logger.warning(f"Recovery before retrying {description} failed: {e}")

    retrying = Retrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_incrementing(start=base_delay, increment=base_delay),
        retry=retry_if_exception_type(PlaywrightError),
        before=before_attempt,
        before_sleep=before_sleep_log(logger, logging.WARNING),
        sleep=sleep,
    )

    try:
        new_page = retrying(_open_once, page, trigger, tab_open_timeout_ms, load_timeout_ms)
    except RetryError as e:
        last_error = e.last_attempt.exception()
        _close_stray_tabs(page, known_tabs)
        logger.error(f"Giving up on {description} after {e.last_attempt.attempt_number} attempts")
        raise NewTabError(description, e.last_attempt.attempt_number, last_error) from last_error

    logger.debug(f"{description} opened {new_page.url}")
    return new_page
