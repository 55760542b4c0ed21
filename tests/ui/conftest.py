"""Shared Playwright fixtures for the live-site suites

Each test MODULE gets its own browser per engine (chromium, firefox, webkit by
default; narrow with SITE_BROWSERS), tests within a module share it. Every
test gets a fresh context, so cookies and consent state never leak between
tests.

Site dependency:
- Tests are marked with @pytest.mark.needs_site
- Target comes from SITE_BASE_URL (default https://tier4.jp)
- If the site cannot be reached the suite is skipped, not failed
"""

import logging
import os

import pytest
from playwright.sync_api import sync_playwright
from tenacity import RetryError

from site_e2e.config import SiteConfig
from site_e2e.pages import BasePage, FooterComponent, HomePage
from test_helpers import navigate_with_retry, wait_for_site_ready

logger = logging.getLogger(__name__)


def pytest_generate_tests(metafunc):
    """Run every browser-backed test once per configured engine"""
    if "browser_name" in metafunc.fixturenames:
        config = SiteConfig.from_env()
        metafunc.parametrize("browser_name", config.browsers, scope="module")


@pytest.fixture(scope="session")
def site_config():
    """Session settings read from the environment"""
    return SiteConfig.from_env()


@pytest.fixture(scope="session")
def site_url(site_config):
    """Base URL of the site, once it is known to answer

    Environment variables:
    - SITE_OFFLINE: Set to 'true' to skip every live-site test (sandboxed runners)
    """
    if os.environ.get("SITE_OFFLINE", "false").lower() == "true":
        pytest.skip("SITE_OFFLINE=true - live website tests disabled")

    try:
        wait_for_site_ready(site_config.base_url)
    except RetryError:
        pytest.skip(f"Site {site_config.base_url} is not reachable")
    return site_config.base_url


@pytest.fixture(scope="module")  # One browser per test file and engine
def browser(browser_name, site_config, site_url):
    """Launch the requested engine for this module (after the site answered)"""
    with sync_playwright() as p:
        browser = getattr(p, browser_name).launch(headless=site_config.headless)
        yield browser
        browser.close()


@pytest.fixture(scope="function")  # Each test gets its own context
def context(browser, site_config):
    """Fresh browsing context with the suite's locale, timezone and timeouts"""
    context = browser.new_context(**site_config.context_options())
    context.set_default_timeout(site_config.action_timeout_ms)
    context.set_default_navigation_timeout(site_config.navigation_timeout_ms)
    yield context
    context.close()


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Keep each phase's report on the test item so fixtures can see failures"""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


@pytest.fixture(scope="function")
def page(request, context, site_config):
    """New tab in the test's context; screenshotted if the test fails"""
    page = context.new_page()
    yield page

    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed:
        path = BasePage(page, site_config).capture_failure(request.node.name)
        if path:
            logger.info(f"Failure screenshot for {request.node.nodeid}: {path}")


@pytest.fixture(scope="function")
def home_page(page, site_config):
    """Home page object, already navigated to the site root"""
    home = HomePage(page, site_config)
    # Cold CDN caches can time out the first navigation
    navigate_with_retry(page, site_config.url_for("/"))
    home.wait_for_page_load()
    return home


@pytest.fixture(scope="function")
def footer(home_page, page, site_config):
    """Footer of whatever page home_page is on (starts at the site root)"""
    return FooterComponent(page, site_config)
