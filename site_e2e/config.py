"""Run configuration for the site suite, read from environment variables"""

import logging
import os
from typing import Dict, Optional, Tuple

# =============================================================================
# DEFAULTS - every knob the suite exposes, with its fallback value
# =============================================================================

DEFAULT_BASE_URL = "https://tier4.jp"
SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")
DEFAULT_VIEWPORT = {"width": 1920, "height": 1080}
DEFAULT_LOCALE = "en-US"
DEFAULT_TIMEZONE = "Asia/Tokyo"

# Playwright defaults for actions (click, fill) and navigations
DEFAULT_ACTION_TIMEOUT_MS = 10 * 1000
DEFAULT_NAVIGATION_TIMEOUT_MS = 30 * 1000

# New-tab retries; WebKit on CI is the slow one
DEFAULT_NEW_TAB_ATTEMPTS = 3
CI_NEW_TAB_ATTEMPTS = 5
DEFAULT_NEW_TAB_TIMEOUT_MS = 30 * 1000

TRUTHY = ("1", "true", "yes", "on")


def _flag(value: Optional[str], default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in TRUTHY


def _positive_int(environ: Dict[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")
    return value


def _browsers(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return SUPPORTED_BROWSERS
    names = tuple(name.strip().lower() for name in raw.split(",") if name.strip())
    unknown = [name for name in names if name not in SUPPORTED_BROWSERS]
    if unknown or not names:
        raise ValueError(
            f"SITE_BROWSERS must list engines from {', '.join(SUPPORTED_BROWSERS)}, got {raw!r}"
        )
    # Keep order, drop repeats
    return tuple(dict.fromkeys(names))


class SiteConfig:
    """Settings for one test session.

    Built once per session by the test fixtures and handed to every page
    object explicitly, so two sessions (or two xdist workers) never share a
    mutable base URL.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        browsers: Tuple[str, ...] = SUPPORTED_BROWSERS,
        headless: bool = True,
        locale: str = DEFAULT_LOCALE,
        timezone_id: str = DEFAULT_TIMEZONE,
        viewport: Optional[Dict[str, int]] = None,
        action_timeout_ms: int = DEFAULT_ACTION_TIMEOUT_MS,
        navigation_timeout_ms: int = DEFAULT_NAVIGATION_TIMEOUT_MS,
        new_tab_attempts: int = DEFAULT_NEW_TAB_ATTEMPTS,
        new_tab_timeout_ms: int = DEFAULT_NEW_TAB_TIMEOUT_MS,
        is_ci: bool = False,
    ):
        self.base_url = base_url.rstrip("/")
        self.browsers = tuple(browsers)
        self.headless = headless
        self.locale = locale
        self.timezone_id = timezone_id
        self.viewport = dict(viewport or DEFAULT_VIEWPORT)
        self.action_timeout_ms = action_timeout_ms
        self.navigation_timeout_ms = navigation_timeout_ms
        self.new_tab_attempts = new_tab_attempts
        self.new_tab_timeout_ms = new_tab_timeout_ms
        self.is_ci = is_ci

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "SiteConfig":
        """Build a config from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            SiteConfig with defaults filled in for anything unset

        Raises:
            ValueError: If a variable is set to something unusable
        """
        if environ is None:
            environ = os.environ

        is_ci = _flag(environ.get("CI"), False)
        default_attempts = CI_NEW_TAB_ATTEMPTS if is_ci else DEFAULT_NEW_TAB_ATTEMPTS

        return cls(
            base_url=environ.get("SITE_BASE_URL") or DEFAULT_BASE_URL,
            browsers=_browsers(environ.get("SITE_BROWSERS")),
            headless=_flag(environ.get("HEADLESS"), True),
            locale=environ.get("SITE_LOCALE") or DEFAULT_LOCALE,
            timezone_id=environ.get("SITE_TIMEZONE") or DEFAULT_TIMEZONE,
            action_timeout_ms=_positive_int(environ, "ACTION_TIMEOUT_MS", DEFAULT_ACTION_TIMEOUT_MS),
            navigation_timeout_ms=_positive_int(environ, "NAVIGATION_TIMEOUT_MS", DEFAULT_NAVIGATION_TIMEOUT_MS),
            new_tab_attempts=_positive_int(environ, "NEW_TAB_ATTEMPTS", default_attempts),
            new_tab_timeout_ms=_positive_int(environ, "NEW_TAB_TIMEOUT_MS", DEFAULT_NEW_TAB_TIMEOUT_MS),
            is_ci=is_ci,
        )

    def url_for(self, path: str = "") -> str:
        """Absolute URL for a site path; absolute URLs pass through untouched"""
        if path.startswith("http"):
            return path
        if path and not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    def context_options(self) -> dict:
        """Keyword arguments for browser.new_context()"""
        return {
            "viewport": dict(self.viewport),
            "locale": self.locale,
            "timezone_id": self.timezone_id,
        }

    def __repr__(self):
        return (
            f"SiteConfig(base_url={self.base_url!r}, browsers={self.browsers!r}, "
            f"headless={self.headless}, is_ci={self.is_ci})"
        )


def configure_logging(environ: Optional[Dict[str, str]] = None) -> int:
    """Set the root log level from LOG_LEVEL (default INFO) and return it"""
    if environ is None:
        environ = os.environ
    log_level = getattr(logging, environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    logging.basicConfig(level=log_level)
    return log_level
