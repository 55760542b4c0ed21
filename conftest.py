"""
Root conftest.py for the site suite: markers and logging.
Browser and site fixtures live in tests/ui/conftest.py.
"""

from site_e2e.config import configure_logging


def pytest_configure(config):
    """Register custom markers and set the log level from LOG_LEVEL"""
    config.addinivalue_line(
        "markers",
        "needs_site: Tests that drive a real browser against the live website"
    )
    config.addinivalue_line(
        "markers",
        "new_tab: Tests that open links in a new tab (slow on WebKit)"
    )
    configure_logging()
