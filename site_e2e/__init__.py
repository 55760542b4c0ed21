"""End-to-end checks for the public corporate website"""

from .config import SiteConfig, configure_logging
from .tabs import NewTabError, open_in_new_tab

__all__ = ["SiteConfig", "configure_logging", "NewTabError", "open_in_new_tab"]
