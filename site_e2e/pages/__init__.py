"""Page objects for the site under test"""

from .base_page import BasePage
from .footer import FooterComponent
from .home_page import HomePage

__all__ = ["BasePage", "FooterComponent", "HomePage"]
