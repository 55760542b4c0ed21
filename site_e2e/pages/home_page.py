"""Home page object: header navigation, hamburger menu and language switcher"""

from typing import List, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

from ..config import SiteConfig
from ..language import CHINESE, ENGLISH, JAPANESE, detect_language, is_homepage_url
from .base_page import BasePage

MENU_ANIMATION_MS = 500
LANGUAGE_SWITCH_MS = 1000
HOMEPAGE_CHECK_TIMEOUT_MS = 10000


class HeaderSelectors:
    """Header navigation; the site renders labels upper-case in EN, mixed case elsewhere"""
    LOGO = 'a[href="/"]'
    NAVIGATION = 'nav, header nav, [role="navigation"]'
    NAVIGATION_LINKS = 'nav a, header nav a'
    ABOUT_US = 'a:has-text("ABOUT US"), a:has-text("About Us")'
    OPEN_SOURCE = 'a:has-text("OPEN SOURCE"), a:has-text("Open Source")'
    PRODUCTS = 'a:has-text("OUR PRODUCTS"), a:has-text("Our Products")'
    SERVICES = 'a:has-text("SERVICES"), a:has-text("Services")'
    ALLIANCE = 'a:has-text("ALLIANCE"), a:has-text("Alliance")'
    TEAM = 'a:has-text("OUR TEAM"), a:has-text("Our Team")'
    CAREERS = 'a:has-text("CAREERS"), a:has-text("Careers")'
    MEDIA = 'a:has-text("MEDIA"), a:has-text("Media")'


class LanguageSelectors:
    """Hamburger menu (top right) and the language options inside it"""
    HAMBURGER = 'button[aria-label*="menu"], .hamburger, button:has(svg):has-text("")'
    JAPANESE = 'a:has-text("JP"), button:has-text("JP"), a:has-text("JA")'
    ENGLISH = 'a:has-text("EN"), button:has-text("EN")'
    CHINESE = 'a:has-text("CN"), button:has-text("CN"), a:has-text("ZH")'


class ContentSelectors:
    MAIN_HEADING = 'h1, [role="heading"][aria-level="1"], main h2'
    HERO = '[class*="hero"], [class*="banner"], main section'


class HomePage(BasePage):
    """Page object for the site root"""

    def __init__(self, page: Page, config: SiteConfig):
        super().__init__(page, config)

        # Header navigation
        self.logo = page.locator(HeaderSelectors.LOGO).first
        self.navigation_menu = page.locator(HeaderSelectors.NAVIGATION).first
        self.about_us_link = page.locator(HeaderSelectors.ABOUT_US).first
        self.open_source_link = page.locator(HeaderSelectors.OPEN_SOURCE).first
        self.products_link = page.locator(HeaderSelectors.PRODUCTS).first
        self.services_link = page.locator(HeaderSelectors.SERVICES).first
        self.alliance_link = page.locator(HeaderSelectors.ALLIANCE).first
        self.team_link = page.locator(HeaderSelectors.TEAM).first
        self.careers_link = page.locator(HeaderSelectors.CAREERS).first
        self.media_link = page.locator(HeaderSelectors.MEDIA).first

        # Language switcher
        self.hamburger_menu = page.locator(LanguageSelectors.HAMBURGER).first
        self.japanese_option = page.locator(LanguageSelectors.JAPANESE).first
        self.english_option = page.locator(LanguageSelectors.ENGLISH).first
        self.chinese_option = page.locator(LanguageSelectors.CHINESE).first

        # Main content
        self.main_heading = page.locator(ContentSelectors.MAIN_HEADING).first
        self.hero_section = page.locator(ContentSelectors.HERO).first

    def navigate_to_homepage(self):
        self.goto("/")
        self.wait_for_page_load()

    def is_home_page_loaded(self) -> bool:
        """True once the DOM is ready and the title names the company"""
        try:
            self.page.wait_for_load_state("domcontentloaded", timeout=HOMEPAGE_CHECK_TIMEOUT_MS)
        except PlaywrightError:
            return False
        title = self.title()
        return "tier" in title.lower() or "ティア" in title

    # -------------------------------------------------------------------------
    # Visibility
    # -------------------------------------------------------------------------

    def is_navigation_menu_visible(self) -> bool:
        return self.is_visible(self.navigation_menu)

    def is_about_us_link_visible(self) -> bool:
        return self.is_visible(self.about_us_link)

    def is_open_source_link_visible(self) -> bool:
        return self.is_visible(self.open_source_link)

    def is_products_link_visible(self) -> bool:
        return self.is_visible(self.products_link)

    def is_services_link_visible(self) -> bool:
        return self.is_visible(self.services_link)

    def is_alliance_link_visible(self) -> bool:
        return self.is_visible(self.alliance_link)

    def is_team_link_visible(self) -> bool:
        return self.is_visible(self.team_link)

    def is_careers_link_visible(self) -> bool:
        return self.is_visible(self.careers_link)

    def is_media_link_visible(self) -> bool:
        return self.is_visible(self.media_link)

    def is_main_heading_visible(self) -> bool:
        return self.is_visible(self.main_heading)

    def is_hero_section_visible(self) -> bool:
        return self.is_visible(self.hero_section)

    def is_hamburger_menu_visible(self) -> bool:
        return self.is_visible(self.hamburger_menu)

    def is_language_switcher_visible(self) -> bool:
        # The switcher lives inside the hamburger menu
        return self.is_hamburger_menu_visible()

    # -------------------------------------------------------------------------
    # Same-tab navigation
    # -------------------------------------------------------------------------

    def _click_and_wait(self, locator):
        self.click(locator)
        self.wait_for_page_load()

    def click_about_us_link(self):
        self._click_and_wait(self.about_us_link)

    # About Us doubles as the company page
    click_company_link = click_about_us_link

    def click_open_source_link(self):
        self._click_and_wait(self.open_source_link)

    def click_products_link(self):
        self._click_and_wait(self.products_link)

    def click_alliance_link(self):
        self._click_and_wait(self.alliance_link)

    def click_team_link(self):
        self._click_and_wait(self.team_link)

    def click_media_link(self):
        self._click_and_wait(self.media_link)

    # Media doubles as the news page
    click_news_link = click_media_link

    # -------------------------------------------------------------------------
    # New-tab navigation
    # -------------------------------------------------------------------------

    def open_careers_in_new_tab(self) -> Page:
        """Careers lives on its own subdomain and opens in a new tab"""
        return self.open_in_new_tab(self.careers_link, "header CAREERS link")

    def open_services_in_new_tab(self) -> Page:
        return self.open_in_new_tab(self.services_link, "header SERVICES link")

    def is_on_careers_page(self, url: Optional[str] = None) -> bool:
        url = (url or self.current_url).lower()
        return "career" in url or "recruit" in url or "採用" in url

    # -------------------------------------------------------------------------
    # Hamburger menu and languages
    # -------------------------------------------------------------------------

    def click_hamburger_menu(self):
        self.click(self.hamburger_menu)

    def open_hamburger_menu(self) -> bool:
        """Open the menu if this viewport has one; False when it does not"""
        if not self.is_hamburger_menu_visible():
            return False
        self.click_hamburger_menu()
        self.wait(MENU_ANIMATION_MS)
        return True

    def _switch_language(self, option) -> bool:
        self.open_hamburger_menu()
        if not self.is_visible(option):
            return False
        self.click(option)
        self.wait(LANGUAGE_SWITCH_MS)
        self.wait_for_page_load()
        return True

    def switch_to_english(self) -> bool:
        return self._switch_language(self.english_option)

    def switch_to_japanese(self) -> bool:
        return self._switch_language(self.japanese_option)

    def switch_to_chinese(self) -> bool:
        return self._switch_language(self.chinese_option)

    def current_language(self) -> str:
        """'en', 'ja' or 'cn' based on the current URL"""
        return detect_language(self.current_url)

    def is_english(self) -> bool:
        return self.current_language() == ENGLISH

    def is_japanese(self) -> bool:
        return self.current_language() == JAPANESE

    def is_chinese(self) -> bool:
        return self.current_language() == CHINESE

    # -------------------------------------------------------------------------
    # Content
    # -------------------------------------------------------------------------

    def navigation_link_texts(self) -> List[str]:
        return self.link_texts(self.page.locator(HeaderSelectors.NAVIGATION_LINKS))

    def main_heading_text(self) -> str:
        return self.get_text(self.main_heading)

    def is_on_homepage(self) -> bool:
        return is_homepage_url(self.current_url)

    def click_logo_and_verify_homepage(self) -> bool:
        self._click_and_wait(self.logo)
        return self.is_on_homepage()
