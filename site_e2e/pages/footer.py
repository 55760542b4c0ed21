"""Footer component object, shared by every page on the site"""

from typing import Dict, List, Optional

import httpx
from playwright.sync_api import Locator, Page

from ..config import SiteConfig
from ..links import find_broken_links
from .base_page import SETTLE_MS, BasePage

SCROLL_ANIMATION_MS = 500
PAGE_BOTTOM_SETTLE_MS = 1000
POST_CLICK_MS = 1000


class FooterSelectors:
    """Footer links; text variants cover the EN and JP footers"""
    FOOTER = 'footer'
    ALL_LINKS = 'footer a'
    PRIVACY_POLICY = 'a[href*="privacy"], a:has-text("Privacy"), a:has-text("プライバシー"), a:has-text("個人情報")'
    TERMS = 'a[href*="terms"], a:has-text("Terms"), a:has-text("利用規約")'
    COMPANY_INFO = 'footer a:has-text("Company"), footer a:has-text("会社"), footer a:has-text("企業情報")'
    CONTACT = 'footer a:has-text("Contact"), footer a:has-text("CONTACT"), footer a:has-text("お問い合わせ")'
    COOKIE_POLICY = 'footer a:has-text("Cookie"), footer a:has-text("COOKIE POLICY"), footer a:has-text("クッキー")'
    CODE_OF_CONDUCT = (
        'footer a:has-text("Code of Conduct"), footer a:has-text("CODE OF CONDUCT"), footer a:has-text("行動規範")'
    )
    HUMAN_RIGHTS_POLICY = (
        'footer a:has-text("Human Rights"), footer a:has-text("HUMAN RIGHTS POLICY"), footer a:has-text("人権")'
    )
    MEDIA_KIT = 'footer a:has-text("Media Kit"), footer a:has-text("MEDIA KIT"), footer a:has-text("メディアキット")'


class SocialSelectors:
    """Social links, matched by href and scoped to the footer"""
    LINKEDIN = 'footer a[href*="linkedin.com"]'
    TWITTER = 'footer a[href*="twitter.com"], footer a[href*="x.com"]'
    YOUTUBE = 'footer a[href*="youtube.com"]'
    FACEBOOK = 'footer a[href*="facebook.com"]'
    INSTAGRAM = 'footer a[href*="instagram.com"]'
    GITHUB = 'footer a[href*="github.com"]'


# Platform key -> selector, in the order the footer shows them
SOCIAL_PLATFORMS = {
    "linkedin": SocialSelectors.LINKEDIN,
    "twitter": SocialSelectors.TWITTER,
    "youtube": SocialSelectors.YOUTUBE,
    "facebook": SocialSelectors.FACEBOOK,
    "instagram": SocialSelectors.INSTAGRAM,
    "github": SocialSelectors.GITHUB,
}


class FooterComponent(BasePage):
    """Footer links, social links and footer-wide checks"""

    def __init__(self, page: Page, config: SiteConfig):
        super().__init__(page, config)

        self.footer = page.locator(FooterSelectors.FOOTER).first
        self.footer_links = page.locator(FooterSelectors.ALL_LINKS)

        self.privacy_policy_link = page.locator(FooterSelectors.PRIVACY_POLICY).first
        self.terms_link = page.locator(FooterSelectors.TERMS).first
        self.company_info_link = page.locator(FooterSelectors.COMPANY_INFO).first
        self.contact_link = page.locator(FooterSelectors.CONTACT).first
        self.cookie_policy_link = page.locator(FooterSelectors.COOKIE_POLICY).first
        self.code_of_conduct_link = page.locator(FooterSelectors.CODE_OF_CONDUCT).first
        self.human_rights_policy_link = page.locator(FooterSelectors.HUMAN_RIGHTS_POLICY).first
        self.media_kit_link = page.locator(FooterSelectors.MEDIA_KIT).first

        self.social_links = {
            platform: page.locator(selector).first
            for platform, selector in SOCIAL_PLATFORMS.items()
        }

    def scroll_to_footer(self):
        self.scroll_to_element(self.footer)
        self.wait(SCROLL_ANIMATION_MS)

    def is_footer_visible(self) -> bool:
        return self.is_visible(self.footer)

    def verify_footer_presence(self) -> bool:
        """Jump to the bottom of the page and check the footer rendered"""
        self.page.evaluate("() => window.scrollTo(0, document.body.scrollHeight)")
        self.wait(PAGE_BOTTOM_SETTLE_MS)
        return self.is_footer_visible()

    def _is_link_visible(self, locator: Locator) -> bool:
        self.scroll_to_footer()
        return self.is_visible(locator)

    def _click_same_tab(self, locator: Locator):
        """Click a footer link that navigates the current tab"""
        self.scroll_to_footer()
        self.dismiss_cookie_consent()
        self.wait(SETTLE_MS)
        locator.click(force=True)
        self.wait(POST_CLICK_MS)
        self.wait_for_page_load()

    def _open_new_tab(self, locator: Locator, description: str) -> Page:
        self.scroll_to_footer()
        self.dismiss_cookie_consent()
        self.wait(SETTLE_MS)
        return self.open_in_new_tab(locator, description)

    # -------------------------------------------------------------------------
    # Policy and company links
    # -------------------------------------------------------------------------

    def is_privacy_policy_link_visible(self) -> bool:
        return self._is_link_visible(self.privacy_policy_link)

    def click_privacy_policy_link(self):
        self.scroll_to_footer()
        self.click(self.privacy_policy_link)
        self.wait_for_page_load()

    def is_terms_link_visible(self) -> bool:
        return self._is_link_visible(self.terms_link)

    def click_terms_link(self):
        self.scroll_to_footer()
        self.click(self.terms_link)
        self.wait_for_page_load()

    def is_contact_link_visible(self) -> bool:
        return self._is_link_visible(self.contact_link)

    def click_contact_link(self):
        self._click_same_tab(self.contact_link)

    def is_cookie_policy_link_visible(self) -> bool:
        return self._is_link_visible(self.cookie_policy_link)

    def click_cookie_policy_link(self):
        self._click_same_tab(self.cookie_policy_link)

    def is_code_of_conduct_link_visible(self) -> bool:
        return self._is_link_visible(self.code_of_conduct_link)

    def click_code_of_conduct_link(self):
        self._click_same_tab(self.code_of_conduct_link)

    def is_human_rights_policy_link_visible(self) -> bool:
        return self._is_link_visible(self.human_rights_policy_link)

    def click_human_rights_policy_link(self):
        self._click_same_tab(self.human_rights_policy_link)

    def is_media_kit_link_visible(self) -> bool:
        return self._is_link_visible(self.media_kit_link)

    def open_media_kit(self) -> Page:
        """Media kit is a document page that opens in a new tab"""
        return self._open_new_tab(self.media_kit_link, "footer MEDIA KIT link")

    # -------------------------------------------------------------------------
    # Social links
    # -------------------------------------------------------------------------

    def is_social_link_visible(self, platform: str) -> bool:
        return self._is_link_visible(self.social_links[platform])

    def social_url(self, platform: str) -> Optional[str]:
        """href of a social link, None if the attribute is missing"""
        self.scroll_to_footer()
        return self.get_attribute(self.social_links[platform], "href")

    def open_social_link(self, platform: str) -> Page:
        """Click a social link and return the tab it opens"""
        return self._open_new_tab(self.social_links[platform], f"footer {platform} link")

    def social_media_links(self) -> Dict[str, bool]:
        """Visibility of every known platform, keyed by platform name"""
        self.scroll_to_footer()
        return {platform: self.is_social_link_visible(platform) for platform in SOCIAL_PLATFORMS}

    # -------------------------------------------------------------------------
    # Footer-wide checks
    # -------------------------------------------------------------------------

    def footer_link_count(self) -> int:
        self.scroll_to_footer()
        return self.element_count(self.footer_links)

    def footer_link_texts(self) -> List[str]:
        self.scroll_to_footer()
        return self.link_texts(self.footer_links)

    def footer_hrefs(self) -> List[Optional[str]]:
        self.scroll_to_footer()
        return [link.get_attribute("href") for link in self.footer_links.all()]

    def find_broken_links(self, client: Optional[httpx.Client] = None) -> List[str]:
        """Absolute footer links that answer 404"""
        return find_broken_links(self.footer_hrefs(), client=client)
