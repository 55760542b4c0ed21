"""Footer presence, policy links and social links (TC003)"""

import logging
import re

import pytest

import test_constants as constants
from site_e2e.links import make_client
from test_helpers import url_matches_any

pytestmark = pytest.mark.needs_site

logger = logging.getLogger(__name__)


class TestFooterValidation:
    """Footer renders and carries the expected links"""

    def test_footer_visible_on_homepage(self, footer):
        """TC003-01"""
        footer.scroll_to_footer()
        assert footer.is_footer_visible()

    def test_footer_has_multiple_links(self, footer):
        """TC003-02"""
        count = footer.footer_link_count()
        logger.info(f"Footer contains {count} links")
        assert count >= 3

    def test_privacy_policy_link(self, footer, home_page):
        """TC003-03 / TC003-10: privacy link leads to a privacy page"""
        if not footer.is_privacy_policy_link_visible():
            pytest.skip("No Privacy Policy link in footer")

        footer.click_privacy_policy_link()

        assert home_page.is_home_page_loaded()
        assert re.search(r"privacy|policy|プライバシー|ポリシー|個人情報", home_page.current_url.lower()), \
            f"Privacy link landed on {home_page.current_url}"

    def test_social_media_links_present(self, footer):
        """TC003-04: at least one platform is linked"""
        social = footer.social_media_links()
        logger.info(f"Social media links: {social}")
        assert any(social.values()), "No social media links in footer"

    def test_link_texts_not_empty(self, footer):
        """TC003-08"""
        texts = footer.footer_link_texts()
        assert texts
        assert all(text.strip() for text in texts)

    def test_footer_on_other_pages(self, footer, home_page):
        """TC003-09: homepage, company page and news page all have it"""
        assert footer.verify_footer_presence(), "Footer missing on homepage"

        home_page.click_company_link()
        assert footer.verify_footer_presence(), "Footer missing on company page"

        home_page.navigate_to_homepage()
        home_page.click_news_link()
        assert footer.verify_footer_presence(), "Footer missing on news page"

    def test_no_broken_footer_links(self, footer):
        """Absolute footer links must not 404"""
        with make_client() as client:
            broken = footer.find_broken_links(client=client)
        assert broken == [], f"Broken footer links: {broken}"


class TestFooterEdgeCases:
    """Keyboard, reload, viewport and language variations"""

    def test_footer_reachable_with_keyboard(self, footer):
        """TC003-11"""
        footer.press_key("Home")
        footer.press_key("End")
        footer.scroll_to_footer()
        assert footer.is_footer_visible()

    def test_footer_after_reload(self, footer, home_page):
        """TC003-12"""
        footer.scroll_to_footer()
        home_page.reload()
        home_page.wait_for_page_load()

        footer.scroll_to_footer()
        assert footer.is_footer_visible()
        assert footer.footer_link_count() > 0

    def test_footer_on_mobile_viewport(self, footer, home_page, page):
        """TC003-13"""
        page.set_viewport_size(constants.MOBILE_VIEWPORT)
        home_page.reload()
        home_page.wait_for_page_load()

        footer.scroll_to_footer()
        assert footer.is_footer_visible()

    def test_footer_structure_across_languages(self, footer, home_page):
        """TC003-15: link count differs by at most a couple of entries"""
        japanese_count = footer.footer_link_count()

        home_page.switch_to_english()
        english_count = footer.footer_link_count()

        logger.info(f"Footer links - Japanese: {japanese_count}, English: {english_count}")
        assert abs(japanese_count - english_count) <= constants.FOOTER_LANGUAGE_LINK_TOLERANCE

    @pytest.mark.parametrize("name, expected", [
        ("contact", r"contact"),                       # TC003-16
        ("cookie_policy", r"cookie"),                  # TC003-17
        ("code_of_conduct", r"conduct"),               # TC003-18
        ("human_rights_policy", r"human.*rights|rights.*policy"),  # TC003-19
    ])
    def test_policy_link_navigates(self, footer, home_page, name, expected):
        """Policy links in the footer navigate the current tab"""
        assert getattr(footer, f"is_{name}_link_visible")(), f"{name} link not visible"

        getattr(footer, f"click_{name}_link")()

        url = home_page.current_url.lower()
        assert re.search(expected, url), f"{name} link navigated to {url}"

    @pytest.mark.new_tab
    def test_media_kit_opens_new_tab(self, footer, home_page):
        """TC003-20: always the English document page"""
        assert footer.is_media_kit_link_visible()

        new_page = footer.open_media_kit()
        try:
            url = new_page.url
            assert constants.MEDIA_KIT_PATH in url.lower()
            for marker in constants.MEDIA_KIT_QUERY_MARKERS:
                assert marker in url, f"{marker} missing from {url}"
            assert "/en/" in url
            assert constants.SITE_HOST in home_page.current_url
        finally:
            new_page.close()


class TestSocialLinks:
    """Each social link points at its platform and opens in a new tab"""

    @pytest.mark.parametrize("platform", list(constants.SOCIAL_HOSTS))
    def test_social_link_href(self, footer, platform):
        """TC003-05..07, TC003-14, TC003-21"""
        if not footer.is_social_link_visible(platform):
            pytest.skip(f"No {platform} link in footer")

        href = footer.social_url(platform)
        assert href, f"{platform} link has no href"
        assert url_matches_any(href, constants.SOCIAL_HOSTS[platform]), f"{platform} href is {href}"

    def test_github_link_points_to_autoware(self, footer):
        """TC003-26 (href part)"""
        if not footer.is_social_link_visible("github"):
            pytest.skip("No GitHub link in footer")
        assert constants.GITHUB_ORG in footer.social_url("github").lower()

    @pytest.mark.new_tab
    @pytest.mark.parametrize("platform", list(constants.SOCIAL_HOSTS))
    def test_social_link_opens_new_tab(self, footer, home_page, platform):
        """TC003-05, TC003-22..26: new tab lands on the platform, source tab stays"""
        if not footer.is_social_link_visible(platform):
            pytest.skip(f"No {platform} link in footer")

        new_page = footer.open_social_link(platform)
        try:
            assert url_matches_any(new_page.url.lower(), constants.SOCIAL_HOSTS[platform]), \
                f"{platform} opened {new_page.url}"
            assert constants.SITE_HOST in home_page.current_url
        finally:
            new_page.close()
