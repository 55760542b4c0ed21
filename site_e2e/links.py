"""HTTP checks for links scraped off the site"""

import logging
from typing import Iterable, List, Optional

import httpx

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (compatible; site-e2e link checker)"
LINK_CHECK_TIMEOUT_SECONDS = 15.0


def make_client(timeout: float = LINK_CHECK_TIMEOUT_SECONDS, **kwargs) -> httpx.Client:
    """httpx client set up the way the link checks expect (redirects followed)"""
    return httpx.Client(
        timeout=timeout,
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
        **kwargs,
    )


def find_broken_links(hrefs: Iterable[Optional[str]], client: Optional[httpx.Client] = None) -> List[str]:
    """
    Return the absolute hrefs that answer 404.

    Relative, mailto: and tel: links are ignored. Links that cannot be fetched
    at all (DNS, TLS, bot walls closing the socket) are logged and skipped -
    only a definite 404 counts as broken.

    Args:
        hrefs: href attribute values, None allowed
        client: httpx client to reuse (one is created and closed otherwise)

    Returns:
        Broken hrefs in first-seen order
    """
    owns_client = client is None
    if owns_client:
        client = make_client()

    broken = []
    seen = set()
    try:
        for href in hrefs:
            if not href or not href.startswith("http") or href in seen:
                continue
            seen.add(href)
            try:
                response = client.get(href)
            except httpx.HTTPError as e:
                logger.info(f"Could not check link {href}: {e}")
                continue
            if response.status_code == 404:
                logger.warning(f"Broken link: {href}")
                broken.append(href)
    finally:
        if owns_client:
            client.close()

    return broken
