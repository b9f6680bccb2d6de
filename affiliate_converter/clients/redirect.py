"""Redirect resolver for Shopee short links (shp.ee, s.shopee.vn)."""

import asyncio
import logging
from urllib.parse import urlsplit

import httpx

from ..config import BROWSER_USER_AGENT, REDIRECT_TIMEOUT, SHORTENER_HOSTS

logger = logging.getLogger(__name__)


def is_short_link(url: str) -> bool:
    """Return True if the URL points at a known Shopee shortener host."""
    try:
        host = (urlsplit(url).hostname or "").lower()
    except ValueError:
        return False
    if host.startswith("www."):
        host = host[4:]
    return host in SHORTENER_HOSTS


class RedirectResolver:
    """Follows shortener redirects to the final product URL.

    The http client should be created with the hop limit it wants enforced,
    e.g. ``httpx.AsyncClient(max_redirects=REDIRECT_MAX_HOPS)``.
    """

    def __init__(self, http_client: httpx.AsyncClient, timeout: float = REDIRECT_TIMEOUT):
        self.http_client = http_client
        self.timeout = timeout

    async def resolve(self, url: str) -> str:
        """Return the final URL, or the input if it is not a short link or the lookup fails."""
        if not is_short_link(url):
            return url

        # self.timeout bounds the whole redirect chain, not each hop
        try:
            response = await asyncio.wait_for(
                self.http_client.get(
                    url,
                    follow_redirects=True,
                    timeout=self.timeout,
                    headers={"User-Agent": BROWSER_USER_AGENT},
                ),
                timeout=self.timeout,
            )
        except (httpx.HTTPError, httpx.InvalidURL, asyncio.TimeoutError) as e:
            logger.warning(f"Could not resolve short link {url}: {e!r}")
            return url

        return str(response.url)
