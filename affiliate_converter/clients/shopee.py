"""Shopee affiliate open API client (signed GraphQL)."""

import hashlib
import json
import logging
import time

import httpx

from ..config import ShopeeConfig
from ..models import ProductInfo

logger = logging.getLogger(__name__)


class ShopeeClient:
    """Client for the Shopee affiliate GraphQL API.

    Every request is signed with sha256(app_id + timestamp + payload + secret).
    Both operations return None on any failure instead of raising.
    """

    def __init__(self, config: ShopeeConfig, http_client: httpx.AsyncClient):
        self.config = config
        self.http_client = http_client

    def sign(self, payload: str, timestamp: int) -> str:
        """Hex sha256 signature for a serialized payload."""
        raw = f"{self.config.app_id}{timestamp}{payload}{self.config.app_secret}"
        return hashlib.sha256(raw.encode("utf-8")).hexdigest()

    def _get_headers(self, payload: str, timestamp: int) -> dict:
        signature = self.sign(payload, timestamp)
        return {
            "Content-Type": "application/json",
            "Authorization": (
                f"SHA256 Credential={self.config.app_id}, "
                f"Timestamp={timestamp}, Signature={signature}"
            ),
        }

    async def execute(self, query: str, label: str = "") -> dict | None:
        """POST a GraphQL query and return its `data` object, or None on failure."""
        timestamp = int(time.time())
        # Signed bytes must match the body byte for byte
        payload = json.dumps({"query": query}, separators=(",", ":"), ensure_ascii=False)

        try:
            response = await self.http_client.post(
                self.config.api_url,
                content=payload.encode("utf-8"),
                headers=self._get_headers(payload, timestamp),
                timeout=self.config.api_timeout,
            )
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Shopee {label or 'request'} failed: {e!r}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Shopee {label or 'request'}: unexpected response {data!r}")
            return None
        if data.get("errors"):
            logger.warning(f"Shopee {label or 'request'} error ({response.status_code}): {data['errors']}")
            return None
        return data.get("data") if isinstance(data.get("data"), dict) else None

    async def fetch_product_info(self, item_id: str | None) -> ProductInfo | None:
        """Look up name and image for an item. No request is made without an id."""
        if not item_id:
            return None

        query = f"query {{ productOfferV2(itemId: {item_id}) {{ nodes {{ productName imageUrl }} }} }}"
        data = await self.execute(query, label="productOfferV2")
        if data is None:
            return None

        try:
            node = data["productOfferV2"]["nodes"][0]
        except (KeyError, IndexError, TypeError):
            logger.info(f"No product offer for item {item_id}")
            return None

        if not isinstance(node, dict):
            return None
        return ProductInfo(name=node.get("productName") or "", image_url=node.get("imageUrl") or "")

    async def generate_short_link(self, url: str, sub_ids: list[str]) -> str | None:
        """Create an affiliate short link for `url` tagged with `sub_ids`."""
        formatted_ids = ",".join(json.dumps(sub_id, ensure_ascii=False) for sub_id in sub_ids)
        query = (
            "mutation { generateShortLink(input: { "
            f"originUrl: {json.dumps(url, ensure_ascii=False)}, subIds: [{formatted_ids}] "
            "}) { shortLink } }"
        )
        data = await self.execute(query, label="generateShortLink")
        if data is None:
            return None

        try:
            short_link = data["generateShortLink"]["shortLink"]
        except (KeyError, TypeError):
            logger.warning(f"Unexpected generateShortLink payload for {url}: {data!r}")
            return None
        return short_link if isinstance(short_link, str) and short_link else None
