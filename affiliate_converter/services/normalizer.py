"""URL normalizer - rewrite Shopee links into a canonical, tracking-free form.

Links are classified on their base URL (query string removed) by an ordered
list of rules; the first rule whose predicate matches rewrites the link:

    search        /search pages keep an allow-list of query parameters
    shop_product  shopee.vn/<shop-slug>/<shopId>/<itemId> -> /product/<shopId>/<itemId>
    standard      /product/, /m/ and bare shop roots lose their query string
    generic       anything else has known tracking parameters cut off
"""

import re
from dataclasses import dataclass
from typing import Callable
from urllib.parse import parse_qsl, urlencode, urlsplit

from ..utils import split_base

SEARCH_ALLOWED_PARAMS = ("keyword", "shop", "evcode", "signature", "promotionId", "mmp_pid")
TRACKING_MARKERS = ("uls_trackid=", "utm_source=", "mmp_pid=")

SHOP_PRODUCT_PATTERN = re.compile(r"shopee\.vn/([^/]+)/(\d+)/(\d+)")


@dataclass(frozen=True)
class NormalizeRule:
    """Predicate over (url, base) and the rewrite applied when it matches."""

    name: str
    applies: Callable[[str, str], bool]
    rewrite: Callable[[str, str], str]


def _clean_search(url: str, base: str) -> str:
    try:
        query = urlsplit(url).query
    except ValueError:
        return base
    kept: list[tuple[str, str]] = []
    seen: set[str] = set()
    for key, value in parse_qsl(query, keep_blank_values=True):
        if key in SEARCH_ALLOWED_PARAMS and key not in seen:
            kept.append((key, value))
            seen.add(key)
    return f"{base}?{urlencode(kept)}" if kept else base


def _to_product_path(url: str, base: str) -> str:
    m = SHOP_PRODUCT_PATTERN.search(base)
    return f"https://shopee.vn/product/{m.group(2)}/{m.group(3)}"


def _is_standard(url: str, base: str) -> bool:
    # https://shopee.vn/<shop> splits into 4 parts
    return "/m/" in base or "/product/" in base or len(base.split("/")) == 4


def _strip_tracking(url: str, base: str) -> str:
    cleaned = url
    for marker in TRACKING_MARKERS:
        if marker in cleaned:
            cleaned = cleaned.split(marker, 1)[0]
    return cleaned.rstrip("?&")


NORMALIZE_RULES = [
    NormalizeRule("search", lambda url, base: "/search" in base, _clean_search),
    NormalizeRule(
        "shop_product",
        lambda url, base: SHOP_PRODUCT_PATTERN.search(base) is not None,
        _to_product_path,
    ),
    NormalizeRule("standard", _is_standard, lambda url, base: base),
    NormalizeRule("generic", lambda url, base: True, _strip_tracking),
]


def classify_url(url: str, rules: list[NormalizeRule] = NORMALIZE_RULES) -> NormalizeRule:
    """Return the first rule that applies to the URL."""
    base = split_base(url)
    for rule in rules:
        if rule.applies(url, base):
            return rule
    raise ValueError(f"No normalize rule applies to {url!r}")


def normalize_url(url: str, rules: list[NormalizeRule] = NORMALIZE_RULES) -> str:
    """Rewrite a resolved Shopee URL into its canonical form."""
    rule = classify_url(url, rules)
    return rule.rewrite(url, split_base(url))
