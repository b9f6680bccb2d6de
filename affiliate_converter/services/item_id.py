"""Item id extraction - pull a Shopee item id out of a product URL."""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class ItemIdRule:
    """A pattern and the capture group that holds the item id."""

    name: str
    pattern: re.Pattern
    group: int = 1

    def match(self, url: str) -> str | None:
        m = self.pattern.search(url)
        return m.group(self.group) if m else None


# Checked in order; first match wins.
ITEM_ID_RULES = [
    # ten-san-pham-i.<shopId>.<itemId>
    ItemIdRule("slug", re.compile(r"-i\.(\d+)\.(\d+)"), group=2),
    # /product/<shopId>/<itemId>
    ItemIdRule("product_path", re.compile(r"/product/\d+/(\d+)")),
    ItemIdRule("generic", re.compile(r"(?:itemId=|/product/)(\d+)")),
    # trailing /<digits> before the query string or end
    ItemIdRule("trailing_digits", re.compile(r"/(\d+)(?:\?|$)")),
]


def extract_item_id(url: str, rules: list[ItemIdRule] = ITEM_ID_RULES) -> str | None:
    """Return the item id of a product URL, or None if no rule matches."""
    if not url:
        return None
    for rule in rules:
        item_id = rule.match(url)
        if item_id:
            return item_id
    return None
