"""Find Shopee product links in free text."""

import re

from ..models import LinkCandidate

LINK_PATTERN = re.compile(
    r"((?:https?://)?(?:www\.)?(?:shopee\.vn|vn\.shp\.ee|shp\.ee|s\.shopee\.vn)[^\s]*)",
    re.IGNORECASE,
)


def find_candidates(text: str) -> list[LinkCandidate]:
    """Return unique link candidates in order of first appearance."""
    seen: set[str] = set()
    candidates = []
    for match in LINK_PATTERN.finditer(text or ""):
        raw = match.group(1)
        if raw in seen:
            continue
        seen.add(raw)
        candidates.append(LinkCandidate.from_match(raw))
    return candidates
