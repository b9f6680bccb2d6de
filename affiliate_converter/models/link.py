"""Link models - candidates found in text and their resolved destinations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LinkCandidate:
    """A product link matched in the input text."""

    raw: str  # Exact matched substring, used for replacement
    url: str  # Absolute form with a scheme

    @classmethod
    def from_match(cls, raw: str) -> "LinkCandidate":
        url = raw if raw.lower().startswith("http") else f"https://{raw}"
        return cls(raw=raw, url=url)


@dataclass(frozen=True)
class ResolvedLink:
    """Destination of a candidate after following redirects."""

    final_url: str
    item_id: str | None = None
