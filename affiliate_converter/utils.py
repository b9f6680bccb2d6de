from .config import DEFAULT_SUB_ID


def resolve_sub_ids(sub_ids) -> list[str]:
    """Trim caller sub ids, dropping blanks. Falls back to the default id.

    Example: [" fb ", "", "  "] -> ["fb"], [] -> ["webchuyendoi"]
    """
    cleaned = [s.strip() for s in sub_ids or [] if isinstance(s, str) and s.strip()]
    return cleaned or [DEFAULT_SUB_ID]


def split_base(url: str) -> str:
    """Return the URL without its query string."""
    return url.split("?", 1)[0]
