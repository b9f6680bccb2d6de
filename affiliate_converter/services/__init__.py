"""Business logic services."""

from .converter import ConversionService, rewrite_text
from .item_id import extract_item_id
from .normalizer import normalize_url
from .scanner import find_candidates

__all__ = ["ConversionService", "extract_item_id", "find_candidates", "normalize_url", "rewrite_text"]
