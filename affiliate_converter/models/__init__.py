"""Data models."""

from .conversion import ConversionReport, ConversionResult
from .link import LinkCandidate, ResolvedLink
from .product import ProductInfo

__all__ = ["ConversionReport", "ConversionResult", "LinkCandidate", "ProductInfo", "ResolvedLink"]
