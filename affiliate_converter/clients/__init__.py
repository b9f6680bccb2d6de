"""API clients for external services."""

from .redirect import RedirectResolver
from .shopee import ShopeeClient

__all__ = ["RedirectResolver", "ShopeeClient"]
