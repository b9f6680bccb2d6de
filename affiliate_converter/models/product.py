"""Product model - offer metadata from the affiliate API."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProductInfo:
    """Name and image of a Shopee product offer."""

    name: str
    image_url: str
