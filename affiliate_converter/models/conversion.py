"""Conversion models - per-link results and the batch report."""

from dataclasses import dataclass, field

from ..config import DEFAULT_PRODUCT_NAME


@dataclass
class ConversionResult:
    """Outcome for one unique link found in the text."""

    original: str
    short: str | None = None
    product_name: str = DEFAULT_PRODUCT_NAME
    image_url: str = ""

    def to_dict(self) -> dict:
        return {
            "original": self.original,
            "short": self.short,
            "productName": self.product_name,
            "imageUrl": self.image_url,
        }


@dataclass
class ConversionReport:
    """Result of converting a whole text."""

    success: bool
    converted: int = 0
    new_text: str | None = None
    details: list[ConversionResult] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "ConversionReport":
        """Report for a text with no product links."""
        return cls(success=False, converted=0)

    def to_dict(self) -> dict:
        if not self.success:
            return {"success": False, "converted": self.converted}
        return {
            "success": True,
            "newText": self.new_text,
            "converted": self.converted,
            "details": [result.to_dict() for result in self.details],
        }
