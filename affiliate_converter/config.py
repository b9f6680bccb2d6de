import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

# Shopee affiliate open API
SHOPEE_API_URL = "https://open-api.affiliate.shopee.vn/graphql"
SHOPEE_API_TIMEOUT = 10.0

# Redirect resolution for shortened links
REDIRECT_TIMEOUT = 8.0
REDIRECT_MAX_HOPS = 10
SHORTENER_HOSTS = frozenset({"s.shopee.vn", "shp.ee", "vn.shp.ee"})
BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
)

# Conversion defaults
DEFAULT_SUB_ID = "webchuyendoi"
DEFAULT_PRODUCT_NAME = "Sản phẩm Shopee"


class ConfigError(ValueError):
    """Raised when required settings are missing or malformed."""


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")


def _env_int(name: str, default: int = 0) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return max(int(raw), 0)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class ShopeeConfig:
    """Credentials and limits for the Shopee affiliate API."""

    app_id: str
    app_secret: str
    api_url: str = SHOPEE_API_URL
    api_timeout: float = SHOPEE_API_TIMEOUT
    max_concurrency: int = 0  # 0 = no bound on in-flight links

    def __repr__(self) -> str:
        return f"ShopeeConfig(app_id={self.app_id!r}, api_url={self.api_url!r})"

    @classmethod
    def from_env(cls) -> "ShopeeConfig":
        """Build config from environment variables (and .env, if present)."""
        app_id = (os.getenv("APP_ID") or "").strip()
        app_secret = (os.getenv("APP_SECRET") or "").strip()
        if not app_id or not app_secret:
            raise ConfigError("APP_ID and APP_SECRET must be set in .env")

        return cls(
            app_id=app_id,
            app_secret=app_secret,
            api_url=(os.getenv("SHOPEE_API_URL") or SHOPEE_API_URL).strip(),
            api_timeout=_env_float("SHOPEE_API_TIMEOUT", SHOPEE_API_TIMEOUT),
            max_concurrency=_env_int("MAX_CONCURRENCY"),
        )


def configure_logging() -> None:
    """Apply LOG_LEVEL to the root logger."""
    level = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
