"""Tests for configuration loading."""

import pytest

from affiliate_converter.config import SHOPEE_API_URL, ConfigError, ShopeeConfig
from affiliate_converter.utils import resolve_sub_ids


@pytest.fixture
def env(monkeypatch):
    for name in ("APP_ID", "APP_SECRET", "SHOPEE_API_URL", "SHOPEE_API_TIMEOUT", "MAX_CONCURRENCY"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestShopeeConfig:
    def test_defaults(self, env):
        env.setenv("APP_ID", " 123 ")
        env.setenv("APP_SECRET", "secret")

        config = ShopeeConfig.from_env()

        assert config.app_id == "123"
        assert config.api_url == SHOPEE_API_URL
        assert config.api_timeout == 10.0
        assert config.max_concurrency == 0

    def test_overrides(self, env):
        env.setenv("APP_ID", "1")
        env.setenv("APP_SECRET", "2")
        env.setenv("SHOPEE_API_TIMEOUT", "2.5")
        env.setenv("MAX_CONCURRENCY", "4")

        config = ShopeeConfig.from_env()

        assert config.api_timeout == 2.5
        assert config.max_concurrency == 4

    @pytest.mark.parametrize("missing", ["APP_ID", "APP_SECRET"])
    def test_missing_credentials(self, env, missing):
        env.setenv("APP_ID", "1")
        env.setenv("APP_SECRET", "2")
        env.delenv(missing)

        with pytest.raises(ConfigError):
            ShopeeConfig.from_env()

    def test_bad_timeout(self, env):
        env.setenv("APP_ID", "1")
        env.setenv("APP_SECRET", "2")
        env.setenv("SHOPEE_API_TIMEOUT", "soon")

        with pytest.raises(ConfigError):
            ShopeeConfig.from_env()

    def test_repr_hides_secret(self):
        assert "hidden" not in repr(ShopeeConfig(app_id="1", app_secret="hidden"))


class TestResolveSubIds:
    def test_trims_and_drops_blanks(self):
        assert resolve_sub_ids([" fb ", "", "  ", "group1"]) == ["fb", "group1"]

    @pytest.mark.parametrize("sub_ids", [None, [], [""], ["   "]])
    def test_default(self, sub_ids):
        assert resolve_sub_ids(sub_ids) == ["webchuyendoi"]
