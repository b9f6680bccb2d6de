"""Shared fixtures and fakes for the converter tests."""

import json

import httpx
import pytest

from affiliate_converter.config import ShopeeConfig


@pytest.fixture
def config():
    return ShopeeConfig(app_id="123456", app_secret="s3cr3t", api_url="https://api.test/graphql")


def graphql_response(data=None, errors=None, status_code=200):
    body = {}
    if data is not None:
        body["data"] = data
    if errors is not None:
        body["errors"] = errors
    return httpx.Response(status_code, content=json.dumps(body).encode("utf-8"))


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler):
        self.requests = []

        def _record(request):
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)
