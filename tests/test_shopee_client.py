"""Tests for the signed Shopee affiliate API client."""

import asyncio
import hashlib
import json
import re

import httpx

from affiliate_converter.clients.shopee import ShopeeClient
from affiliate_converter.models import ProductInfo

from .conftest import RecordingTransport, graphql_response

AUTH_PATTERN = re.compile(r"^SHA256 Credential=(\w+), Timestamp=(\d+), Signature=([0-9a-f]{64})$")


def _call(config, transport, method, *args):
    async def run():
        async with httpx.AsyncClient(transport=transport) as http_client:
            client = ShopeeClient(config, http_client)
            return await getattr(client, method)(*args)

    return asyncio.run(run())


def _query(request) -> str:
    return json.loads(request.content)["query"]


class TestSigning:
    def test_signature_is_sha256_of_id_timestamp_payload_secret(self, config):
        client = ShopeeClient(config, http_client=None)
        payload = '{"query":"query { x }"}'
        expected = hashlib.sha256(f"1234561700000000{payload}s3cr3t".encode("utf-8")).hexdigest()

        assert client.sign(payload, 1700000000) == expected

    def test_request_is_signed_over_exact_body(self, config):
        transport = RecordingTransport(lambda r: graphql_response({"generateShortLink": {"shortLink": "https://s.shopee.vn/x"}}))
        _call(config, transport, "generate_short_link", "https://shopee.vn/product/1/2", ["a"])

        request = transport.requests[0]
        assert request.method == "POST"
        assert str(request.url) == config.api_url
        assert request.headers["Content-Type"] == "application/json"

        m = AUTH_PATTERN.match(request.headers["Authorization"])
        assert m is not None
        app_id, timestamp, signature = m.groups()
        assert app_id == config.app_id
        raw = f"{config.app_id}{timestamp}{request.content.decode('utf-8')}{config.app_secret}"
        assert signature == hashlib.sha256(raw.encode("utf-8")).hexdigest()

    def test_payload_is_compact_json(self, config):
        transport = RecordingTransport(lambda r: graphql_response({"productOfferV2": {"nodes": []}}))
        _call(config, transport, "fetch_product_info", "42")

        assert transport.requests[0].content.startswith(b'{"query":"query {')


class TestFetchProductInfo:
    def test_returns_first_node(self, config):
        nodes = [{"productName": "Ao thun", "imageUrl": "https://cf.shopee.vn/a.jpg"}, {"productName": "Other"}]
        transport = RecordingTransport(lambda r: graphql_response({"productOfferV2": {"nodes": nodes}}))

        info = _call(config, transport, "fetch_product_info", "222")

        assert info == ProductInfo(name="Ao thun", image_url="https://cf.shopee.vn/a.jpg")
        assert "productOfferV2(itemId: 222)" in _query(transport.requests[0])

    def test_no_item_id_makes_no_request(self, config):
        transport = RecordingTransport(lambda r: graphql_response({}))

        assert _call(config, transport, "fetch_product_info", None) is None
        assert transport.requests == []

    def test_empty_nodes(self, config):
        transport = RecordingTransport(lambda r: graphql_response({"productOfferV2": {"nodes": []}}))
        assert _call(config, transport, "fetch_product_info", "1") is None

    def test_graphql_errors(self, config):
        transport = RecordingTransport(lambda r: graphql_response(errors=[{"message": "Invalid Signature"}]))
        assert _call(config, transport, "fetch_product_info", "1") is None

    def test_transport_error(self, config):
        def handler(request):
            raise httpx.ConnectError("down", request=request)

        assert _call(config, RecordingTransport(handler), "fetch_product_info", "1") is None

    def test_non_json_response(self, config):
        transport = RecordingTransport(lambda r: httpx.Response(502, text="<html>Bad Gateway</html>"))
        assert _call(config, transport, "fetch_product_info", "1") is None


class TestGenerateShortLink:
    def test_returns_short_link(self, config):
        transport = RecordingTransport(lambda r: graphql_response({"generateShortLink": {"shortLink": "https://s.shopee.vn/abc"}}))

        short = _call(config, transport, "generate_short_link", "https://shopee.vn/product/1/2", ["fb", "group1"])

        assert short == "https://s.shopee.vn/abc"
        query = _query(transport.requests[0])
        assert query.startswith("mutation { generateShortLink(input: {")
        assert 'originUrl: "https://shopee.vn/product/1/2"' in query
        assert 'subIds: ["fb","group1"]' in query
        assert query.endswith("{ shortLink } }")

    def test_quotes_are_escaped(self, config):
        transport = RecordingTransport(lambda r: graphql_response({"generateShortLink": {"shortLink": "https://s.shopee.vn/q"}}))
        _call(config, transport, "generate_short_link", 'https://shopee.vn/search?keyword="x"', ['a"b'])

        query = _query(transport.requests[0])
        assert r'originUrl: "https://shopee.vn/search?keyword=\"x\""' in query
        assert r'subIds: ["a\"b"]' in query

    def test_unexpected_shape(self, config):
        transport = RecordingTransport(lambda r: graphql_response({"generateShortLink": None}))
        assert _call(config, transport, "generate_short_link", "https://shopee.vn/a", ["x"]) is None

    def test_http_error_status(self, config):
        transport = RecordingTransport(lambda r: graphql_response(errors=[{"message": "rate limited"}], status_code=429))
        assert _call(config, transport, "generate_short_link", "https://shopee.vn/a", ["x"]) is None
