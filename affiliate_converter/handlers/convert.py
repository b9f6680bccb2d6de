"""AWS Lambda handler for POST /api/convert-text."""

import asyncio
import base64
import json
import logging

import httpx

from ..clients import RedirectResolver, ShopeeClient
from ..config import REDIRECT_MAX_HOPS, ConfigError, ShopeeConfig
from ..models import ConversionReport
from ..services import ConversionService

logger = logging.getLogger(__name__)

ROUTE_SUFFIX = "/convert-text"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def _response(status_code: int, body: dict | None = None) -> dict:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json", **CORS_HEADERS},
        "body": json.dumps(body, ensure_ascii=False) if body is not None else "",
    }


def _parse_body(event: dict) -> dict:
    body = event.get("body") or "{}"
    try:
        if event.get("isBase64Encoded"):
            body = base64.b64decode(body).decode("utf-8")
        data = json.loads(body)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


async def convert_text(text: str, sub_ids: list[str] | None, config: ShopeeConfig) -> ConversionReport:
    """Convert a text with a fresh http client, closed when the batch is done."""
    async with httpx.AsyncClient(max_redirects=REDIRECT_MAX_HOPS) as http_client:
        service = ConversionService(
            ShopeeClient(config, http_client),
            RedirectResolver(http_client),
            max_concurrency=config.max_concurrency,
        )
        return await service.convert(text, sub_ids)


def handler(event, context):
    """
    API Gateway proxy handler.

    Input payload:
    {
        "text": "Deal hot https://shp.ee/abc123",
        "subIds": ["facebook", "group1"]
    }

    Output: {"success", "newText", "converted", "details"}.
    """
    method = (event.get("httpMethod") or ((event.get("requestContext") or {}).get("http") or {}).get("method") or "POST").upper()
    if method == "OPTIONS":
        return _response(204)

    path = event.get("path") or event.get("rawPath") or ""
    if path and not path.rstrip("/").endswith(ROUTE_SUFFIX):
        return _response(404, {"error": "Not found"})
    if method != "POST":
        return _response(405, {"error": "Method not allowed"})

    body = _parse_body(event)
    text = body.get("text")
    if not text or not isinstance(text, str):
        return _response(400, {"error": "Missing 'text' field"})

    sub_ids = body.get("subIds")
    if not isinstance(sub_ids, list):
        sub_ids = None

    try:
        config = ShopeeConfig.from_env()
        report = asyncio.run(convert_text(text, sub_ids, config))
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return _response(500, {"error": "Server is not configured"})
    except Exception as e:
        logger.exception(f"Unexpected error converting text: {e}")
        return _response(500, {"error": str(e)})

    logger.info(f"Converted {report.converted} link(s)")
    return _response(200, report.to_dict())


# Local testing
if __name__ == "__main__":
    import sys

    from ..config import configure_logging

    if len(sys.argv) < 2:
        print("Usage: python -m affiliate_converter.handlers.convert <text> [subId ...]")
        print()
        print("Example:")
        print('  python -m affiliate_converter.handlers.convert "Mua ngay https://shp.ee/abc123" facebook')
        sys.exit(1)

    configure_logging()
    test_input = {"text": sys.argv[1], "subIds": sys.argv[2:]}
    event = {"httpMethod": "POST", "path": "/api/convert-text", "body": json.dumps(test_input)}

    result = handler(event, None)
    print(f"Status: {result['statusCode']}")
    print(json.dumps(json.loads(result["body"]), indent=2, ensure_ascii=False))
