"""Conversion service - turn every Shopee link in a text into an affiliate short link."""

import asyncio
import contextlib
import logging
import re

from ..clients import RedirectResolver, ShopeeClient
from ..models import ConversionReport, ConversionResult, LinkCandidate, ResolvedLink
from ..utils import resolve_sub_ids
from .item_id import extract_item_id
from .normalizer import normalize_url
from .scanner import find_candidates

logger = logging.getLogger(__name__)


class ConversionService:
    """Runs the per-link pipeline concurrently for all links in a text.

    Per link: resolve redirects -> extract item id -> normalize URL ->
    (short link, product info) in parallel. One link failing never affects
    the others.
    """

    def __init__(
        self,
        shopee: ShopeeClient,
        resolver: RedirectResolver,
        max_concurrency: int = 0,
    ):
        self.shopee = shopee
        self.resolver = resolver
        self.max_concurrency = max_concurrency

    async def convert(self, text: str, sub_ids: list[str] | None = None) -> ConversionReport:
        """Convert all product links in `text`.

        Returns an empty (unsuccessful) report without any network call when
        the text holds no Shopee links.
        """
        candidates = find_candidates(text)
        if not candidates:
            return ConversionReport.empty()

        resolved_sub_ids = resolve_sub_ids(sub_ids)
        limit = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency > 0 else None
        logger.info(f"Converting {len(candidates)} link(s) with sub ids {resolved_sub_ids}")

        outcomes = await asyncio.gather(
            *(self._convert_bounded(c, resolved_sub_ids, limit) for c in candidates),
            return_exceptions=True,
        )

        results = []
        for candidate, outcome in zip(candidates, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(f"Conversion failed for {candidate.raw}: {outcome!r}")
                outcome = ConversionResult(original=candidate.raw)
            results.append(outcome)

        return ConversionReport(
            success=True,
            new_text=rewrite_text(text, results),
            converted=sum(1 for r in results if r.short),
            details=results,
        )

    async def _convert_bounded(
        self,
        candidate: LinkCandidate,
        sub_ids: list[str],
        limit: asyncio.Semaphore | None,
    ) -> ConversionResult:
        async with limit if limit is not None else contextlib.nullcontext():
            return await self.convert_link(candidate, sub_ids)

    async def resolve(self, candidate: LinkCandidate) -> ResolvedLink:
        """Follow redirects and extract the item id from the destination."""
        final_url = await self.resolver.resolve(candidate.url)
        return ResolvedLink(final_url=final_url, item_id=extract_item_id(final_url))

    async def convert_link(self, candidate: LinkCandidate, sub_ids: list[str]) -> ConversionResult:
        """Run the full pipeline for a single link."""
        resolved = await self.resolve(candidate)
        cleaned_url = normalize_url(resolved.final_url)
        logger.debug(f"{candidate.raw} -> {cleaned_url} (item {resolved.item_id})")

        short, info = await asyncio.gather(
            self.shopee.generate_short_link(cleaned_url, sub_ids),
            self.shopee.fetch_product_info(resolved.item_id),
        )

        result = ConversionResult(original=candidate.raw, short=short)
        if info is not None:
            result.product_name = info.name or result.product_name
            result.image_url = info.image_url or ""
        return result


def rewrite_text(text: str, results: list[ConversionResult]) -> str:
    """Replace every occurrence of each converted link with its short link.

    Done in one pass, longest link first, so a link that is a prefix of
    another link is never replaced inside it. Unconverted links map to
    themselves for the same reason.
    """
    replacements = {r.original: r.short or r.original for r in results}
    if not any(r.short for r in results):
        return text

    pattern = re.compile("|".join(re.escape(o) for o in sorted(replacements, key=len, reverse=True)))
    return pattern.sub(lambda m: replacements[m.group(0)], text)
