"""
Card catalog service.

The operations the API layer calls: card details, search, browse, per-set
listing and the sets index. Scrape failures stop here; every operation
returns None or an empty list instead of raising, and logs what went wrong.

Every fetch writes what it learned to the card cache. Detail fetches
replace the cached record; listing fetches only fill in cards the cache
has not seen.
"""

import asyncio
import logging

import httpx

from pocketdeck.config import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, settings
from pocketdeck.models.card import CardSet, PokemonCard
from pocketdeck.models.failure import FailureKind, FetchResult, ScrapeError
from pocketdeck.scrapers.limitless import (
    fetch_browse_page,
    fetch_card_page,
    fetch_search_results,
    fetch_set_cards,
    fetch_sets,
)
from pocketdeck.services.card_cache import CardCache

logger = logging.getLogger(__name__)


def create_http_client() -> httpx.AsyncClient:
    """HTTP client for the card database site, configured from settings."""
    return httpx.AsyncClient(
        base_url=settings.card_site_url,
        headers={"User-Agent": settings.user_agent},
        timeout=settings.request_timeout,
        follow_redirects=True,
    )


def card_matches_query(card: PokemonCard, query: str) -> bool:
    """Case-insensitive substring match on card name or type."""
    needle = query.lower()
    return needle in card.name.lower() or needle in card.type.lower()


class CardCatalog:
    """
    Card lookups against the card database site, backed by a card cache.

    Args:
        client: HTTP client with the site base URL (see create_http_client)
        cache: Process-wide card cache
        search_fetch_details: Resolve search hits through their detail pages.
            Defaults to settings.search_fetch_details.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        cache: CardCache,
        search_fetch_details: bool | None = None,
    ) -> None:
        self.client = client
        self.cache = cache
        if search_fetch_details is None:
            search_fetch_details = settings.search_fetch_details
        self.search_fetch_details = search_fetch_details

    async def lookup_card(self, set_id: str, card_id: str) -> FetchResult[PokemonCard]:
        """
        Fetch a card's detail page and build its full record.

        A successful lookup replaces the cached record for the card.

        Returns:
            FetchResult holding the card, or the classified failure
        """
        try:
            card = await fetch_card_page(self.client, set_id, card_id)
        except ScrapeError as e:
            logger.warning("Error fetching card %s/%s (%s): %s", set_id, card_id, e.kind.value, e)
            return FetchResult.from_error(e)
        except Exception as e:
            logger.exception("Unexpected error fetching card %s/%s", set_id, card_id)
            return FetchResult.failure(FailureKind.UNKNOWN, str(e))

        self.cache.upsert(card)
        return FetchResult.success(card)

    async def fetch_card_details(self, set_id: str, card_id: str) -> PokemonCard | None:
        """Full record for a card, or None if it could not be fetched."""
        result = await self.lookup_card(set_id, card_id)
        return result.value

    async def search_cards(self, query: str) -> list[PokemonCard]:
        """
        Search cards by name or type.

        Tries the site search first. If the site returns nothing or fails,
        falls back to a substring match over the cache.

        Returns:
            Matching cards: site results in page order, otherwise cached
            matches in cache order. Empty for a blank query.
        """
        query = query.strip()
        if not query:
            return []

        try:
            results = await self._search_website(query)
        except ScrapeError as e:
            logger.warning("Search for %r failed (%s): %s", query, e.kind.value, e)
            results = []
        except Exception:
            logger.exception("Unexpected error searching for %r", query)
            results = []

        if results:
            for card in results:
                self.cache.add_if_absent(card)
            logger.info("Search for %r returned %d results from the site", query, len(results))
            return results

        cached = self.cache.filter(lambda card: card_matches_query(card, query))
        logger.info("Search for %r fell back to cache: %d matches", query, len(cached))
        return cached

    async def get_all_cards(
        self, page: int = DEFAULT_PAGE, limit: int = DEFAULT_PAGE_LIMIT
    ) -> list[PokemonCard]:
        """One page of the browse listing, as partial records."""
        try:
            cards = await fetch_browse_page(self.client, page, limit)
        except ScrapeError as e:
            logger.warning("Get all cards failed (%s): %s", e.kind.value, e)
            return []

        self._remember(cards)
        return cards

    async def get_cards_by_set(self, set_id: str) -> list[PokemonCard]:
        """Every card in a set, as partial records."""
        try:
            cards = await fetch_set_cards(self.client, set_id)
        except ScrapeError as e:
            logger.warning("Get cards by set %s failed (%s): %s", set_id, e.kind.value, e)
            return []

        self._remember(cards)
        return cards

    async def get_all_sets(self) -> list[CardSet]:
        """All sets from the sets index. Sets are not cached."""
        try:
            return await fetch_sets(self.client)
        except ScrapeError as e:
            logger.warning("Get sets failed (%s): %s", e.kind.value, e)
            return []

    async def _search_website(self, query: str) -> list[PokemonCard]:
        """
        Site search, optionally upgraded to full records.

        Detail pages for all hits are fetched concurrently. A hit whose
        detail fetch fails keeps its partial record.
        """
        hits = await fetch_search_results(self.client, query)
        if not hits or not self.search_fetch_details:
            return hits

        results = await asyncio.gather(
            *(self.lookup_card(hit.set_id, hit.card_id) for hit in hits)
        )

        cards = [
            result.value if result.value is not None else hit
            for hit, result in zip(hits, results, strict=True)
        ]
        logger.info(
            "Fetched details for %d of %d search hits",
            sum(1 for result in results if result.ok),
            len(hits),
        )
        return cards

    def _remember(self, cards: list[PokemonCard]) -> None:
        for card in cards:
            self.cache.add_if_absent(card)
