"""Tests for deck-list import."""

from collections.abc import Callable

import httpx
import pytest
import respx

from pocketdeck.models.failure import CardImportError, DeckRule, DeckValidationError
from pocketdeck.services.card_catalog import CardCatalog
from pocketdeck.services.deck_import import import_deck_list

SITE_URL = "https://pocket.limitlesstcg.com"


class TestImportDeckList:
    @pytest.mark.asyncio
    @respx.mock
    async def test_imports_full_records(
        self, catalog: CardCatalog, pikachu_detail_html: str
    ) -> None:
        """Each line is fetched once and replicated `count` times."""
        route = respx.get(f"{SITE_URL}/cards/A1/96").mock(
            return_value=httpx.Response(200, text=pikachu_detail_html)
        )

        result = await import_deck_list("Pokémon: 2\n2 Pikachu ex A1 96\n", catalog)

        assert route.call_count == 1
        assert len(result.deck) == 2
        assert all(card.hp == 120 for card in result.deck)
        assert result.truncated == 0

    @pytest.mark.asyncio
    @respx.mock
    async def test_keeps_deck_list_order(
        self, catalog: CardCatalog, load_html: Callable[[str], str], pikachu_detail_html: str
    ) -> None:
        """Cards come back in deck-list order regardless of fetch completion order."""
        respx.get(f"{SITE_URL}/cards/A1/129").mock(
            return_value=httpx.Response(200, text=load_html("limitless_card_mewtwo_ex.html"))
        )
        respx.get(f"{SITE_URL}/cards/A1/96").mock(
            return_value=httpx.Response(200, text=pikachu_detail_html)
        )

        result = await import_deck_list("1 Mewtwo ex A1 129\n2 Pikachu ex A1 96", catalog)

        assert [card.card_id for card in result.deck] == ["129", "96", "96"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_truncates_oversized_list(
        self, catalog: CardCatalog, pikachu_detail_html: str
    ) -> None:
        """A list of more than 60 cards keeps the first 60 and reports the rest."""
        respx.get(url__regex=rf"{SITE_URL}/cards/A1/\d+").mock(
            return_value=httpx.Response(200, text=pikachu_detail_html)
        )
        text = "\n".join(f"4 Pikachu ex A1 {index}" for index in range(1, 17))

        result = await import_deck_list(text, catalog)

        assert len(result.deck) == 60
        assert result.truncated == 4
        assert result.deck.cards[-1].card_id == "15"

    @pytest.mark.asyncio
    @respx.mock
    async def test_failed_card_names_the_line(
        self, catalog: CardCatalog, pikachu_detail_html: str
    ) -> None:
        respx.get(f"{SITE_URL}/cards/A1/96").mock(
            return_value=httpx.Response(200, text=pikachu_detail_html)
        )
        respx.get(f"{SITE_URL}/cards/A1/999").mock(return_value=httpx.Response(404))

        with pytest.raises(CardImportError) as exc_info:
            await import_deck_list("2 Pikachu ex A1 96\n1 Missingno A1 999", catalog)

        error = exc_info.value
        assert error.rule == DeckRule.CARD_UNAVAILABLE
        assert error.message == "Failed to import card: Missingno (A1 999)"
        assert (error.set_id, error.card_id) == ("A1", "999")
        assert error.line_number == 2
        assert error.to_detail().detail.startswith("Line 2: ")

    @pytest.mark.asyncio
    @respx.mock
    async def test_huge_count_is_capped(self, catalog: CardCatalog, pikachu_detail_html: str) -> None:
        """A huge count still yields a 60-card deck and reports every dropped copy."""
        respx.get(f"{SITE_URL}/cards/A1/96").mock(
            return_value=httpx.Response(200, text=pikachu_detail_html)
        )

        result = await import_deck_list("999999999 Pikachu ex A1 96", catalog)

        assert len(result.deck) == 60
        assert result.truncated == 999999999 - 60

    @pytest.mark.asyncio
    async def test_malformed_list_fetches_nothing(self, catalog: CardCatalog) -> None:
        """Parsing fails before any fetch is issued."""
        with respx.mock(assert_all_called=False) as router:
            route = router.get(url__startswith=SITE_URL)

            with pytest.raises(DeckValidationError) as exc_info:
                await import_deck_list("two Pikachu", catalog)

        assert exc_info.value.rule == DeckRule.MALFORMED_LINE
        assert not route.called
