"""
Deck-list import.

Turns pasted deck-list text into a deck of full card records:
1. Parse the text into (count, name, set id, card id) entries
2. Fetch every entry's detail page concurrently
3. Lay out `count` copies of each card in deck-list order, up to the deck
   size limit, reporting how many copies did not fit
"""

import asyncio
import logging

from pocketdeck.models.card import PokemonCard
from pocketdeck.models.deck import DeckImport
from pocketdeck.models.failure import CardImportError
from pocketdeck.parsers.deck_list import DeckListEntry, parse_deck_list
from pocketdeck.services.card_catalog import CardCatalog
from pocketdeck.services.deck_builder import import_card_counts

logger = logging.getLogger(__name__)


async def import_deck_list(text: str, catalog: CardCatalog) -> DeckImport:
    """
    Import a deck list.

    Args:
        text: Deck-list text, one "<count> <name> <set id> <card id>" per line
        catalog: Catalog used to fetch card details

    Returns:
        DeckImport with the deck (at most 60 cards) and the truncated count

    Raises:
        DeckValidationError: If the text has a malformed line or no entries
        CardImportError: If any card's details cannot be fetched
    """
    entries = parse_deck_list(text)
    logger.info("Importing deck list with %d entries", len(entries))

    # Results come back in entry order regardless of completion order
    cards = await asyncio.gather(*(_fetch_entry(entry, catalog) for entry in entries))

    result = import_card_counts(
        (card, entry.count) for card, entry in zip(cards, entries, strict=True)
    )

    if result.was_truncated:
        logger.info("Deck list truncated: dropped %d cards", result.truncated)

    return result


async def _fetch_entry(entry: DeckListEntry, catalog: CardCatalog) -> PokemonCard:
    """Fetch one entry's card."""
    result = await catalog.lookup_card(entry.set_id, entry.card_id)

    if result.value is None:
        raise CardImportError(
            entry.name,
            entry.set_id,
            entry.card_id,
            reason=result.detail,
            line_number=entry.line_number,
        )

    return result.value
