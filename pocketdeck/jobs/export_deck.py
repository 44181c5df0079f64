"""
Export a deck list file with full card details.

Imports the deck list through the card catalog (fetching every card's
detail page) and prints the plain or detailed export.

Usage:
    python -m pocketdeck.jobs.export_deck decklist.txt --detailed
"""

import argparse
import asyncio
import logging
from pathlib import Path

from pocketdeck.config import settings
from pocketdeck.models.failure import DeckValidationError
from pocketdeck.services.card_cache import CardCache
from pocketdeck.services.card_catalog import CardCatalog, create_http_client
from pocketdeck.services.deck_formatter import export_deck_detailed, export_deck_text
from pocketdeck.services.deck_import import import_deck_list

logger = logging.getLogger(__name__)


async def run_export(deck_list: str, detailed: bool = False) -> str:
    """
    Import a deck list and render its export.

    Raises:
        DeckValidationError: If the deck list is malformed or a card cannot be fetched
    """
    async with create_http_client() as client:
        catalog = CardCatalog(client, CardCache())
        result = await import_deck_list(deck_list, catalog)

    if result.was_truncated:
        logger.warning("Deck exceeds the size limit; dropped the last %d cards", result.truncated)

    if detailed:
        return export_deck_detailed(result.deck)
    return export_deck_text(result.deck)


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Export a deck list with card details")
    parser.add_argument(
        "deck_list",
        type=Path,
        help="Path to a deck list text file",
    )
    parser.add_argument(
        "--detailed",
        action="store_true",
        help="Include every card's attributes",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not args.deck_list.exists():
        print(f"Error: Deck list not found: {args.deck_list}")
        return

    try:
        output = asyncio.run(run_export(args.deck_list.read_text(encoding="utf-8"), args.detailed))
    except DeckValidationError as e:
        logger.error("Failed to import deck list: %s", e)
        raise SystemExit(1) from e

    print(output)


if __name__ == "__main__":
    main()
