"""
PocketDeck services.

Card catalog lookups, the card cache, and deck building rules.
"""

from pocketdeck.services.card_cache import CardCache
from pocketdeck.services.card_catalog import CardCatalog, card_matches_query, create_http_client
from pocketdeck.services.deck_builder import (
    add_card,
    count_categories,
    group_deck,
    import_card_counts,
    import_cards,
    remove_card,
)
from pocketdeck.services.deck_formatter import export_deck_detailed, export_deck_text
from pocketdeck.services.deck_import import import_deck_list

__all__ = [
    "CardCache",
    "CardCatalog",
    "add_card",
    "card_matches_query",
    "count_categories",
    "create_http_client",
    "export_deck_detailed",
    "export_deck_text",
    "group_deck",
    "import_card_counts",
    "import_cards",
    "import_deck_list",
    "remove_card",
]
