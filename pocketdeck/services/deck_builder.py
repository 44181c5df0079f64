"""
Deck assembly rules.

Pure functions over Deck values. A deck holds at most 60 cards and at most
4 copies of any one card, where a card is identified by (set_id, card_id).

Functions never mutate their input deck; rule violations raise
DeckValidationError and leave the caller's deck as it was.
"""

from collections.abc import Iterable

from pocketdeck.config import MAX_COPIES_PER_CARD, MAX_DECK_SIZE
from pocketdeck.models.card import PokemonCard
from pocketdeck.models.deck import Deck, DeckEntry, DeckImport
from pocketdeck.models.failure import DeckRule, DeckValidationError


def add_card(deck: Deck, card: PokemonCard) -> Deck:
    """
    Add one copy of a card.

    Args:
        deck: Current deck
        card: Card to add

    Returns:
        New deck with the card appended

    Raises:
        DeckValidationError: COPY_LIMIT if the deck already holds 4 copies,
            DECK_FULL if the deck already holds 60 cards
    """
    if deck.copies_of(card.set_id, card.card_id) >= MAX_COPIES_PER_CARD:
        raise DeckValidationError(
            DeckRule.COPY_LIMIT,
            f"You cannot have more than {MAX_COPIES_PER_CARD} copies of the same card in your deck.",
            detail=f"{card.name} ({card.set_id} {card.card_id})",
        )

    if len(deck) >= MAX_DECK_SIZE:
        raise DeckValidationError(
            DeckRule.DECK_FULL,
            f"Your deck cannot contain more than {MAX_DECK_SIZE} cards.",
        )

    return Deck(cards=[*deck.cards, card])


def remove_card(deck: Deck, set_id: str, card_id: str) -> Deck:
    """Remove the first copy of a card. Returns an equal deck if the card is absent."""
    cards = list(deck.cards)
    for index, card in enumerate(cards):
        if card.key == (set_id, card_id):
            del cards[index]
            break
    return Deck(cards=cards)


def import_cards(cards: Iterable[PokemonCard]) -> DeckImport:
    """
    Build a deck from an imported card sequence.

    Sequences longer than the deck size limit are cut to the first 60 cards;
    the number of dropped cards is reported, not raised.
    """
    cards = list(cards)
    truncated = max(0, len(cards) - MAX_DECK_SIZE)
    return DeckImport(deck=Deck(cards=cards[:MAX_DECK_SIZE]), truncated=truncated)


def import_card_counts(entries: Iterable[tuple[PokemonCard, int]]) -> DeckImport:
    """
    Build a deck from (card, count) pairs, in order.

    Same cap as import_cards, but copies past the 60th card are only
    counted, never built, so a huge count costs nothing.
    """
    cards: list[PokemonCard] = []
    total = 0

    for card, count in entries:
        total += count
        room = MAX_DECK_SIZE - len(cards)
        if room > 0:
            cards.extend([card] * min(count, room))

    return DeckImport(deck=Deck(cards=cards), truncated=total - len(cards))


def group_deck(deck: Deck) -> list[DeckEntry]:
    """
    Collapse the deck into (card, count) entries.

    Entries are keyed by (set_id, card_id) and kept in first-seen order.
    The first record seen for a key represents the group.
    """
    groups: dict[tuple[str, str], DeckEntry] = {}

    for card in deck:
        entry = groups.get(card.key)
        if entry is None:
            groups[card.key] = DeckEntry(card=card, count=1)
        else:
            groups[card.key] = DeckEntry(card=entry.card, count=entry.count + 1)

    return list(groups.values())


def count_categories(deck: Deck) -> dict[str, int]:
    """Number of deck entries per category, in first-seen order."""
    counts: dict[str, int] = {}
    for card in deck:
        counts[card.category] = counts.get(card.category, 0) + 1
    return counts
