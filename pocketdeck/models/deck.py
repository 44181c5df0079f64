from collections.abc import Iterator
from dataclasses import dataclass, field

from pocketdeck.models.card import PokemonCard


@dataclass
class Deck:
    """
    An ordered list of card records.

    Duplicates are allowed up to the copy limit. The deck is client-held
    state; rules that mutate it live in services.deck_builder.
    """

    cards: list[PokemonCard] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[PokemonCard]:
        return iter(self.cards)

    def copies_of(self, set_id: str, card_id: str) -> int:
        """Number of entries with the given (set_id, card_id)."""
        return sum(1 for card in self.cards if card.key == (set_id, card_id))


@dataclass(frozen=True, slots=True)
class DeckEntry:
    """A grouped deck line: one card record and how many copies the deck holds."""

    card: PokemonCard
    count: int


@dataclass
class DeckImport:
    """
    Result of a bulk import.

    Attributes:
        deck: The imported deck, capped at the deck size limit
        truncated: Number of cards dropped to respect the cap
    """

    deck: Deck
    truncated: int = 0

    @property
    def was_truncated(self) -> bool:
        return self.truncated > 0
