"""
In-memory card cache.

Holds every card record the process has seen, keyed by (set_id, card_id).
One instance is created at startup and handed to the catalog; it lives as
long as the process and is only reset by a restart.

The cache has no eviction and no size bound. Memory grows with the number
of distinct cards seen, which the site's catalog keeps in the low thousands.

Mutations are plain synchronous method calls, so under asyncio each one runs
without interleaving. A multi-threaded caller would need a lock around them.
"""

from collections.abc import Callable, Iterator

from pocketdeck.models.card import PokemonCard

CardKey = tuple[str, str]


class CardCache:
    """Card records keyed by (set_id, card_id), in first-insertion order."""

    def __init__(self) -> None:
        self._cards: dict[CardKey, PokemonCard] = {}

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[PokemonCard]:
        return iter(list(self._cards.values()))

    def __contains__(self, key: object) -> bool:
        return key in self._cards

    def get(self, set_id: str, card_id: str) -> PokemonCard | None:
        """Get a cached record, or None."""
        return self._cards.get((set_id, card_id))

    def contains(self, set_id: str, card_id: str) -> bool:
        return (set_id, card_id) in self._cards

    def upsert(self, card: PokemonCard) -> None:
        """Store a record, replacing any record with the same key in place."""
        self._cards[card.key] = card

    def add_if_absent(self, card: PokemonCard) -> bool:
        """
        Store a record only if its key is not cached yet.

        Used for partial listing records so they never overwrite a full
        record from a detail fetch.

        Returns:
            True if the record was added
        """
        if card.key in self._cards:
            return False
        self._cards[card.key] = card
        return True

    def filter(self, predicate: Callable[[PokemonCard], bool]) -> list[PokemonCard]:
        """All cached records matching `predicate`, in cache order."""
        return [card for card in self._cards.values() if predicate(card)]
