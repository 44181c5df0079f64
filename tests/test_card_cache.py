"""Tests for the in-memory card cache."""

from collections.abc import Callable

from pocketdeck.models.card import PokemonCard
from pocketdeck.services.card_cache import CardCache


class TestUpsert:
    def test_upsert_stores_record(
        self, cache: CardCache, make_card: Callable[..., PokemonCard]
    ) -> None:
        """Stored records can be read back by key."""
        card = make_card("A1", "1", "Bulbasaur")

        cache.upsert(card)

        assert cache.get("A1", "1") == card
        assert cache.contains("A1", "1")
        assert ("A1", "1") in cache

    def test_upsert_is_idempotent(
        self, cache: CardCache, make_card: Callable[..., PokemonCard]
    ) -> None:
        """Upserting the same key twice keeps one entry, holding the latest record."""
        cache.upsert(make_card("A1", "1", "Bulbasaur"))
        cache.upsert(make_card("A1", "1", "Bulbasaur", hp=70))

        assert len(cache) == 1
        assert cache.get("A1", "1").hp == 70

    def test_upsert_keeps_position(
        self, cache: CardCache, make_card: Callable[..., PokemonCard]
    ) -> None:
        """Replacing a record does not move it to the end."""
        cache.upsert(make_card("A1", "1", "Bulbasaur"))
        cache.upsert(make_card("A1", "33", "Charmander"))
        cache.upsert(make_card("A1", "1", "Bulbasaur", hp=70))

        assert [card.card_id for card in cache] == ["1", "33"]


class TestAddIfAbsent:
    def test_adds_new_key(self, cache: CardCache, make_card: Callable[..., PokemonCard]) -> None:
        assert cache.add_if_absent(make_card("A1", "1")) is True
        assert len(cache) == 1

    def test_never_overwrites(
        self, cache: CardCache, make_card: Callable[..., PokemonCard]
    ) -> None:
        """A partial record does not replace a cached full record."""
        cache.upsert(make_card("A1", "1", "Bulbasaur", hp=70))

        added = cache.add_if_absent(make_card("A1", "1", "Bulbasaur"))

        assert added is False
        assert cache.get("A1", "1").hp == 70


class TestFilter:
    def test_filter_keeps_insertion_order(
        self, cache: CardCache, make_card: Callable[..., PokemonCard]
    ) -> None:
        cache.upsert(make_card("A1", "94", "Pikachu"))
        cache.upsert(make_card("A1", "1", "Bulbasaur"))
        cache.upsert(make_card("A1", "96", "Pikachu ex"))

        result = cache.filter(lambda card: "Pikachu" in card.name)

        assert [card.key for card in result] == [("A1", "94"), ("A1", "96")]

    def test_missing_key(self, cache: CardCache) -> None:
        assert cache.get("A1", "999") is None
        assert not cache.contains("A1", "999")
