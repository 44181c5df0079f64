from pocketdeck.models.card import ENERGY, POKEMON, TRAINER, Attack, CardSet, PokemonCard
from pocketdeck.models.deck import Deck, DeckEntry, DeckImport
from pocketdeck.models.failure import (
    CardImportError,
    DeckRule,
    DeckValidationError,
    FailureDetail,
    FailureKind,
    FetchResult,
    NetworkError,
    ParseError,
    ScrapeError,
)

__all__ = [
    "Attack",
    "CardImportError",
    "CardSet",
    "Deck",
    "DeckEntry",
    "DeckImport",
    "DeckRule",
    "DeckValidationError",
    "ENERGY",
    "FailureDetail",
    "FailureKind",
    "FetchResult",
    "NetworkError",
    "POKEMON",
    "ParseError",
    "PokemonCard",
    "ScrapeError",
    "TRAINER",
]
