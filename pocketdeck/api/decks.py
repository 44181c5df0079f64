"""
Deck API endpoints.

The deck itself is client-held state: every request carries the current
card list and every response returns the new one. The server applies the
deck rules, imports deck lists, and renders exports.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pocketdeck.api.cards import CardModel
from pocketdeck.api.dependencies import get_catalog
from pocketdeck.config import MAX_DECK_SIZE
from pocketdeck.models.deck import Deck
from pocketdeck.models.failure import DeckValidationError, FailureDetail
from pocketdeck.services.card_catalog import CardCatalog
from pocketdeck.services.deck_builder import add_card, count_categories, group_deck, remove_card
from pocketdeck.services.deck_formatter import export_deck_detailed, export_deck_text
from pocketdeck.services.deck_import import import_deck_list

router = APIRouter(prefix="/api/deck", tags=["decks"])


class DeckRequest(BaseModel):
    """Request carrying the client's current deck."""

    cards: list[CardModel] = Field(default_factory=list)

    def to_deck(self) -> Deck:
        return Deck(cards=[card.to_card() for card in self.cards])


class AddCardRequest(DeckRequest):
    """Request to add one copy of a card."""

    card: CardModel


class RemoveCardRequest(DeckRequest):
    """Request to remove one copy of a card."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    set_id: str
    card_id: str


class ExportRequest(DeckRequest):
    """Request to render a deck export."""

    detailed: bool = False


class DeckImportRequest(BaseModel):
    """Request to import a deck list."""

    text: str = Field(
        ...,
        description="Deck list, one '<count> <name> <set id> <card id>' per line",
        examples=["Pokémon: 3\n2 Pikachu ex A1 96\n1 Zapdos ex A1 104"],
    )


class DeckResponse(BaseModel):
    """Response model for a deck."""

    cards: list[CardModel]
    count: int


class DeckImportResponse(DeckResponse):
    """Response model for an imported deck."""

    truncated: int = 0


class DeckEntryModel(BaseModel):
    """A grouped deck line."""

    card: CardModel
    count: int


class DeckSummaryResponse(BaseModel):
    """Grouped view of a deck with category counts."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total: int
    max_size: int = MAX_DECK_SIZE
    entries: list[DeckEntryModel]
    categories: dict[str, int]


class ExportResponse(BaseModel):
    """Rendered deck export."""

    text: str


def _deck_response(deck: Deck) -> DeckResponse:
    return DeckResponse(cards=[CardModel.from_card(card) for card in deck], count=len(deck))


def _rule_violation(error: DeckValidationError, status_code: int) -> HTTPException:
    detail: FailureDetail = error.to_detail()
    return HTTPException(status_code=status_code, detail=detail.model_dump())


@router.post("/add", response_model=DeckResponse, responses={409: {"model": FailureDetail}})
async def add_to_deck(request: AddCardRequest) -> DeckResponse:
    """
    Add one copy of a card to the deck.

    Returns 409 if the deck already holds 4 copies or 60 cards.
    """
    try:
        deck = add_card(request.to_deck(), request.card.to_card())
    except DeckValidationError as e:
        raise _rule_violation(e, status.HTTP_409_CONFLICT) from e

    return _deck_response(deck)


@router.post("/remove", response_model=DeckResponse)
async def remove_from_deck(request: RemoveCardRequest) -> DeckResponse:
    """Remove one copy of a card from the deck."""
    deck = remove_card(request.to_deck(), request.set_id, request.card_id)
    return _deck_response(deck)


@router.post("/summary", response_model=DeckSummaryResponse)
async def summarize_deck(request: DeckRequest) -> DeckSummaryResponse:
    """Group the deck by card and count cards per category."""
    deck = request.to_deck()

    return DeckSummaryResponse(
        total=len(deck),
        entries=[
            DeckEntryModel(card=CardModel.from_card(entry.card), count=entry.count)
            for entry in group_deck(deck)
        ],
        categories=count_categories(deck),
    )


@router.post("/export", response_model=ExportResponse)
async def export_deck(request: ExportRequest) -> ExportResponse:
    """Render the deck as a deck list, or as a detailed attribute dump."""
    deck = request.to_deck()

    if request.detailed:
        return ExportResponse(text=export_deck_detailed(deck))

    return ExportResponse(text=export_deck_text(deck))


@router.post(
    "/import",
    response_model=DeckImportResponse,
    responses={422: {"model": FailureDetail}},
)
async def import_deck(
    request: DeckImportRequest,
    catalog: Annotated[CardCatalog, Depends(get_catalog)],
) -> DeckImportResponse:
    """
    Import a deck list, fetching every card's details.

    Decks over 60 cards are cut to the first 60; `truncated` reports how
    many cards were dropped. Returns 422 for malformed deck lists or cards
    that cannot be fetched.
    """
    try:
        result = await import_deck_list(request.text, catalog)
    except DeckValidationError as e:
        raise _rule_violation(e, status.HTTP_422_UNPROCESSABLE_ENTITY) from e

    return DeckImportResponse(
        cards=[CardModel.from_card(card) for card in result.deck],
        count=len(result.deck),
        truncated=result.truncated,
    )
