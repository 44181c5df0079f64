"""
Card catalog API endpoints.

Search, card details, browse listing and sets. JSON field names are
camelCase (setId, imageUrl, retreatCost, ...) to match the deck builder UI.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pocketdeck.api.dependencies import get_catalog
from pocketdeck.config import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT
from pocketdeck.models.card import POKEMON, Attack, CardSet, PokemonCard
from pocketdeck.models.failure import FailureDetail
from pocketdeck.services.card_catalog import CardCatalog

router = APIRouter(prefix="/api", tags=["cards"])


class AttackModel(BaseModel):
    """One attack on a card."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    damage: str = ""
    effect: str = ""
    energy_requirement: str = ""


class CardModel(BaseModel):
    """A card record as exchanged with the UI."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    card_id: str = Field(..., alias="id")
    set_id: str
    name: str = ""
    image_url: str = ""
    type: str = ""
    hp: int = Field(default=0, ge=0)
    category: str = POKEMON
    stage: str | None = None
    rarity: str = ""
    attacks: list[AttackModel] = Field(default_factory=list)
    weakness: str | None = None
    resistance: str | None = None
    retreat_cost: int = Field(default=0, ge=0)
    special_rule: str | None = None
    illustrator: str | None = None

    @classmethod
    def from_card(cls, card: PokemonCard) -> "CardModel":
        return cls(
            card_id=card.card_id,
            set_id=card.set_id,
            name=card.name,
            image_url=card.image_url,
            type=card.type,
            hp=card.hp,
            category=card.category,
            stage=card.stage,
            rarity=card.rarity,
            attacks=[
                AttackModel(
                    name=attack.name,
                    damage=attack.damage,
                    effect=attack.effect,
                    energy_requirement=attack.energy_requirement,
                )
                for attack in card.attacks
            ],
            weakness=card.weakness,
            resistance=card.resistance,
            retreat_cost=card.retreat_cost,
            special_rule=card.special_rule,
            illustrator=card.illustrator,
        )

    def to_card(self) -> PokemonCard:
        return PokemonCard(
            set_id=self.set_id,
            card_id=self.card_id,
            name=self.name,
            image_url=self.image_url,
            type=self.type,
            hp=self.hp,
            category=self.category,
            stage=self.stage,
            rarity=self.rarity,
            attacks=[
                Attack(
                    name=attack.name,
                    damage=attack.damage,
                    effect=attack.effect,
                    energy_requirement=attack.energy_requirement,
                )
                for attack in self.attacks
            ],
            weakness=self.weakness,
            resistance=self.resistance,
            retreat_cost=self.retreat_cost,
            special_rule=self.special_rule,
            illustrator=self.illustrator,
        )


class SetModel(BaseModel):
    """A card set."""

    id: str
    name: str

    @classmethod
    def from_set(cls, card_set: CardSet) -> "SetModel":
        return cls(id=card_set.id, name=card_set.name)


@router.get("/search", response_model=list[CardModel])
async def search_cards(
    catalog: Annotated[CardCatalog, Depends(get_catalog)],
    q: str = "",
) -> list[CardModel]:
    """
    Search cards by name or type.

    Returns site search results, or cached matches when the site has none.
    An empty query returns an empty list.
    """
    cards = await catalog.search_cards(q)
    return [CardModel.from_card(card) for card in cards]


@router.get(
    "/card/{set_id}/{card_id}",
    response_model=CardModel,
    responses={404: {"model": FailureDetail}},
)
async def get_card(
    set_id: str,
    card_id: str,
    catalog: Annotated[CardCatalog, Depends(get_catalog)],
) -> CardModel:
    """
    Get a card's full details from its detail page.

    Returns 404 if the card cannot be fetched.
    """
    result = await catalog.lookup_card(set_id, card_id)

    if result.value is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=FailureDetail(
                kind=result.kind.value if result.kind else "not_found",
                message="Card not found",
                detail=result.detail,
            ).model_dump(),
        )

    return CardModel.from_card(result.value)


@router.get("/cards", response_model=list[CardModel])
async def get_all_cards(
    catalog: Annotated[CardCatalog, Depends(get_catalog)],
    page: Annotated[int, Query(ge=1)] = DEFAULT_PAGE,
    limit: Annotated[int, Query(ge=1, le=100)] = DEFAULT_PAGE_LIMIT,
) -> list[CardModel]:
    """
    Browse all cards, one page at a time.

    Records are partial (no HP, attacks or rarity).
    """
    cards = await catalog.get_all_cards(page=page, limit=limit)
    return [CardModel.from_card(card) for card in cards]


@router.get("/sets", response_model=list[SetModel])
async def get_all_sets(
    catalog: Annotated[CardCatalog, Depends(get_catalog)],
) -> list[SetModel]:
    """List all card sets."""
    sets = await catalog.get_all_sets()
    return [SetModel.from_set(card_set) for card_set in sets]


@router.get("/sets/{set_id}", response_model=list[CardModel])
async def get_cards_by_set(
    set_id: str,
    catalog: Annotated[CardCatalog, Depends(get_catalog)],
) -> list[CardModel]:
    """
    List every card in a set.

    Records are partial (no HP, attacks or rarity).
    """
    cards = await catalog.get_cards_by_set(set_id)
    return [CardModel.from_card(card) for card in cards]
