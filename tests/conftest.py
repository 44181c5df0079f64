from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from pocketdeck.models.card import Attack, PokemonCard
from pocketdeck.services.card_cache import CardCache
from pocketdeck.services.card_catalog import CardCatalog

SITE_URL = "https://pocket.limitlesstcg.com"

FIXTURES_DIR = Path(__file__).parent / "fixtures"

PIKACHU_EX_TEXT = (
    "Pikachu ex - Lightning - 120 HP Pokémon - Basic LLL Thunderbolt 150 "
    "Discard all Energy from this Pokémon. Weakness: Fighting Retreat: 1 "
    "ex rule: When your Pokémon ex is Knocked Out, your opponent gets 2 points. "
    "Illustrated by PLANETA Igarashi"
)


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


def detail_page(description: str, image_url: str = "", rarity: str | None = None) -> str:
    """Minimal card detail page with only a description block."""
    rarity_html = f'<span class="card-rarity">{rarity}</span>' if rarity else ""
    return (
        "<html><body>"
        f'<div class="card-image"><img src="{image_url}"></div>'
        f'<div class="card-details">{description}</div>'
        f"{rarity_html}"
        "</body></html>"
    )


def _make_card(
    set_id: str = "A1",
    card_id: str = "1",
    name: str = "Bulbasaur",
    category: str = "Pokémon",
    **overrides,
) -> PokemonCard:
    """Card record factory for deck and cache tests."""
    return PokemonCard(set_id=set_id, card_id=card_id, name=name, category=category, **overrides)


@pytest.fixture
def pikachu_ex_text() -> str:
    return PIKACHU_EX_TEXT


@pytest.fixture
def pikachu_detail_html() -> str:
    return detail_page(PIKACHU_EX_TEXT, image_url="/pocket/A1/A1_096_EN.webp", rarity="◊◊◊◊")


@pytest.fixture
def pikachu_ex() -> PokemonCard:
    """A fully populated card record."""
    return PokemonCard(
        set_id="A1",
        card_id="96",
        name="Pikachu ex",
        image_url="/pocket/A1/A1_096_EN.webp",
        type="Lightning",
        hp=120,
        category="Pokémon",
        stage="Basic",
        rarity="◊◊◊◊",
        attacks=[
            Attack(
                name="Circle Circuit",
                damage="30",
                effect="This attack does 30 damage for each of your Benched Lightning Pokémon.",
                energy_requirement="LL",
            )
        ],
        weakness="Fighting",
        retreat_cost=1,
        special_rule="When your Pokémon ex is Knocked Out, your opponent gets 2 points.",
        illustrator="PLANETA Mochizuki",
    )


@pytest.fixture
def cache() -> CardCache:
    return CardCache()


@pytest.fixture
async def http_client():
    """HTTP client pointed at the card site; requests are intercepted by respx."""
    async with httpx.AsyncClient(base_url=SITE_URL) as client:
        yield client


@pytest.fixture
def catalog(http_client: httpx.AsyncClient, cache: CardCache) -> CardCatalog:
    return CardCatalog(http_client, cache, search_fetch_details=True)


@pytest.fixture
def load_html() -> Callable[[str], str]:
    """Loader for HTML fixtures in tests/fixtures."""
    return _read_fixture


@pytest.fixture
def make_card() -> Callable[..., PokemonCard]:
    """Card record factory: make_card(set_id, card_id, name, category, **fields)."""
    return _make_card
