"""
Limitless TCG Pocket card database scraper.

Fetches card detail, search, browse, per-set and sets-index pages from
pocket.limitlesstcg.com and turns them into card records.

Only the detail page yields a full record; listing pages yield partial
records (name, type, image and ids) that need a detail fetch later.

Note: Web scraping is inherently fragile. Page structure may change.
Regions are located by the site's class names below.
"""

import logging
import re

import httpx
from bs4 import BeautifulSoup, Tag
from bs4.builder import ParserRejectedMarkup

from pocketdeck.models.card import POKEMON, CardSet, PokemonCard
from pocketdeck.models.failure import NetworkError, ParseError
from pocketdeck.parsers.attacks import collect_attack_fragments, extract_attacks, resolve_attacks
from pocketdeck.parsers.card_text import parse_card_text

logger = logging.getLogger(__name__)

CARD_DETAILS_SELECTOR = ".card-details"
CARD_IMAGE_SELECTOR = ".card-image img"
CARD_RARITY_SELECTOR = ".card-rarity"
SEARCH_GRID_SELECTOR = ".card-search-grid"
BROWSE_RESULT_SELECTOR = ".card-browse-result"
SET_RESULT_SELECTOR = ".card-set-result"
SET_ITEM_SELECTOR = ".set-item"

UNKNOWN_RARITY = "Unknown"

# "/cards/A1/96" -> ("A1", "96")
CARD_HREF_PATTERN = re.compile(r"/cards/([^/?#]+)/([^/?#]+)")

# "/sets/A1" -> "A1"
SET_HREF_PATTERN = re.compile(r"/sets/([^/?#]+)")


def card_path(set_id: str, card_id: str) -> str:
    return f"/cards/{set_id}/{card_id}"


async def fetch_page(
    client: httpx.AsyncClient,
    path: str,
    params: dict[str, str | int] | None = None,
) -> str:
    """
    Fetch one page from the card database site.

    Args:
        client: httpx client configured with the site base URL
        path: Page path (e.g. "/cards/A1/96")
        params: Optional query parameters

    Returns:
        Raw HTML content

    Raises:
        NetworkError: If the request fails or returns a non-success status
    """
    try:
        response = await client.get(path, params=params)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise NetworkError(
            f"Failed to fetch {path}: HTTP {e.response.status_code}",
            url=path,
            status_code=e.response.status_code,
        ) from e
    except httpx.RequestError as e:
        raise NetworkError(f"Failed to fetch {path}: {e}", url=path) from e
    except httpx.InvalidURL as e:
        raise NetworkError(f"Invalid URL for {path!r}: {e}", url=path) from e

    return response.text


def make_soup(html: str, url: str | None = None) -> BeautifulSoup:
    """
    Parse HTML into a document tree.

    Raises:
        ParseError: If the parser rejects the markup
    """
    try:
        return BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as e:
        raise ParseError(f"Failed to parse HTML: {e}", url=url) from e


# =============================================================================
# CARD DETAIL PAGE
# =============================================================================


def parse_card_page(html: str, set_id: str, card_id: str) -> PokemonCard:
    """
    Build a full card record from a card detail page.

    Combines the description text fields with the structured attack
    fragments; structured attacks win when the page has any.

    Args:
        html: Raw HTML content from the detail page
        set_id: Set id the page was fetched for
        card_id: Card id the page was fetched for

    Returns:
        Fully populated PokemonCard

    Raises:
        ParseError: If the page has no card description block
    """
    path = card_path(set_id, card_id)
    soup = make_soup(html, path)

    details = soup.select_one(CARD_DETAILS_SELECTOR)
    if details is None:
        raise ParseError(f"No {CARD_DETAILS_SELECTOR} block on {path}", url=path, missing_region=True)

    fields = parse_card_text(details.get_text(" ", strip=True))
    structured = extract_attacks(collect_attack_fragments(soup))

    image = soup.select_one(CARD_IMAGE_SELECTOR)
    rarity = soup.select_one(CARD_RARITY_SELECTOR)

    return PokemonCard(
        set_id=set_id,
        card_id=card_id,
        name=fields.name,
        image_url=_attr(image, "src"),
        type=fields.type,
        hp=fields.hp,
        category=fields.category,
        stage=fields.stage,
        rarity=_text(rarity) or UNKNOWN_RARITY,
        attacks=resolve_attacks(fields.attacks, structured),
        weakness=fields.weakness,
        resistance=fields.resistance,
        retreat_cost=fields.retreat_cost,
        special_rule=fields.special_rule,
        illustrator=fields.illustrator,
    )


async def fetch_card_page(client: httpx.AsyncClient, set_id: str, card_id: str) -> PokemonCard:
    """
    Fetch and parse a card detail page.

    Raises:
        NetworkError: If the page cannot be fetched
        ParseError: If the page has no card description block
    """
    html = await fetch_page(client, card_path(set_id, card_id))
    return parse_card_page(html, set_id, card_id)


# =============================================================================
# LISTING PAGES
# =============================================================================


def parse_search_page(html: str) -> list[PokemonCard]:
    """
    Parse partial card records from a search results page.

    Each anchor in the results grid links to a card detail page; the card
    name comes from the thumbnail alt text.

    Raises:
        ParseError: If the page has no results grid
    """
    soup = make_soup(html, "/cards")

    grid = soup.select_one(SEARCH_GRID_SELECTOR)
    if grid is None:
        raise ParseError(f"No {SEARCH_GRID_SELECTOR} on search page", url="/cards", missing_region=True)

    cards: list[PokemonCard] = []
    for anchor in grid.select("a"):
        href = _attr(anchor, "href")
        match = CARD_HREF_PATTERN.search(href)
        if not match:
            logger.warning("Could not parse card URL: %s", href)
            continue

        image = anchor.select_one("img")
        cards.append(
            _partial_card(
                set_id=match.group(1),
                card_id=match.group(2),
                name=_attr(image, "alt"),
                card_type="",
                image_url=_attr(image, "src"),
            )
        )

    logger.info("Found %d card anchors in search results", len(cards))
    return cards


def parse_browse_page(html: str) -> list[PokemonCard]:
    """Parse partial card records from the browse-all listing."""
    soup = make_soup(html, "/cards")

    cards: list[PokemonCard] = []
    for element in soup.select(BROWSE_RESULT_SELECTOR):
        match = CARD_HREF_PATTERN.search(_attr(element.select_one("a"), "href"))
        if not match:
            continue

        cards.append(_listing_card(element, set_id=match.group(1), card_id=match.group(2)))

    return cards


def parse_set_page(html: str, set_id: str) -> list[PokemonCard]:
    """
    Parse partial card records from a per-set listing.

    The set id is taken from the request, the card id from each link.
    """
    soup = make_soup(html, "/cards")

    cards: list[PokemonCard] = []
    for element in soup.select(SET_RESULT_SELECTOR):
        match = CARD_HREF_PATTERN.search(_attr(element.select_one("a"), "href"))
        if not match:
            continue

        cards.append(_listing_card(element, set_id=set_id, card_id=match.group(2)))

    return cards


def parse_sets_page(html: str) -> list[CardSet]:
    """Parse the sets index into CardSet records."""
    soup = make_soup(html, "/sets")

    sets: list[CardSet] = []
    for element in soup.select(SET_ITEM_SELECTOR):
        match = SET_HREF_PATTERN.search(_attr(element.select_one("a"), "href"))
        if not match:
            continue

        sets.append(CardSet(id=match.group(1), name=_text(element.select_one(".set-name"))))

    return sets


async def fetch_search_results(client: httpx.AsyncClient, query: str) -> list[PokemonCard]:
    """Fetch the site search page for `query` and parse its partial records."""
    html = await fetch_page(client, "/cards", params={"q": query})
    return parse_search_page(html)


async def fetch_browse_page(client: httpx.AsyncClient, page: int, limit: int) -> list[PokemonCard]:
    """Fetch one page of the browse-all listing."""
    html = await fetch_page(client, "/cards", params={"page": page, "limit": limit})
    return parse_browse_page(html)


async def fetch_set_cards(client: httpx.AsyncClient, set_id: str) -> list[PokemonCard]:
    """Fetch the listing of every card in a set."""
    html = await fetch_page(client, "/cards", params={"set": set_id})
    return parse_set_page(html, set_id)


async def fetch_sets(client: httpx.AsyncClient) -> list[CardSet]:
    """Fetch the sets index."""
    html = await fetch_page(client, "/sets")
    return parse_sets_page(html)


# =============================================================================
# HELPERS
# =============================================================================


def _listing_card(element: Tag, set_id: str, card_id: str) -> PokemonCard:
    return _partial_card(
        set_id=set_id,
        card_id=card_id,
        name=_text(element.select_one(".card-name")),
        card_type=_text(element.select_one(".card-type")),
        image_url=_attr(element.select_one("img"), "src"),
    )


def _partial_card(
    set_id: str, card_id: str, name: str, card_type: str, image_url: str
) -> PokemonCard:
    """Listing pages carry no deep attributes; those stay at their partial defaults."""
    return PokemonCard(
        set_id=set_id,
        card_id=card_id,
        name=name,
        image_url=image_url,
        type=card_type,
        hp=0,
        category=POKEMON,
        rarity="",
        attacks=[],
        retreat_cost=0,
    )


def _text(tag: Tag | None) -> str:
    if tag is None:
        return ""
    return " ".join(tag.get_text(" ", strip=True).split())


def _attr(tag: Tag | None, name: str) -> str:
    if tag is None:
        return ""
    value = tag.get(name)
    if isinstance(value, list):
        return " ".join(value)
    return value or ""
