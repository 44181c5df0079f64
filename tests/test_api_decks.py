"""Tests for deck API endpoints."""

from typing import Any

import httpx
import pytest
import respx
from httpx import ASGITransport, AsyncClient

from pocketdeck.api.dependencies import get_catalog
from pocketdeck.main import app
from pocketdeck.services.card_catalog import CardCatalog

SITE_URL = "https://pocket.limitlesstcg.com"


def card_json(
    set_id: str = "A1", card_id: str = "1", name: str = "Bulbasaur", category: str = "Pokémon"
) -> dict[str, Any]:
    """A card as the UI sends it."""
    return {"id": card_id, "setId": set_id, "name": name, "category": category}


@pytest.fixture
async def client(catalog: CardCatalog):
    """Provide an async test client with the catalog dependency overridden."""
    app.dependency_overrides[get_catalog] = lambda: catalog

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


class TestAddCard:
    @pytest.mark.asyncio
    async def test_adds_card(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/deck/add",
            json={"cards": [card_json()], "card": card_json("A1", "33", "Charmander")},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert [card["name"] for card in data["cards"]] == ["Bulbasaur", "Charmander"]

    @pytest.mark.asyncio
    async def test_copy_limit_conflict(self, client: AsyncClient) -> None:
        """A fifth copy is refused with the violated rule."""
        response = await client.post(
            "/api/deck/add",
            json={"cards": [card_json()] * 4, "card": card_json()},
        )

        assert response.status_code == 409
        assert response.json()["detail"]["kind"] == "copy_limit"

    @pytest.mark.asyncio
    async def test_full_deck_conflict(self, client: AsyncClient) -> None:
        cards = [card_json("A1", str(index // 4 + 1)) for index in range(60)]

        response = await client.post("/api/deck/add", json={"cards": cards, "card": card_json("B1")})

        assert response.status_code == 409
        assert response.json()["detail"]["kind"] == "deck_full"


class TestRemoveCard:
    @pytest.mark.asyncio
    async def test_removes_one_copy(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/deck/remove",
            json={"cards": [card_json(), card_json()], "setId": "A1", "cardId": "1"},
        )

        assert response.status_code == 200
        assert response.json()["count"] == 1


class TestSummary:
    @pytest.mark.asyncio
    async def test_groups_and_counts(self, client: AsyncClient) -> None:
        cards = [
            card_json(),
            card_json("P-A", "7", "Professor's Research", "Trainer"),
            card_json(),
        ]

        response = await client.post("/api/deck/summary", json={"cards": cards})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert data["maxSize"] == 60
        assert [(entry["card"]["name"], entry["count"]) for entry in data["entries"]] == [
            ("Bulbasaur", 2),
            ("Professor's Research", 1),
        ]
        assert data["categories"] == {"Pokémon": 2, "Trainer": 1}


class TestExport:
    @pytest.mark.asyncio
    async def test_text_export(self, client: AsyncClient) -> None:
        response = await client.post("/api/deck/export", json={"cards": [card_json()] * 2})

        assert response.status_code == 200
        assert response.json()["text"] == (
            "Pokémon: 2\n2 Bulbasaur A1 1\n\nTrainer: 0\n\nEnergy: 0\n"
        )

    @pytest.mark.asyncio
    async def test_detailed_export(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/deck/export", json={"cards": [card_json()], "detailed": True}
        )

        assert response.status_code == 200
        text = response.json()["text"]
        assert text.startswith("# DETAILED DECK LIST\n\nTotal Cards: 1/60\n")
        assert "### 1x Bulbasaur (A1 1)" in text


class TestImport:
    @pytest.mark.asyncio
    @respx.mock
    async def test_imports_deck_list(self, client: AsyncClient, pikachu_detail_html: str) -> None:
        respx.get(f"{SITE_URL}/cards/A1/96").mock(
            return_value=httpx.Response(200, text=pikachu_detail_html)
        )

        response = await client.post(
            "/api/deck/import", json={"text": "Pokémon: 2\n2 Pikachu ex A1 96"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert data["truncated"] == 0
        assert data["cards"][0]["hp"] == 120

    @pytest.mark.asyncio
    async def test_malformed_deck_list(self, client: AsyncClient) -> None:
        response = await client.post("/api/deck/import", json={"text": "not a deck"})

        assert response.status_code == 422
        assert response.json()["detail"]["kind"] == "malformed_line"

    @pytest.mark.asyncio
    @respx.mock
    async def test_unavailable_card(self, client: AsyncClient) -> None:
        """A card that cannot be fetched fails the import and is named."""
        respx.get(f"{SITE_URL}/cards/A1/999").mock(return_value=httpx.Response(404))

        response = await client.post("/api/deck/import", json={"text": "1 Missingno A1 999"})

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["kind"] == "card_unavailable"
        assert detail["message"] == "Failed to import card: Missingno (A1 999)"
