import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pocketdeck.api import cards_router, decks_router, health_router
from pocketdeck.config import settings
from pocketdeck.services.card_cache import CardCache
from pocketdeck.services.card_catalog import CardCatalog, create_http_client


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler: one HTTP client and one card cache per process."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    async with create_http_client() as client:
        app.state.catalog = CardCatalog(client, CardCache())
        yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("pocketdeck"),
    debug=settings.debug,
    lifespan=lifespan,
)

app.include_router(cards_router)
app.include_router(decks_router)
app.include_router(health_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
