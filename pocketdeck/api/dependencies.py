from fastapi import Request

from pocketdeck.services.card_catalog import CardCatalog


def get_catalog(request: Request) -> CardCatalog:
    """The process-wide catalog created in the app lifespan."""
    return request.app.state.catalog
