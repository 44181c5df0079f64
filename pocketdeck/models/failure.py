"""
Failure classification for the scraping pipeline and the deck rules.

Two families of failure exist:

- Scrape failures (NetworkError, ParseError) happen while fetching and
  parsing pages from the card database site. They are caught at the
  fetcher boundary and turned into empty results, or carried as a
  FetchResult when a caller needs to know what went wrong.
- Deck rule violations (DeckValidationError) are reported synchronously to
  the caller and block the action that triggered them.

A pattern that simply does not match while extracting a field is NOT a
failure. Extractors leave the field at its default.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of scrape failures."""

    # Transport failed (DNS, connection reset, timeout)
    NETWORK = "network"

    # Site answered with a non-success status
    HTTP_STATUS = "http_status"

    # Document tree could not be built
    PARSE = "parse"

    # Page parsed but the expected region is not there
    MISSING_REGION = "missing_region"

    # Anything else raised while fetching or parsing
    UNKNOWN = "unknown"


class DeckRule(str, Enum):
    """Deck rules a mutation or import can violate."""

    COPY_LIMIT = "copy_limit"
    DECK_FULL = "deck_full"
    MALFORMED_LINE = "malformed_line"
    EMPTY_IMPORT = "empty_import"
    CARD_UNAVAILABLE = "card_unavailable"


class FailureDetail(BaseModel):
    """Structured failure payload returned at the API boundary."""

    kind: str = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )


# =============================================================================
# SCRAPE FAILURES
# =============================================================================


class ScrapeError(Exception):
    """Base class for failures while fetching or parsing a site page."""

    def __init__(self, kind: FailureKind, message: str, url: str | None = None):
        self.kind = kind
        self.message = message
        self.url = url
        super().__init__(message)


class NetworkError(ScrapeError):
    """
    Raised when a page cannot be fetched.

    Covers transport failures and non-success HTTP statuses.
    """

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        self.status_code = status_code
        kind = FailureKind.NETWORK if status_code is None else FailureKind.HTTP_STATUS
        super().__init__(kind, message, url)


class ParseError(ScrapeError):
    """Raised when a page cannot be turned into a document or lacks a required region."""

    def __init__(self, message: str, url: str | None = None, missing_region: bool = False):
        kind = FailureKind.MISSING_REGION if missing_region else FailureKind.PARSE
        super().__init__(kind, message, url)


T = TypeVar("T")


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """
    Outcome of a page fetch: either a value or a classified failure.

    Callers branch on `ok` instead of catching exceptions.
    """

    value: T | None = None
    kind: FailureKind | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.kind is None

    @classmethod
    def success(cls, value: T) -> "FetchResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: FailureKind, detail: str | None = None) -> "FetchResult[T]":
        return cls(kind=kind, detail=detail)

    @classmethod
    def from_error(cls, error: ScrapeError) -> "FetchResult[T]":
        return cls(kind=error.kind, detail=error.message)


# =============================================================================
# DECK RULE VIOLATIONS
# =============================================================================


class DeckValidationError(Exception):
    """
    Raised when a deck action violates a deck rule.

    The action is refused as a whole; the deck is left unchanged.
    """

    def __init__(self, rule: DeckRule, message: str, detail: str | None = None):
        self.rule = rule
        self.message = message
        self.detail = detail
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to the structured API payload."""
        return FailureDetail(kind=self.rule.value, message=self.message, detail=self.detail)


class CardImportError(DeckValidationError):
    """
    Raised when a deck-list line names a card whose details cannot be fetched.

    Names the offending card and its deck-list line so the import can report
    which line failed.
    """

    def __init__(
        self,
        name: str,
        set_id: str,
        card_id: str,
        reason: str | None = None,
        line_number: int | None = None,
    ):
        self.name = name
        self.set_id = set_id
        self.card_id = card_id
        self.line_number = line_number
        if line_number is not None:
            reason = f"Line {line_number}: {reason}" if reason else f"Line {line_number}"
        super().__init__(
            DeckRule.CARD_UNAVAILABLE,
            f"Failed to import card: {name} ({set_id} {card_id})",
            detail=reason,
        )
