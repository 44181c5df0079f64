"""
Parser for plain-text deck lists.

Deck list format:
    <count> <card name> <set id> <card id>

Example:
    Pokémon: 5
    2 Pikachu ex A2b 22
    1 Charizard ex A2b 10
    2 Bulbasaur A1 1
    Trainer: 0

Section headers ("Pokémon: 5") and blank lines are skipped.
"""

import logging
import re
from dataclasses import dataclass

from pocketdeck.models.failure import DeckRule, DeckValidationError

logger = logging.getLogger(__name__)

# Pattern: "2 Pikachu ex A2b 22"
# Groups: (count, card_name, set_id, card_id)
DECK_LINE_PATTERN = re.compile(r"^(\d+)\s+(.*?)\s+([A-Za-z0-9-]+)\s+(\d+)$")


@dataclass(frozen=True, slots=True)
class DeckListEntry:
    """One card line of a deck list."""

    count: int
    name: str
    set_id: str
    card_id: str
    line_number: int = 0


def is_section_header(line: str) -> bool:
    """Section headers carry a colon and do not start with a count."""
    return ":" in line and not line[:1].isdigit()


def parse_deck_list(text: str) -> list[DeckListEntry]:
    """
    Parse deck list text into entries, one per card line.

    Args:
        text: Raw deck list (clipboard paste)

    Returns:
        Entries in input order. Duplicate lines are kept as separate entries.

    Raises:
        DeckValidationError: MALFORMED_LINE for a line that is neither a
            header nor a card line; EMPTY_IMPORT when no card line exists.
    """
    entries: list[DeckListEntry] = []

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()

        if not line:
            continue

        if is_section_header(line):
            logger.debug("Line %d: skipping section header %r", line_number, line)
            continue

        match = DECK_LINE_PATTERN.match(line)
        if not match:
            raise DeckValidationError(
                DeckRule.MALFORMED_LINE,
                f"Line {line_number} is not a valid card entry: {line!r}",
                detail="Expected '<count> <name> <set id> <card id>', e.g. '2 Pikachu ex A2b 22'",
            )

        count, name, set_id, card_id = match.groups()
        logger.debug(
            "Line %d: count=%s name=%r set=%s card=%s", line_number, count, name, set_id, card_id
        )
        entries.append(
            DeckListEntry(
                count=int(count),
                name=name.strip(),
                set_id=set_id,
                card_id=card_id,
                line_number=line_number,
            )
        )

    if not entries:
        raise DeckValidationError(
            DeckRule.EMPTY_IMPORT,
            "No valid card entries found. Please check the format of your deck list.",
        )

    return entries
