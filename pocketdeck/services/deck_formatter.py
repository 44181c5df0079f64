"""
Deck export rendering.

Two formats:
- Text export: the plain deck list, importable again by parsers.deck_list.
- Detailed export: a readable dump of every card's attributes.

Both group cards by (set_id, card_id) and list categories in the fixed
order Pokémon, Trainer, Energy. Cards of any other category are left out.
"""

from pocketdeck.config import DECK_CATEGORIES, MAX_DECK_SIZE
from pocketdeck.models.card import Attack, PokemonCard
from pocketdeck.models.deck import Deck, DeckEntry
from pocketdeck.services.deck_builder import count_categories, group_deck

DETAILED_SECTION_TITLES = {
    "Pokémon": "POKÉMON",
    "Trainer": "TRAINER CARDS",
    "Energy": "ENERGY CARDS",
}

DIVIDER = "---"


def export_deck_text(deck: Deck) -> str:
    """
    Render the deck as a plain deck list.

    Example:
        Pokémon: 3
        2 Pikachu ex A1 96
        1 Zapdos ex A1 104

        Trainer: 0

        Energy: 0
    """
    grouped = group_deck(deck)
    blocks: list[str] = []

    for category in DECK_CATEGORIES:
        entries = _entries_in(grouped, category)
        lines = [f"{category}: {sum(entry.count for entry in entries)}"]
        lines.extend(_format_entry_line(entry) for entry in entries)
        blocks.append("\n".join(lines) + "\n")

    return "\n".join(blocks)


def export_deck_detailed(deck: Deck) -> str:
    """
    Render the deck with every card's attributes.

    The Pokémon section is always present; the Trainer and Energy sections
    appear only when the deck has cards in them. Each card group is its own
    block, closed by a divider.
    """
    counts = count_categories(deck)
    grouped = group_deck(deck)

    parts: list[str] = ["# DETAILED DECK LIST\n\n"]
    parts.append(f"Total Cards: {len(deck)}/{MAX_DECK_SIZE}\n")
    for category in DECK_CATEGORIES:
        parts.append(f"{category}: {counts.get(category, 0)}\n")
    parts.append("\n")

    for category in DECK_CATEGORIES:
        entries = _entries_in(grouped, category)
        if not entries and category != "Pokémon":
            continue

        parts.append(f"## {DETAILED_SECTION_TITLES[category]}\n\n")
        for entry in entries:
            parts.append(_format_card_block(entry))

    return "".join(parts)


def _entries_in(grouped: list[DeckEntry], category: str) -> list[DeckEntry]:
    return [entry for entry in grouped if entry.card.category == category]


def _format_entry_line(entry: DeckEntry) -> str:
    card = entry.card
    return f"{entry.count} {card.name} {card.set_id} {card.card_id}"


def _format_card_block(entry: DeckEntry) -> str:
    card = entry.card
    lines = [f"### {entry.count}x {card.name} ({card.set_id} {card.card_id})", ""]

    if card.type:
        lines.append(f"Type: {card.type}")
    if card.hp:
        lines.append(f"HP: {card.hp}")
    if card.stage:
        lines.append(f"Stage: {card.stage}")
    if card.rarity:
        lines.append(f"Rarity: {card.rarity}")

    if card.attacks:
        lines.append("")
        lines.append("Attacks:")
        for attack in card.attacks:
            lines.extend(_format_attack(attack))

    lines.extend(_format_battle_stats(card))

    if card.special_rule:
        lines.append("")
        lines.append(f"Special Rule: {card.special_rule}")
    if card.illustrator:
        lines.append(f"Illustrated by: {card.illustrator}")

    lines.extend(["", DIVIDER, "", ""])
    return "\n".join(lines)


def _format_attack(attack: Attack) -> list[str]:
    line = f"- {attack.name} ({attack.energy_requirement})"
    if attack.damage:
        line += f" - {attack.damage} damage"

    lines = [line]
    if attack.effect:
        lines.append(f"  Effect: {attack.effect}")
    return lines


def _format_battle_stats(card: PokemonCard) -> list[str]:
    """Weakness, resistance and retreat cost, preceded by a blank line."""
    lines = [""]
    if card.weakness:
        lines.append(f"Weakness: {card.weakness}")
    if card.resistance:
        lines.append(f"Resistance: {card.resistance}")
    lines.append(f"Retreat Cost: {card.retreat_cost}")
    return lines
