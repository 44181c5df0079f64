from pocketdeck.parsers.attacks import (
    AttackFragment,
    collect_attack_fragments,
    extract_attacks,
    pair_attack_fragments,
    resolve_attacks,
)
from pocketdeck.parsers.card_text import CardTextFields, parse_card_text
from pocketdeck.parsers.deck_list import DeckListEntry, parse_deck_list
from pocketdeck.parsers.energy import energy_from_image, energy_from_text, find_energy_run

__all__ = [
    "AttackFragment",
    "CardTextFields",
    "DeckListEntry",
    "collect_attack_fragments",
    "energy_from_image",
    "energy_from_text",
    "extract_attacks",
    "find_energy_run",
    "pair_attack_fragments",
    "parse_card_text",
    "parse_deck_list",
    "resolve_attacks",
]
