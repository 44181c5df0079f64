"""
Field extraction from a card's condensed description text.

The card detail page has a description block whose text content reads like:

    Pikachu ex - Lightning - 120 HP Pokémon - Basic LLL Thunderbolt 150
    Discard all Energy from this Pokémon. Weakness: Fighting Retreat: 1
    ex rule: When your Pokémon ex is Knocked Out, your opponent gets 2 points.
    Illustrated by PLANETA Igarashi

Each field is found by an independent pattern probe. A probe that does not
match leaves its field at the default; this module never raises.

Note: the description text is coupled to one site's layout. Patterns will
need updating if the site changes its markup.
"""

import re
from dataclasses import dataclass, field

from pocketdeck.models.card import POKEMON, Attack
from pocketdeck.parsers.energy import ENERGY_CODES

# "Pikachu ex - Lightning - ..." -> (name, type)
NAME_TYPE_PATTERN = re.compile(r"^(.+?) - (.+?) - ")

# "120 HP"
HP_PATTERN = re.compile(r"(\d+)\s*HP\b")

# Everything after "HP Pokémon - " (stage text, then attacks etc.)
CATEGORY_ANCHOR_PATTERN = re.compile(r"HP\s+Pok[ée]mon\s+-\s+(.*)")

# Labels that start a new field in the description text
FIELD_MARKER_PATTERN = re.compile(r"Ability:|Weakness:|Resistance:|Retreat:|ex rule:|Illustrated by")

# Energy run, attack name (no digits), damage, effect text up to "Weakness:"
# Example: "LLL Thunderbolt 150 Discard all Energy ... Weakness:"
SINGLE_ATTACK_PATTERN = re.compile(
    r"(?<!\S)([LFWGPDMC]+)\s+"  # energy cost
    r"([^\d:]+?)\s+"  # attack name
    r"(\d+)\s*"  # damage
    r"(.*?)\s*Weakness:"  # effect
)

WEAKNESS_PATTERN = re.compile(
    r"Weakness:\s*(.*?)\s*(?=Resistance:|Retreat:|ex rule:|Illustrated by|$)"
)
RESISTANCE_PATTERN = re.compile(
    r"Resistance:\s*(.*?)\s*(?=Weakness:|Retreat:|ex rule:|Illustrated by|$)"
)
RETREAT_PATTERN = re.compile(r"Retreat:\s*(\d+)")
SPECIAL_RULE_PATTERN = re.compile(r"ex rule:\s*(.*?)\s*(?=Illustrated by|$)")
ILLUSTRATOR_PATTERN = re.compile(r"Illustrated by\s+(.+)$")


@dataclass
class CardTextFields:
    """Fields recovered from the description text. Unmatched fields keep their defaults."""

    name: str = ""
    type: str = ""
    hp: int = 0
    category: str = POKEMON
    stage: str | None = None
    attacks: list[Attack] = field(default_factory=list)
    weakness: str | None = None
    resistance: str | None = None
    retreat_cost: int = 0
    special_rule: str | None = None
    illustrator: str | None = None


def parse_card_text(text: str) -> CardTextFields:
    """
    Extract card fields from the condensed description text.

    Args:
        text: Text content of the card description block. Whitespace
              (including newlines) is collapsed before matching.

    Returns:
        CardTextFields with every field that could be found. At most one
        attack is recovered; structured attack fragments should replace it
        when the page has them.
    """
    text = " ".join(text.split())
    fields = CardTextFields()

    match = NAME_TYPE_PATTERN.match(text)
    if match:
        fields.name = match.group(1).strip()
        fields.type = match.group(2).strip()

    match = HP_PATTERN.search(text)
    if match:
        fields.hp = int(match.group(1))

    fields.category, fields.stage = _extract_category_and_stage(text)

    attack = _extract_single_attack(text)
    if attack is not None:
        fields.attacks.append(attack)

    fields.weakness = _optional_group(WEAKNESS_PATTERN, text)
    fields.resistance = _optional_group(RESISTANCE_PATTERN, text)

    match = RETREAT_PATTERN.search(text)
    if match:
        fields.retreat_cost = int(match.group(1))

    fields.special_rule = _optional_group(SPECIAL_RULE_PATTERN, text)
    fields.illustrator = _optional_group(ILLUSTRATOR_PATTERN, text)

    return fields


def _extract_category_and_stage(text: str) -> tuple[str, str | None]:
    """
    Infer (category, stage) from the text after "HP Pokémon - ".

    The captured text runs up to the first energy token or field label.
    "Basic ..." -> ("Pokémon", "Basic"); otherwise two or more words ->
    ("Pokémon", first two words), which covers "Stage 1" and "Stage 2"; a
    single word is taken as the category itself.

    Without the anchor the category defaults to "Pokémon". This is a
    heuristic: trainer and energy descriptions have no HP line and are
    reported as Pokémon.
    """
    match = CATEGORY_ANCHOR_PATTERN.search(text)
    if not match:
        return POKEMON, None

    captured = _leading_stage_text(match.group(1))
    if not captured:
        return POKEMON, None

    words = captured.split()

    # Image-rendered energy costs leave no token between the stage and the
    # first attack name, e.g. "Basic Psychic Sphere 50"
    if words[0] == "Basic":
        return POKEMON, "Basic"

    if len(words) >= 2:
        return POKEMON, f"{words[0]} {words[1]}"

    return captured, None


def _leading_stage_text(rest: str) -> str:
    """Words of `rest` before the first energy token or field label."""
    marker = FIELD_MARKER_PATTERN.search(rest)
    if marker:
        rest = rest[: marker.start()]

    words: list[str] = []
    for word in rest.split():
        if set(word) <= ENERGY_CODES:
            break
        words.append(word)

    return " ".join(words)


def _extract_single_attack(text: str) -> Attack | None:
    """Best-effort guess at one attack from the description text."""
    match = SINGLE_ATTACK_PATTERN.search(text)
    if not match:
        return None

    energy, name, damage, effect = match.groups()
    return Attack(
        name=name.strip(),
        damage=damage,
        effect=effect.strip(),
        energy_requirement=energy,
    )


def _optional_group(pattern: re.Pattern[str], text: str) -> str | None:
    """First group of `pattern` in `text`, stripped; None when absent or empty."""
    match = pattern.search(text)
    if not match:
        return None

    value = match.group(1).strip()
    return value or None
