"""
Structured attack extraction from card detail page fragments.

Each attack on the detail page is an "attack info" element (energy cost,
name, damage) with an optional "attack effect" element beside it:

    <div class="card-text-attack">
      <p class="card-text-attack-info">
        <span class="ptcg-symbol">LLL</span> Thunderbolt 150
      </p>
      <p class="card-text-attack-effect">Discard all Energy from this Pokémon.</p>
    </div>

Info and effect elements are paired once, at page parsing time, into
AttackFragment records. Attacks built from these fragments take precedence
over the single attack guessed from the description text.

Without an .attack-name element the name is the info text minus its
trailing damage and minus a leading run of energy letters, so
"LLL Thunderbolt 150" is named "Thunderbolt". The energy letters are
already recorded as the energy requirement.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass

from bs4 import Tag

from pocketdeck.models.card import Attack
from pocketdeck.parsers.energy import ENERGY_RUN_PATTERN, energy_from_image, find_energy_run

ATTACK_CONTAINER_SELECTOR = ".card-text-attack"
ATTACK_INFO_SELECTOR = ".card-text-attack-info"
ATTACK_EFFECT_SELECTOR = ".card-text-attack-effect"
ATTACK_NAME_SELECTOR = ".attack-name"
ENERGY_IMAGE_SELECTOR = "img.energy-symbol"

TRAILING_DAMAGE_PATTERN = re.compile(r"(\d+)$")


@dataclass(frozen=True)
class AttackFragment:
    """An attack info element and the effect element that belongs to it (if any)."""

    info: Tag
    effect: Tag | None = None


def collect_attack_fragments(root: Tag) -> list[AttackFragment]:
    """
    Pair every attack info element in `root` with its effect element.

    When attacks are wrapped in per-attack containers, pairing happens
    within each container, so an attack without effect text cannot borrow
    the next attack's effect. Otherwise info and effect elements are paired
    by position.
    """
    fragments: list[AttackFragment] = []

    containers = root.select(ATTACK_CONTAINER_SELECTOR)
    for container in containers:
        info = container.select_one(ATTACK_INFO_SELECTOR)
        if info is None:
            continue
        fragments.append(AttackFragment(info=info, effect=container.select_one(ATTACK_EFFECT_SELECTOR)))

    if fragments:
        return fragments

    return pair_attack_fragments(
        root.select(ATTACK_INFO_SELECTOR),
        root.select(ATTACK_EFFECT_SELECTOR),
    )


def pair_attack_fragments(infos: Sequence[Tag], effects: Sequence[Tag]) -> list[AttackFragment]:
    """
    Pair info and effect elements by position.

    An info element without an effect at the same index gets effect=None.
    Surplus effect elements are ignored.
    """
    return [
        AttackFragment(info=info, effect=effects[i] if i < len(effects) else None)
        for i, info in enumerate(infos)
    ]


def extract_attacks(fragments: Sequence[AttackFragment]) -> list[Attack]:
    """
    Build one Attack per fragment, in page order.

    Args:
        fragments: Paired attack fragments from collect_attack_fragments

    Returns:
        List of attacks (empty when the page has no attack fragments)
    """
    return [_extract_attack(fragment) for fragment in fragments]


def resolve_attacks(text_attacks: list[Attack], structured: list[Attack]) -> list[Attack]:
    """Structured attacks replace the text guess unless there are none."""
    return structured if structured else text_attacks


def _extract_attack(fragment: AttackFragment) -> Attack:
    info = fragment.info
    raw_text = " ".join(info.get_text(" ", strip=True).split())

    damage_match = TRAILING_DAMAGE_PATTERN.search(raw_text)
    damage = damage_match.group(1) if damage_match else ""

    energy_images = info.select(ENERGY_IMAGE_SELECTOR)
    if energy_images:
        energy = "".join(
            energy_from_image(_attr(img, "src"), _attr(img, "alt")) for img in energy_images
        )
    else:
        energy = find_energy_run(raw_text)

    effect = ""
    if fragment.effect is not None:
        effect = " ".join(fragment.effect.get_text(" ", strip=True).split())

    return Attack(
        name=_attack_name(info, raw_text),
        damage=damage,
        effect=effect,
        energy_requirement=energy,
    )


def _attack_name(info: Tag, raw_text: str) -> str:
    """
    Name from the dedicated name element, else from the info text.

    The info text fallback drops the trailing damage and any leading energy
    symbol run rendered as letters.
    """
    name_element = info.select_one(ATTACK_NAME_SELECTOR)
    if name_element is not None:
        name = name_element.get_text(" ", strip=True)
        if name:
            return name

    name = TRAILING_DAMAGE_PATTERN.sub("", raw_text).strip()
    leading = ENERGY_RUN_PATTERN.match(name)
    if leading and leading.end() < len(name):
        name = name[leading.end() :].strip()

    return name


def _attr(tag: Tag, name: str) -> str:
    value = tag.get(name)
    if isinstance(value, list):
        return " ".join(value)
    return value or ""
