from dataclasses import dataclass, field

POKEMON = "Pokémon"
TRAINER = "Trainer"
ENERGY = "Energy"


@dataclass(frozen=True, slots=True)
class Attack:
    """
    One attack printed on a card.

    Attributes:
        name: Attack name as printed
        damage: Base damage as numeric text, empty when the attack deals none
        effect: Effect text, empty when the attack has none
        energy_requirement: One energy code per cost unit, in cost order (e.g. "LLC")
    """

    name: str
    damage: str = ""
    effect: str = ""
    energy_requirement: str = ""


@dataclass
class PokemonCard:
    """
    A card record scraped from the card database site.

    Records are identified by (set_id, card_id). A record built from the card
    detail page is fully populated. A record built from a listing, search or
    browse page is partial: hp=0, rarity="", attacks=[], retreat_cost=0.

    Attributes:
        set_id: Set code from the site's URL scheme (e.g. "A1")
        card_id: Card number within the set (e.g. "96")
        name: Card name (e.g. "Pikachu ex")
        image_url: Absolute or site-relative image URL
        type: Energy type label (e.g. "Lightning"), free text
        hp: Hit points, 0 when unknown
        category: "Pokémon", "Trainer", "Energy" or other free text
        stage: Evolution stage (e.g. "Basic", "Stage 1")
        rarity: Rarity label, "Unknown" when the detail page has none
        attacks: Attacks in printed order
        weakness: Weakness text
        resistance: Resistance text
        retreat_cost: Retreat cost, 0 when unknown
        special_rule: Rule box text (the "ex rule")
        illustrator: Illustrator credit
    """

    set_id: str
    card_id: str
    name: str = ""
    image_url: str = ""
    type: str = ""
    hp: int = 0
    category: str = POKEMON
    stage: str | None = None
    rarity: str = ""
    attacks: list[Attack] = field(default_factory=list)
    weakness: str | None = None
    resistance: str | None = None
    retreat_cost: int = 0
    special_rule: str | None = None
    illustrator: str | None = None

    @property
    def key(self) -> tuple[str, str]:
        """Identity of the card: (set_id, card_id)."""
        return (self.set_id, self.card_id)


@dataclass(frozen=True, slots=True)
class CardSet:
    """A card set listed on the sets index page."""

    id: str
    name: str
