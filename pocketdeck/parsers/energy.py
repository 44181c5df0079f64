"""
Energy symbol decoding.

The card database renders energy costs either as images (one <img> per
energy unit) or as runs of single-letter codes set in a symbol font, e.g.
"LLC" for two Lightning and one Colorless. Both are normalized to the
letter codes below.

Codes: L (Lightning), F (Fire and Fighting), W (Water), G (Grass),
P (Psychic), D (Darkness), M (Metal), C (Colorless).
"""

import re

ENERGY_CODES = frozenset("LFWGPDMC")

# Fallback code for images that match no keyword
DEFAULT_ENERGY_CODE = "C"

# Checked in order; first keyword found in src or alt wins.
# Fire and Fighting share "F" on the site.
_IMAGE_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("lightning", "L"),
    ("fire", "F"),
    ("water", "W"),
    ("grass", "G"),
    ("psychic", "P"),
    ("fighting", "F"),
    ("darkness", "D"),
    ("metal", "M"),
    ("colorless", "C"),
)

# A standalone run of energy letters: "LLC" matches, the "L" in "Leaf" does not
ENERGY_RUN_PATTERN = re.compile(r"(?<![A-Za-z])([LFWGPDMC]+)(?![A-Za-z])")


def energy_from_image(src: str | None, alt: str | None) -> str:
    """
    Decode an energy symbol image to its letter code.

    Matches keywords case-insensitively against the image src and alt text.

    Args:
        src: Image src attribute (e.g. ".../energy/lightning.png")
        alt: Image alt text (e.g. "Lightning Energy")

    Returns:
        One-letter energy code. Unrecognized images decode to "C".
    """
    haystack = f"{src or ''} {alt or ''}".lower()

    for keyword, code in _IMAGE_KEYWORDS:
        if keyword in haystack:
            return code

    return DEFAULT_ENERGY_CODE


def energy_from_text(run: str) -> str:
    """
    Normalize a run of energy letters.

    A run made only of valid codes is returned unchanged; any other
    character is dropped.
    """
    return "".join(ch for ch in run if ch in ENERGY_CODES)


def find_energy_run(text: str) -> str:
    """
    Find the first standalone run of energy letters in text.

    Returns:
        The run (e.g. "LLC"), or "" when the text holds none.
    """
    match = ENERGY_RUN_PATTERN.search(text)
    return energy_from_text(match.group(1)) if match else ""
