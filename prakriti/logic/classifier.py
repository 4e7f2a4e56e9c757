"""Prakriti classification from answer tallies.

A single category is assigned when its tally reaches the dominance
threshold, checked in the order Vata, Pitta, Kapha. Otherwise the two
highest tallies form a blended category. Ties are broken by the fixed
category order Vata > Pitta > Kapha, so equal tallies never depend on sort
stability.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

VATA = "Vata"
PITTA = "Pitta"
KAPHA = "Kapha"

# Order doubles as the tie-break order for blended results
CATEGORIES: Tuple[str, ...] = (VATA, PITTA, KAPHA)

DOMINANCE_THRESHOLD = 15

DESCRIPTIONS: Dict[str, str] = {
    VATA: "Your constitution is Vata Prakriti. You are active, quick and creative.",
    PITTA: "Your constitution is Pitta Prakriti. You are intelligent, ambitious and a natural leader.",
    KAPHA: "Your constitution is Kapha Prakriti. You are calm, steady and compassionate.",
}


@dataclass(frozen=True)
class Tally:
    vata: int = 0
    pitta: int = 0
    kapha: int = 0

    def __post_init__(self) -> None:
        if min(self.vata, self.pitta, self.kapha) < 0:
            raise ValueError("tally counts must be non-negative")

    @property
    def total(self) -> int:
        return self.vata + self.pitta + self.kapha

    def as_pairs(self) -> Tuple[Tuple[str, int], ...]:
        return ((VATA, self.vata), (PITTA, self.pitta), (KAPHA, self.kapha))

    def summary(self) -> str:
        """Human-readable form stored with each response record."""
        return ", ".join(f"{label}: {count}" for label, count in self.as_pairs())

    def as_counts(self) -> Dict[str, int]:
        return {"vata": self.vata, "pitta": self.pitta, "kapha": self.kapha}


@dataclass(frozen=True)
class Classification:
    label: str
    description: str


def classify(tally: Tally) -> Classification:
    for label, count in tally.as_pairs():
        if count >= DOMINANCE_THRESHOLD:
            return Classification(label, DESCRIPTIONS[label])

    ranked = sorted(tally.as_pairs(), key=lambda pair: (-pair[1], CATEGORIES.index(pair[0])))
    first, second = ranked[0][0], ranked[1][0]
    return Classification(
        f"{first}-{second}",
        f"Your constitution is a blend of {first} and {second} Prakriti.",
    )


__all__ = [
    "VATA",
    "PITTA",
    "KAPHA",
    "CATEGORIES",
    "DOMINANCE_THRESHOLD",
    "Tally",
    "Classification",
    "classify",
]
