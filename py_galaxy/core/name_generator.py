"""
Syllable-based name generation.

Names are built from an initial, a middle and a final syllable picked from a
named syllable set. All picks go through the shared RandomSource so that names
are reproduced exactly for a given seed.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from .seeded_random import RandomSource


class SyllableSet(BaseModel):
    """Syllables that can start, continue and end a name."""

    initial: List[str] = Field(description="Syllables that can start a name")
    middle: List[str] = Field(description="Syllables for the middle of a name")
    final: List[str] = Field(description="Syllables that can end a name")

    @field_validator("initial", "middle", "final")
    @classmethod
    def _not_empty(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("syllable lists must not be empty")
        if not all(value):
            raise ValueError("syllables must be non-empty strings")
        return value


DEFAULT_SYLLABLE_SETS: Dict[str, SyllableSet] = {
    "GENERIC": SyllableSet(
        initial=["a", "be", "co", "de", "e", "fe", "ge", "he", "i", "je", "ke", "le", "me",
                 "ne", "o", "pe", "que", "re", "se", "te", "u", "ve", "we", "xe", "ye", "ze"],
        middle=["ra", "ta", "sa", "la", "na", "ma", "ka", "da", "ga", "pa", "fa", "va", "za",
                "xa", "ca", "ba", "ha", "ja", "qa", "wa", "ya"],
        final=["l", "m", "n", "r", "s", "t", "th", "sh", "ch", "ph", "gh", "p", "k", "d", "g",
               "b", "v", "z", "x", "c"],
    ),
    "GUTTURAL": SyllableSet(
        initial=["gor", "ur", "thra", "kro", "gru", "o", "u"],
        middle=["gg", "rr", "kk", "th", "sh", "gh"],
        final=["k", "g", "r", "th", "sh", "gh"],
    ),
    "MELODIC": SyllableSet(
        initial=["a", "e", "i", "o", "u", "al", "el", "il", "ol", "ul", "an", "en", "in", "on", "un"],
        middle=["la", "le", "li", "lo", "lu", "ra", "re", "ri", "ro", "ru", "sa", "se", "si", "so", "su"],
        final=["a", "e", "i", "o", "u", "l", "m", "n", "r", "s"],
    ),
    "SECTOR": SyllableSet(
        initial=["al", "bel", "cor", "dra", "es", "hy", "ka", "lyr", "or", "per", "syr", "ve"],
        middle=["an", "ter", "ion", "os", "ar", "eth", "ul", "ir"],
        final=["is", "a", "on", "us", "ax", "ea", "or", "um"],
    ),
    "PLANET": SyllableSet(
        initial=["ar", "bo", "ce", "du", "ex", "ga", "io", "ju", "ke", "mo", "ny", "ta", "ze"],
        middle=["ra", "li", "to", "ne", "ma", "ri", "do", "ku"],
        final=["a", "on", "is", "e", "ar", "ia", "ix", "os"],
    ),
    "REALM": SyllableSet(
        initial=["ast", "bal", "cae", "dor", "eld", "fal", "gar", "hal", "kar", "mor", "tha", "val"],
        middle=["an", "en", "ar", "or", "ir", "un"],
        final=["ia", "or", "heim", "ar", "os", "eth", "ium", "ara"],
    ),
}


class NameGenerator:
    """Generates display names for sectors, planets and realms."""

    def __init__(
        self,
        random_source: RandomSource,
        syllable_sets: Optional[Dict[str, SyllableSet]] = None,
    ):
        self.random_source = random_source
        self.syllable_sets: Dict[str, SyllableSet] = dict(
            syllable_sets if syllable_sets is not None else DEFAULT_SYLLABLE_SETS
        )

    def add_syllable_set(self, style: str, syllable_set: SyllableSet) -> None:
        """Register or replace a syllable set."""
        if not style:
            raise ValueError("Syllable set name must not be empty.")
        self.syllable_sets[style] = syllable_set

    def generate_syllable_name(self, style: str) -> str:
        """Generate a capitalised name from the given syllable set."""
        if not style:
            raise ValueError("Syllable set name must not be empty.")
        syllable_set = self.syllable_sets.get(style)
        if syllable_set is None:
            raise ValueError(f'Syllable set "{style}" not found.')

        rng = self.random_source
        name = (
            rng.next_choice(syllable_set.initial)
            + rng.next_choice(syllable_set.middle)
            + rng.next_choice(syllable_set.final)
        )
        return name[0].upper() + name[1:]
