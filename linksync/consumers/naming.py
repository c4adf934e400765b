"""Branded display names for overflow links.

Links past the first two get a generated name like "SPORTIFy TURBO FHD".
Names are random across runs; pass a seeded random.Random to get a
reproducible sequence.

Layouts (equally likely):
    brand + resolution               "SPORTIFy HD"
    brand + adjective                "SPORTIFy GOAL"
    brand + adjective + resolution   "SPORTIFy PRO SD"
"""

import random

from linksync.core.types import DEFAULT_SPORT_CATEGORY
from linksync.utilities.constants import (
    BRAND_ADJECTIVES,
    BRAND_TOKEN,
    CRICKET_ADJECTIVES,
    FOOTBALL_ADJECTIVES,
    RESOLUTIONS,
    SPORT_ADJECTIVE_CHANCE,
)


def sport_adjectives(sport_category: str | None) -> tuple[str, ...]:
    """Sport-specific adjectives: cricket set for cricket, football set otherwise."""
    sport = (sport_category or DEFAULT_SPORT_CATEGORY).lower()
    return CRICKET_ADJECTIVES if "cricket" in sport else FOOTBALL_ADJECTIVES


class BrandedNameGenerator:
    """Generates randomized branded link names."""

    def __init__(self, rng: random.Random | None = None):
        """Initialize generator.

        Args:
            rng: Random source. Defaults to a fresh unseeded Random.
        """
        self._rng = rng or random.Random()

    def next_name(self, sport_category: str | None = None) -> str:
        """Generate one display name.

        Args:
            sport_category: Feed sport category, picks the sport adjective set

        Returns:
            Name such as "SPORTIFy MAX HD"
        """
        rng = self._rng

        adjective = rng.choice(BRAND_ADJECTIVES)
        if rng.random() < SPORT_ADJECTIVE_CHANCE:
            adjective = rng.choice(sport_adjectives(sport_category))

        layout = rng.randrange(3)
        if layout == 0:
            return f"{BRAND_TOKEN} {rng.choice(RESOLUTIONS)}"
        if layout == 1:
            return f"{BRAND_TOKEN} {adjective}"
        return f"{BRAND_TOKEN} {adjective} {rng.choice(RESOLUTIONS)}"

    @staticmethod
    def possible_names(sport_category: str | None = None) -> frozenset[str]:
        """Every name next_name() can return for a sport category."""
        adjectives = BRAND_ADJECTIVES + sport_adjectives(sport_category)
        names = {f"{BRAND_TOKEN} {res}" for res in RESOLUTIONS}
        names.update(f"{BRAND_TOKEN} {adj}" for adj in adjectives)
        names.update(f"{BRAND_TOKEN} {adj} {res}" for adj in adjectives for res in RESOLUTIONS)
        return frozenset(names)
