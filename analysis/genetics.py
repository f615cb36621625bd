"""Genetic bonus roll applied once when a creature is adopted.

The bonus is deliberately small relative to tier base stats and independent of
the tier range tables.
"""

from __future__ import annotations

import math
import random

from .dto import GeneticBonus

ATTACK_EXTRA_BOUND = 15
DEFENSE_EXTRA_BOUND = 15
MAX_HEALTH_EXTRA_BOUND = 50

_DEFAULT_RNG = random.Random()


def _below(bound: int, rng: random.Random) -> int:
    return math.floor(rng.random() * bound)


def roll_genetic_bonus(rng: random.Random | None = None) -> GeneticBonus:
    """Roll the per-instance extras.

    Args:
        rng: Optional random source (seed it for reproducible output).

    Returns:
        GeneticBonus with attack/defense extras in [0, 15) and a max health
        extra in [0, 50).
    """

    rng = rng or _DEFAULT_RNG
    return GeneticBonus(
        attack_extra=_below(ATTACK_EXTRA_BOUND, rng),
        defense_extra=_below(DEFENSE_EXTRA_BOUND, rng),
        max_health_extra=_below(MAX_HEALTH_EXTRA_BOUND, rng),
    )
