"""Stat Roller: sample one concrete StatBundle for a tier.

Every attribute is sampled independently and uniformly over its inclusive
range. Integer attributes use floor-based sampling; attack speed is rounded to
one decimal place. Adversary tiers derive defense from a second attack roll.
"""

from __future__ import annotations

import math
import random
from decimal import ROUND_HALF_UP, Decimal

from .dto import StatBundle
from .stat_ranges import (
    ANIMA_RANGES,
    ENEMY_DEFAULT_ATTACK_SPEED,
    ENEMY_DEFAULT_CRITICAL_CHANCE,
    ENEMY_RANGES,
    RangeTable,
    StatRange,
)

_DEFAULT_RNG = random.Random()
ONE_DECIMAL = Decimal("0.1")


class InvalidTierError(ValueError):
    """Raised when a tier label is not present in the range table."""

    def __init__(self, tier: str, *, known: tuple[str, ...]) -> None:
        """Initialize the error.

        Args:
            tier: The rejected tier label.
            known: Tier labels that the range table does define.
        """

        super().__init__(f"Unknown tier {tier!r}; expected one of {', '.join(known)}.")
        self.tier = tier
        self.known = known


def roll_int(stat_range: StatRange, rng: random.Random) -> int:
    """Return a uniform integer in the inclusive range."""

    low = int(stat_range.min)
    high = int(stat_range.max)
    return math.floor(rng.random() * (high - low + 1)) + low


def roll_one_decimal(stat_range: StatRange, rng: random.Random) -> float:
    """Return a uniform real in the range, rounded half-up to one decimal place."""

    value = rng.random() * (stat_range.max - stat_range.min) + stat_range.min
    return float(Decimal(value).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP))


def roll(tier: str, range_table: RangeTable, rng: random.Random | None = None) -> StatBundle:
    """Roll one StatBundle for `tier`.

    Args:
        tier: Tier label; must be a key of `range_table`.
        range_table: Mapping of tier label to TierRanges.
        rng: Optional random source. Pass a seeded `random.Random` for
            reproducible output.

    Returns:
        A StatBundle with one sampled value per attribute.

    Raises:
        InvalidTierError: When `tier` is not in `range_table`.
    """

    ranges = range_table.get(tier)
    if ranges is None:
        raise InvalidTierError(str(tier), known=tuple(str(key) for key in range_table))
    rng = rng or _DEFAULT_RNG

    max_health = roll_int(ranges.max_health, rng)
    attack = roll_int(ranges.attack, rng)
    if ranges.defense is None:
        defense = math.floor(roll_int(ranges.attack, rng) * 0.5)
    else:
        defense = roll_int(ranges.defense, rng)

    attack_speed = (
        roll_one_decimal(ranges.attack_speed, rng)
        if ranges.attack_speed is not None
        else ENEMY_DEFAULT_ATTACK_SPEED
    )
    critical_chance = (
        roll_int(ranges.critical_chance, rng)
        if ranges.critical_chance is not None
        else ENEMY_DEFAULT_CRITICAL_CHANCE
    )
    reward_exp = roll_int(ranges.reward_exp, rng) if ranges.reward_exp is not None else None
    reward_bits = roll_int(ranges.reward_bits, rng) if ranges.reward_bits is not None else None

    return StatBundle(
        max_health=max_health,
        attack=attack,
        defense=defense,
        attack_speed=attack_speed,
        critical_chance=critical_chance,
        reward_exp=reward_exp,
        reward_bits=reward_bits,
    )


def roll_anima(tier: str, rng: random.Random | None = None) -> StatBundle:
    """Roll creature stats from the default creature range table."""

    return roll(tier, ANIMA_RANGES, rng)


def roll_enemy(tier: str, rng: random.Random | None = None) -> StatBundle:
    """Roll adversary stats from the default adversary range table."""

    return roll(tier, ENEMY_RANGES, rng)
