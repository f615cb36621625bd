"""Static stat range tables keyed by tier label.

Creature tiers (Rookie..Mega) and adversary tiers (Easy..Boss) are two disjoint
catalogs. Ranges are inclusive on both ends.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType


class AnimaLevel(StrEnum):
    """Creature catalog tiers."""

    ROOKIE = "Rookie"
    CHAMPION = "Champion"
    ULTIMATE = "Ultimate"
    MEGA = "Mega"


class EnemyLevel(StrEnum):
    """Adversary catalog tiers."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"
    BOSS = "Boss"


@dataclass(frozen=True, slots=True)
class StatRange:
    """Inclusive numeric range."""

    min: float
    max: float

    def __contains__(self, value: object) -> bool:
        """Return True when `value` lies within the inclusive bounds."""

        if not isinstance(value, (int, float)):
            return False
        return self.min <= value <= self.max


@dataclass(frozen=True, slots=True)
class TierRanges:
    """Per-tier ranges for every rolled attribute.

    Adversary tiers leave `defense`, `attack_speed` and `critical_chance`
    unset: defense is derived from an attack roll and the other two are not
    rolled. Creature tiers leave the reward ranges unset.
    """

    max_health: StatRange
    attack: StatRange
    defense: StatRange | None = None
    attack_speed: StatRange | None = None
    critical_chance: StatRange | None = None
    reward_exp: StatRange | None = None
    reward_bits: StatRange | None = None

    @property
    def derives_defense(self) -> bool:
        """Return True when defense is derived from attack instead of sampled."""

        return self.defense is None


RangeTable = Mapping[str, TierRanges]


def _r(low: float, high: float) -> StatRange:
    return StatRange(min=low, max=high)


ANIMA_RANGES: RangeTable = MappingProxyType(
    {
        AnimaLevel.ROOKIE: TierRanges(
            max_health=_r(80, 150),
            attack=_r(10, 30),
            defense=_r(5, 20),
            attack_speed=_r(0.8, 1.5),
            critical_chance=_r(0, 5),
        ),
        AnimaLevel.CHAMPION: TierRanges(
            max_health=_r(200, 450),
            attack=_r(40, 90),
            defense=_r(30, 70),
            attack_speed=_r(1.2, 2.2),
            critical_chance=_r(5, 15),
        ),
        AnimaLevel.ULTIMATE: TierRanges(
            max_health=_r(600, 1100),
            attack=_r(100, 180),
            defense=_r(80, 140),
            attack_speed=_r(2.0, 3.5),
            critical_chance=_r(15, 25),
        ),
        AnimaLevel.MEGA: TierRanges(
            max_health=_r(1500, 3000),
            attack=_r(200, 400),
            defense=_r(150, 300),
            attack_speed=_r(3.0, 5.0),
            critical_chance=_r(25, 50),
        ),
    }
)

ENEMY_RANGES: RangeTable = MappingProxyType(
    {
        EnemyLevel.EASY: TierRanges(
            max_health=_r(50, 100),
            attack=_r(5, 15),
            reward_exp=_r(10, 30),
            reward_bits=_r(5, 15),
        ),
        EnemyLevel.MEDIUM: TierRanges(
            max_health=_r(150, 300),
            attack=_r(20, 40),
            reward_exp=_r(40, 80),
            reward_bits=_r(20, 50),
        ),
        EnemyLevel.HARD: TierRanges(
            max_health=_r(400, 800),
            attack=_r(50, 90),
            reward_exp=_r(100, 200),
            reward_bits=_r(60, 120),
        ),
        EnemyLevel.BOSS: TierRanges(
            max_health=_r(1000, 3000),
            attack=_r(100, 250),
            reward_exp=_r(500, 1000),
            reward_bits=_r(300, 800),
        ),
    }
)

# Speed and crit for adversaries are not part of their range table.
ENEMY_DEFAULT_ATTACK_SPEED = 1.0
ENEMY_DEFAULT_CRITICAL_CHANCE = 5
