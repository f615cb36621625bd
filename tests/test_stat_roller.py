"""Unit tests for the tier range tables and the stat roller."""

from __future__ import annotations

import math
import random

import pytest

from analysis.stat_ranges import ANIMA_RANGES, ENEMY_RANGES, AnimaLevel, EnemyLevel, StatRange, TierRanges
from analysis.stat_roller import InvalidTierError, roll, roll_anima, roll_enemy, roll_int, roll_one_decimal

pytestmark = pytest.mark.unit

ROLLS_PER_TIER = 500


@pytest.mark.parametrize("tier", list(AnimaLevel))
def test_creature_rolls_stay_within_inclusive_tier_bounds(tier: AnimaLevel) -> None:
    """Every creature attribute lands inside its tier range."""

    rng = random.Random(1234)
    ranges = ANIMA_RANGES[tier]
    for _ in range(ROLLS_PER_TIER):
        stats = roll_anima(tier, rng)
        assert stats.max_health in ranges.max_health
        assert stats.attack in ranges.attack
        assert stats.defense in ranges.defense
        assert stats.attack_speed in ranges.attack_speed
        assert stats.critical_chance in ranges.critical_chance
        assert isinstance(stats.max_health, int)
        assert isinstance(stats.defense, int)
        assert round(stats.attack_speed, 1) == stats.attack_speed
        assert stats.reward_exp is None
        assert stats.reward_bits is None


@pytest.mark.parametrize("tier", list(EnemyLevel))
def test_adversary_defense_is_half_an_attack_roll(tier: EnemyLevel) -> None:
    """Adversary defense never exceeds half the attack range maximum."""

    rng = random.Random(99)
    ranges = ENEMY_RANGES[tier]
    ceiling = math.floor(0.5 * ranges.attack.max)
    floor_ = math.floor(0.5 * ranges.attack.min)
    for _ in range(ROLLS_PER_TIER):
        stats = roll_enemy(tier, rng)
        assert stats.max_health in ranges.max_health
        assert stats.attack in ranges.attack
        assert floor_ <= stats.defense <= ceiling
        assert stats.reward_exp in ranges.reward_exp
        assert stats.reward_bits in ranges.reward_bits
        assert stats.attack_speed == 1.0
        assert stats.critical_chance == 5


def test_adversary_defense_uses_a_second_attack_draw() -> None:
    """Defense is floor(0.5 * a) for a fresh attack roll, drawn after attack."""

    tier = EnemyLevel.MEDIUM
    ranges = ENEMY_RANGES[tier]
    stats = roll_enemy(tier, random.Random(7))

    replay = random.Random(7)
    roll_int(ranges.max_health, replay)
    roll_int(ranges.attack, replay)
    second_attack = roll_int(ranges.attack, replay)
    assert stats.defense == math.floor(second_attack * 0.5)


def test_seeded_rolls_are_reproducible() -> None:
    """The same seed produces the same bundle."""

    assert roll_anima("Champion", random.Random(42)) == roll_anima("Champion", random.Random(42))


def test_unknown_tier_raises_invalid_tier_error() -> None:
    """A tier missing from the table is rejected with the known tiers listed."""

    with pytest.raises(InvalidTierError) as excinfo:
        roll("Legendary", ANIMA_RANGES)
    assert excinfo.value.tier == "Legendary"
    assert "Rookie" in excinfo.value.known


def test_creature_tier_is_not_valid_for_adversaries() -> None:
    """The two catalogs never share tier labels."""

    with pytest.raises(InvalidTierError):
        roll_enemy("Rookie")


def test_custom_range_table_is_respected() -> None:
    """Degenerate ranges yield their single value."""

    table = {
        "Fixed": TierRanges(
            max_health=StatRange(7, 7),
            attack=StatRange(3, 3),
            defense=StatRange(2, 2),
            attack_speed=StatRange(1.5, 1.5),
            critical_chance=StatRange(0, 0),
        )
    }
    stats = roll("Fixed", table, random.Random(0))
    assert (stats.max_health, stats.attack, stats.defense) == (7, 3, 2)
    assert stats.attack_speed == 1.5
    assert stats.critical_chance == 0


def test_integer_sampling_covers_both_bounds() -> None:
    """Floor-based sampling reaches the inclusive min and max."""

    rng = random.Random(5)
    seen = {roll_int(StatRange(0, 3), rng) for _ in range(400)}
    assert seen == {0, 1, 2, 3}


def test_one_decimal_sampling_rounds_to_tenths() -> None:
    """Attack speed values carry at most one decimal place."""

    rng = random.Random(11)
    for _ in range(200):
        value = roll_one_decimal(StatRange(0.8, 1.5), rng)
        assert 0.8 <= value <= 1.5
        assert value == round(value, 1)


@pytest.mark.parametrize(("exact", "expected"), [(0.25, 0.3), (1.25, 1.3), (1.5, 1.5)])
def test_one_decimal_rolls_round_half_up(exact: float, expected: float) -> None:
    """Ties round away from zero rather than to the even neighbour."""

    assert roll_one_decimal(StatRange(exact, exact), random.Random(0)) == expected


def test_as_fields_omits_unset_rewards() -> None:
    """Creature bundles expose only the five combat stats as model fields."""

    fields = roll_anima("Rookie", random.Random(3)).as_fields()
    assert set(fields) == {"max_health", "attack", "defense", "attack_speed", "critical_chance"}
    enemy_fields = roll_enemy("Easy", random.Random(3)).as_fields()
    assert {"reward_exp", "reward_bits"} <= set(enemy_fields)
