"""Unit tests for the genetic bonus roll and effective stat totals."""

from __future__ import annotations

import random
from dataclasses import dataclass

import pytest

from analysis.effective_stats import effective_stats
from analysis.genetics import roll_genetic_bonus

pytestmark = pytest.mark.unit


@dataclass
class _Species:
    max_health: int = 120
    attack: int = 20
    defense: int = 10
    attack_speed: float = 1.2
    critical_chance: float = 4


@dataclass
class _Instance:
    max_health_extra: int = 30
    attack_extra: int = 5
    defense_extra: int = 2


def test_genetic_bonus_stays_within_half_open_bounds() -> None:
    """Attack/defense extras are in [0, 15) and health in [0, 50)."""

    rng = random.Random(2024)
    for _ in range(1000):
        bonus = roll_genetic_bonus(rng)
        assert 0 <= bonus.attack_extra < 15
        assert 0 <= bonus.defense_extra < 15
        assert 0 <= bonus.max_health_extra < 50


def test_effective_stats_adds_extras_to_health_attack_defense_only() -> None:
    """Speed and crit come from the species unchanged."""

    stats = effective_stats(_Instance(), _Species())
    assert stats.max_health == 150
    assert stats.attack == 25
    assert stats.defense == 12
    assert stats.attack_speed == 1.2
    assert stats.critical_chance == 4


def test_effective_stats_is_idempotent_and_non_mutating() -> None:
    """Repeated calls agree and leave both inputs untouched."""

    species = _Species()
    instance = _Instance()
    first = effective_stats(instance, species)
    second = effective_stats(instance, species)
    assert first == second
    assert species == _Species()
    assert instance == _Instance()


def test_effective_stats_with_zero_extras_matches_species() -> None:
    """A zero bonus displays the species base stats."""

    stats = effective_stats(_Instance(0, 0, 0), _Species())
    assert (stats.max_health, stats.attack, stats.defense) == (120, 20, 10)
