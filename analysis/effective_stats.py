"""Collection Aggregator: combine species base stats with instance extras."""

from __future__ import annotations

from typing import Protocol

from .dto import StatBundle


class SpeciesStats(Protocol):
    """Base stats exposed by a species definition (ORM row or DTO)."""

    max_health: int
    attack: int
    defense: int
    attack_speed: float
    critical_chance: float


class InstanceExtras(Protocol):
    """Extra-stat deltas exposed by an owned instance."""

    max_health_extra: int
    attack_extra: int
    defense_extra: int


def effective_stats(instance: InstanceExtras, species: SpeciesStats) -> StatBundle:
    """Return the displayed total stats for an owned instance.

    Health, attack and defense are `base + extra`. Attack speed and critical
    chance come from the species only. Inputs are never modified.

    Args:
        instance: Owned instance carrying the extra-stat deltas.
        species: Species definition carrying the base stats.

    Returns:
        StatBundle with the combined values.
    """

    return StatBundle(
        max_health=(species.max_health or 0) + instance.max_health_extra,
        attack=(species.attack or 0) + instance.attack_extra,
        defense=(species.defense or 0) + instance.defense_extra,
        attack_speed=species.attack_speed,
        critical_chance=species.critical_chance,
    )
