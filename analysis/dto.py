"""DTO types returned by the stat computations.

DTOs are plain data containers used to transport rolled or aggregated stats to
the service layer and templates. They intentionally avoid any Django/ORM
dependencies.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True, slots=True)
class StatBundle:
    """One concrete set of combat stats.

    Attributes:
        max_health: Health points (integer).
        attack: Attack power (integer).
        defense: Defense (integer).
        attack_speed: Attacks per second, rounded to one decimal place.
        critical_chance: Critical-hit chance percentage in [0, 100].
        reward_exp: Experience awarded on defeat (adversaries only).
        reward_bits: Currency awarded on defeat (adversaries only).
    """

    max_health: int
    attack: int
    defense: int
    attack_speed: float
    critical_chance: float
    reward_exp: int | None = None
    reward_bits: int | None = None

    def as_fields(self) -> dict[str, float | int]:
        """Return a dict of model field values, omitting unset reward fields."""

        return {key: value for key, value in asdict(self).items() if value is not None}


@dataclass(frozen=True, slots=True)
class GeneticBonus:
    """Per-instance extra stats rolled once at adoption time.

    Attributes:
        attack_extra: Added to the species attack.
        defense_extra: Added to the species defense.
        max_health_extra: Added to the species max health.
    """

    attack_extra: int
    defense_extra: int
    max_health_extra: int
