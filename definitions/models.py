"""Database models for the species catalogs.

Definitions are administrator-managed and independent of any player. The
creature (Anima) and adversary (Enemy) catalogs are disjoint tables that share
an abstract base for their combat stats.
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from analysis.stat_ranges import AnimaLevel, EnemyLevel

ANIMA_LEVEL_CHOICES: tuple[tuple[str, str], ...] = tuple((level.value, level.value) for level in AnimaLevel)
ENEMY_LEVEL_CHOICES: tuple[tuple[str, str], ...] = tuple((level.value, level.value) for level in EnemyLevel)


class SpeciesDefinition(models.Model):
    """Shared fields for both species catalogs."""

    species = models.CharField(max_length=120)
    max_health = models.PositiveIntegerField(default=100, validators=[MinValueValidator(1)])
    attack = models.PositiveIntegerField(default=10)
    defense = models.PositiveIntegerField(default=10)
    attack_speed = models.FloatField(default=1.0)
    critical_chance = models.FloatField(
        default=5,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
        help_text="Critical-hit chance percentage (0-100).",
    )
    image_data = models.TextField(blank=True, default="", help_text="Image as a data URL.")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True
        ordering = ["-created_at", "-id"]

    def clean(self) -> None:
        """Validate fields that field-level validators cannot express."""

        errors: dict[str, str] = {}
        if not (self.species or "").strip():
            errors["species"] = "Species name is required."
        if self.attack_speed is not None and self.attack_speed <= 0:
            errors["attack_speed"] = "Attack speed must be greater than zero."
        if errors:
            raise ValidationError(errors)
        self.species = self.species.strip()

    def __str__(self) -> str:
        """Return the species name with its tier."""

        return f"{self.species} ({self.level})"


class AnimaDefinition(SpeciesDefinition):
    """A creature species that players can adopt and evolve."""

    level = models.CharField(max_length=20, choices=ANIMA_LEVEL_CHOICES, default=AnimaLevel.ROOKIE.value)
    next_evolution = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="previous_evolutions",
    )

    class Meta(SpeciesDefinition.Meta):
        verbose_name = "Anima"
        verbose_name_plural = "Animas"

    def clean(self) -> None:
        """Validate stats and reject self-referencing or cyclic evolutions.

        Raises:
            ValidationError: When the evolution pointer targets this row or
                leads back to it.
        """

        super().clean()
        if self.next_evolution_id is None:
            return
        if self.pk is not None and self.next_evolution_id == self.pk:
            raise ValidationError({"next_evolution": "A species cannot evolve into itself."})
        if self.pk is None:
            return

        seen: set[int] = set()
        cursor: int | None = self.next_evolution_id
        while cursor is not None and cursor not in seen:
            if cursor == self.pk:
                raise ValidationError({"next_evolution": "This evolution would create a cycle."})
            seen.add(cursor)
            cursor = (
                AnimaDefinition.objects.filter(pk=cursor).values_list("next_evolution_id", flat=True).first()
            )


class EnemyDefinition(SpeciesDefinition):
    """An adversary species with rewards granted on defeat."""

    level = models.CharField(max_length=20, choices=ENEMY_LEVEL_CHOICES, default=EnemyLevel.EASY.value)
    defense = models.PositiveIntegerField(default=5)
    reward_exp = models.PositiveIntegerField(default=10)
    reward_bits = models.PositiveIntegerField(default=5)

    class Meta(SpeciesDefinition.Meta):
        verbose_name = "Enemy"
        verbose_name_plural = "Enemies"
