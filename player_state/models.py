"""Database models for player-owned state."""

from __future__ import annotations

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from definitions.models import AnimaDefinition

EXTRA_STAT_FIELDS: tuple[str, ...] = ("attack_extra", "defense_extra", "max_health_extra")


class Player(models.Model):
    """Profile record owned by exactly one auth user."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="player",
    )
    display_name = models.CharField(max_length=80, blank=True)
    bits = models.PositiveIntegerField(default=0)
    manager_exp = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        """Return the display name for display contexts."""

        return self.display_name or f"Player {self.pk}"


class PlayerAnima(models.Model):
    """A player-owned copy of a creature species.

    Extra stats are rolled once at adoption and never recomputed. At most one
    row per player may be active.
    """

    player = models.ForeignKey(Player, on_delete=models.CASCADE, related_name="animas")
    anima_definition = models.ForeignKey(
        AnimaDefinition,
        on_delete=models.PROTECT,
        related_name="player_animas",
    )
    nickname = models.CharField(max_length=80, blank=True, default="")
    attack_extra = models.PositiveSmallIntegerField(default=0)
    defense_extra = models.PositiveSmallIntegerField(default=0)
    max_health_extra = models.PositiveSmallIntegerField(default=0)
    current_exp = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-is_active", "created_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["player"],
                condition=Q(is_active=True),
                name="uniq_player_active_anima",
            )
        ]
        verbose_name = "Player Anima"

    def clean(self) -> None:
        """Validate the single-active and immutable-extras invariants."""

        if self.is_active and self.player_id:
            other_active = (
                PlayerAnima.objects.filter(player_id=self.player_id, is_active=True).exclude(pk=self.pk).exists()
            )
            if other_active:
                raise ValidationError("Only one Anima may be active at a time.")
        if self.pk is not None:
            original = PlayerAnima.objects.filter(pk=self.pk).values(*EXTRA_STAT_FIELDS, "current_exp").first()
            if original is not None:
                changed = [name for name in EXTRA_STAT_FIELDS if original[name] != getattr(self, name)]
                if changed:
                    raise ValidationError(f"Extra stats are fixed at adoption; attempted to change {changed}.")
                if self.current_exp < original["current_exp"]:
                    raise ValidationError("Experience can never decrease.")

    def save(self, *args, **kwargs) -> None:
        """Save while enforcing invariants."""

        self.full_clean()
        super().save(*args, **kwargs)

    @property
    def display_name(self) -> str:
        """Return the nickname, falling back to the species name."""

        return self.nickname or self.anima_definition.species

    def __str__(self) -> str:
        """Return a concise display string."""

        return f"PlayerAnima({self.display_name}, active={self.is_active})"


class Activity(models.Model):
    """An entry in a player's recent-activity feed."""

    class Type(models.TextChoices):
        """Activity categories shown as feed badges."""

        LOGIN = "login", "Login"
        UPDATE = "update", "Update"
        ACTION = "action", "Action"
        ALERT = "alert", "Alert"

    player = models.ForeignKey(Player, on_delete=models.CASCADE, related_name="activities")
    type = models.CharField(max_length=12, choices=Type.choices, default=Type.ACTION)
    message = models.CharField(max_length=255)
    timestamp = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-timestamp", "-id"]
        verbose_name_plural = "Activities"

    def __str__(self) -> str:
        """Return a concise display string."""

        return f"Activity({self.type}: {self.message})"
