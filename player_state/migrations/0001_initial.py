"""Create player profiles, owned creatures and the activity feed."""

from __future__ import annotations

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    """Initial schema for Player, PlayerAnima and Activity."""

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("definitions", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Player",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("display_name", models.CharField(blank=True, max_length=80)),
                ("bits", models.PositiveIntegerField(default=0)),
                ("manager_exp", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="player",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="PlayerAnima",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nickname", models.CharField(blank=True, default="", max_length=80)),
                ("attack_extra", models.PositiveSmallIntegerField(default=0)),
                ("defense_extra", models.PositiveSmallIntegerField(default=0)),
                ("max_health_extra", models.PositiveSmallIntegerField(default=0)),
                ("current_exp", models.PositiveIntegerField(default=0)),
                ("is_active", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "anima_definition",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="player_animas",
                        to="definitions.animadefinition",
                    ),
                ),
                (
                    "player",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="animas",
                        to="player_state.player",
                    ),
                ),
            ],
            options={
                "verbose_name": "Player Anima",
                "ordering": ["-is_active", "created_at", "id"],
            },
        ),
        migrations.AddConstraint(
            model_name="playeranima",
            constraint=models.UniqueConstraint(
                condition=models.Q(("is_active", True)),
                fields=("player",),
                name="uniq_player_active_anima",
            ),
        ),
        migrations.CreateModel(
            name="Activity",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("login", "Login"),
                            ("update", "Update"),
                            ("action", "Action"),
                            ("alert", "Alert"),
                        ],
                        default="action",
                        max_length=12,
                    ),
                ),
                ("message", models.CharField(max_length=255)),
                ("timestamp", models.DateTimeField(auto_now_add=True, db_index=True)),
                (
                    "player",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="activities",
                        to="player_state.player",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "Activities",
                "ordering": ["-timestamp", "-id"],
            },
        ),
    ]
