"""Create the creature and adversary species catalogs."""

from __future__ import annotations

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    """Initial schema for AnimaDefinition and EnemyDefinition."""

    initial = True

    dependencies: list[tuple[str, str]] = []

    operations = [
        migrations.CreateModel(
            name="AnimaDefinition",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("species", models.CharField(max_length=120)),
                (
                    "max_health",
                    models.PositiveIntegerField(default=100, validators=[django.core.validators.MinValueValidator(1)]),
                ),
                ("attack", models.PositiveIntegerField(default=10)),
                ("defense", models.PositiveIntegerField(default=10)),
                ("attack_speed", models.FloatField(default=1.0)),
                (
                    "critical_chance",
                    models.FloatField(
                        default=5,
                        help_text="Critical-hit chance percentage (0-100).",
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(100),
                        ],
                    ),
                ),
                ("image_data", models.TextField(blank=True, default="", help_text="Image as a data URL.")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "level",
                    models.CharField(
                        choices=[
                            ("Rookie", "Rookie"),
                            ("Champion", "Champion"),
                            ("Ultimate", "Ultimate"),
                            ("Mega", "Mega"),
                        ],
                        default="Rookie",
                        max_length=20,
                    ),
                ),
                (
                    "next_evolution",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="previous_evolutions",
                        to="definitions.animadefinition",
                    ),
                ),
            ],
            options={
                "verbose_name": "Anima",
                "verbose_name_plural": "Animas",
                "ordering": ["-created_at", "-id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="EnemyDefinition",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("species", models.CharField(max_length=120)),
                (
                    "max_health",
                    models.PositiveIntegerField(default=100, validators=[django.core.validators.MinValueValidator(1)]),
                ),
                ("attack", models.PositiveIntegerField(default=10)),
                ("attack_speed", models.FloatField(default=1.0)),
                (
                    "critical_chance",
                    models.FloatField(
                        default=5,
                        help_text="Critical-hit chance percentage (0-100).",
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(100),
                        ],
                    ),
                ),
                ("image_data", models.TextField(blank=True, default="", help_text="Image as a data URL.")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "level",
                    models.CharField(
                        choices=[
                            ("Easy", "Easy"),
                            ("Medium", "Medium"),
                            ("Hard", "Hard"),
                            ("Boss", "Boss"),
                        ],
                        default="Easy",
                        max_length=20,
                    ),
                ),
                ("defense", models.PositiveIntegerField(default=5)),
                ("reward_exp", models.PositiveIntegerField(default=10)),
                ("reward_bits", models.PositiveIntegerField(default=5)),
            ],
            options={
                "verbose_name": "Enemy",
                "verbose_name_plural": "Enemies",
                "ordering": ["-created_at", "-id"],
                "abstract": False,
            },
        ),
    ]
