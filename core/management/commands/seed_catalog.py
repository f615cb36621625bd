"""Seed both species catalogs with one rolled definition per tier.

Creatures are chained Rookie -> Champion -> Ultimate -> Mega through
`next_evolution`. Seeding is idempotent by species name: existing rows are
left untouched.
"""

from __future__ import annotations

import random

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from analysis.stat_ranges import AnimaLevel, EnemyLevel
from analysis.stat_roller import roll_anima, roll_enemy
from definitions.models import AnimaDefinition, EnemyDefinition

SEED_ANIMAS: tuple[tuple[str, AnimaLevel], ...] = (
    ("Sproutling", AnimaLevel.ROOKIE),
    ("Thornback", AnimaLevel.CHAMPION),
    ("Verdant Warden", AnimaLevel.ULTIMATE),
    ("Elder Grove", AnimaLevel.MEGA),
)

SEED_ENEMIES: tuple[tuple[str, EnemyLevel], ...] = (
    ("Bog Slime", EnemyLevel.EASY),
    ("Goblin Raider", EnemyLevel.MEDIUM),
    ("Stone Golem", EnemyLevel.HARD),
    ("Ashen Wyrm", EnemyLevel.BOSS),
)


class Command(BaseCommand):
    """Create a starter set of creature and adversary species."""

    help = "Seed the Anima and Enemy catalogs with one rolled species per tier."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument(
            "--check",
            action="store_true",
            help="Dry-run: print which species would be created.",
        )
        parser.add_argument(
            "--write",
            action="store_true",
            help="Persist the missing species.",
        )
        parser.add_argument(
            "--seed",
            type=int,
            default=None,
            help="Random seed for reproducible stat rolls.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        check: bool = options["check"]
        write: bool = options["write"]
        if check == write:
            raise CommandError("Pass exactly one of --check or --write.")

        rng = random.Random(options["seed"])
        mode = "CHECK" if check else "WRITE"

        existing_animas = set(AnimaDefinition.objects.values_list("species", flat=True))
        existing_enemies = set(EnemyDefinition.objects.values_list("species", flat=True))
        missing_animas = [(name, level) for name, level in SEED_ANIMAS if name not in existing_animas]
        missing_enemies = [(name, level) for name, level in SEED_ENEMIES if name not in existing_enemies]

        self.stdout.write(
            f"[{mode}] animas_missing={[name for name, _ in missing_animas]} "
            f"enemies_missing={[name for name, _ in missing_enemies]}"
        )
        if check:
            return None

        with transaction.atomic():
            for name, level in missing_animas:
                AnimaDefinition.objects.create(species=name, level=level.value, **roll_anima(level, rng).as_fields())
            for name, level in missing_enemies:
                EnemyDefinition.objects.create(species=name, level=level.value, **roll_enemy(level, rng).as_fields())
            self._link_evolutions()

        self.stdout.write(f"[WRITE] created animas={len(missing_animas)} enemies={len(missing_enemies)}")
        return None

    def _link_evolutions(self) -> None:
        by_name = {row.species: row for row in AnimaDefinition.objects.filter(species__in=[n for n, _ in SEED_ANIMAS])}
        for (name, _), (next_name, _) in zip(SEED_ANIMAS, SEED_ANIMAS[1:]):
            current = by_name.get(name)
            nxt = by_name.get(next_name)
            if current is None or nxt is None or current.next_evolution_id is not None:
                continue
            current.next_evolution = nxt
            current.save(update_fields=["next_evolution"])
