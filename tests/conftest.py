"""Pytest fixtures shared across Django integration tests."""

from __future__ import annotations

from collections.abc import Sequence

import pytest
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group

from definitions.models import AnimaDefinition, EnemyDefinition
from player_state.signals import ADMIN_GROUP_NAME


@pytest.fixture
def user(db):
    """Return a logged-in capable User with an associated Player."""

    user_model = get_user_model()
    return user_model.objects.create_user(username="alice", password="password")


@pytest.fixture
def player(user):
    """Return the Player associated with the default test user."""

    return user.player


@pytest.fixture
def auth_client(client, user):
    """Return a Django test client authenticated as the default test user."""

    client.force_login(user)
    return client


@pytest.fixture
def catalog_admin(db):
    """Return a non-staff user in the `admin` group."""

    user_model = get_user_model()
    admin_user = user_model.objects.create_user(username="curator", password="password")
    group, _ = Group.objects.get_or_create(name=ADMIN_GROUP_NAME)
    admin_user.groups.add(group)
    return admin_user


@pytest.fixture
def curator_client(client, catalog_admin):
    """Return a Django test client authenticated as a catalog administrator."""

    client.force_login(catalog_admin)
    return client


@pytest.fixture
def rookie(db) -> AnimaDefinition:
    """Return one Rookie creature species."""

    return AnimaDefinition.objects.create(
        species="Sproutling",
        level="Rookie",
        max_health=120,
        attack=15,
        defense=12,
        attack_speed=1.2,
        critical_chance=6,
    )


@pytest.fixture
def champion(db) -> AnimaDefinition:
    """Return one Champion creature species."""

    return AnimaDefinition.objects.create(
        species="Thornback",
        level="Champion",
        max_health=260,
        attack=35,
        defense=30,
        attack_speed=1.5,
        critical_chance=10,
    )


@pytest.fixture
def enemy(db) -> EnemyDefinition:
    """Return one Easy adversary species."""

    return EnemyDefinition.objects.create(
        species="Bog Slime",
        level="Easy",
        max_health=80,
        attack=12,
        defense=6,
        reward_exp=15,
        reward_bits=8,
    )


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no database access.
    - `integration`: tests touching Django, database, views, commands, or IO.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
