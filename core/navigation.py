"""Screen registry for sidebar navigation.

Each screen is one URL; moving between screens is a plain GET that reloads the
new screen's data and has no other side effects.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from django.contrib.auth.models import AbstractBaseUser, AnonymousUser

from player_state.signals import ADMIN_GROUP_NAME


class Screen(StrEnum):
    """Top-level dashboard screens."""

    DASHBOARD = "dashboard"
    ADOPTION_CENTER = "adoption_center"
    MY_COLLECTION = "my_animas"
    ANIMA_CATALOG = "anima_library"
    ENEMY_CATALOG = "enemy_library"


@dataclass(frozen=True, slots=True)
class NavItem:
    """One sidebar entry."""

    screen: Screen
    label: str
    url_name: str


NAV_ITEMS: tuple[NavItem, ...] = (
    NavItem(Screen.DASHBOARD, "Overview", "core:dashboard"),
    NavItem(Screen.ADOPTION_CENTER, "Adoption Center", "core:adoption_center"),
    NavItem(Screen.MY_COLLECTION, "My Animas", "core:my_animas"),
    NavItem(Screen.ANIMA_CATALOG, "Anima Library", "core:anima_library"),
    NavItem(Screen.ENEMY_CATALOG, "Enemy Library", "core:enemy_library"),
)

_SCREEN_BY_URL_NAME: dict[str, Screen] = {
    "dashboard": Screen.DASHBOARD,
    "adoption_center": Screen.ADOPTION_CENTER,
    "my_animas": Screen.MY_COLLECTION,
    "anima_library": Screen.ANIMA_CATALOG,
    "anima_create": Screen.ANIMA_CATALOG,
    "anima_edit": Screen.ANIMA_CATALOG,
    "enemy_library": Screen.ENEMY_CATALOG,
    "enemy_create": Screen.ENEMY_CATALOG,
    "enemy_edit": Screen.ENEMY_CATALOG,
}


def screen_for_url_name(url_name: str | None) -> Screen | None:
    """Return the screen that owns a resolved `core` URL name."""

    if not url_name:
        return None
    return _SCREEN_BY_URL_NAME.get(url_name)


def can_manage_catalog(user: AbstractBaseUser | AnonymousUser) -> bool:
    """Return True when `user` may create, edit or delete species definitions."""

    if not user.is_authenticated:
        return False
    if user.is_staff or user.is_superuser:
        return True
    return user.groups.filter(name=ADMIN_GROUP_NAME).exists()
