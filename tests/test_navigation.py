"""Unit tests for the screen registry."""

from __future__ import annotations

import pytest
from django.contrib.auth.models import AnonymousUser
from django.urls import reverse

from core.navigation import NAV_ITEMS, Screen, can_manage_catalog, screen_for_url_name

pytestmark = pytest.mark.unit


def test_every_screen_has_one_sidebar_entry() -> None:
    """The sidebar lists each screen exactly once."""

    assert [item.screen for item in NAV_ITEMS] == list(Screen)


def test_sidebar_entries_resolve_to_urls() -> None:
    """Sidebar URL names are routable."""

    for item in NAV_ITEMS:
        assert reverse(item.url_name).startswith("/")


def test_editor_pages_belong_to_their_catalog_screen() -> None:
    """Create/edit pages keep their catalog highlighted."""

    assert screen_for_url_name("anima_edit") is Screen.ANIMA_CATALOG
    assert screen_for_url_name("enemy_create") is Screen.ENEMY_CATALOG
    assert screen_for_url_name("insight_api") is None
    assert screen_for_url_name(None) is None


def test_anonymous_users_cannot_manage_catalog() -> None:
    """Anonymous users never get catalog controls."""

    assert can_manage_catalog(AnonymousUser()) is False
