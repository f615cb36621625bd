"""Integration tests for dashboard screens and their failure modes."""

from __future__ import annotations

import pytest
from django.db import ProgrammingError
from django.urls import reverse

from core import services, views
from core.errors import SchemaMissingError, StoreError
from core.insight import Insight
from core.navigation import Screen
from player_state.models import PlayerAnima

pytestmark = [pytest.mark.integration, pytest.mark.django_db]


def test_screens_require_login(client) -> None:
    """Anonymous requests are redirected to the login page."""

    response = client.get(reverse("core:my_animas"))
    assert response.status_code == 302
    assert response["Location"].startswith(reverse("login"))


@pytest.mark.parametrize(
    ("url_name", "screen"),
    [
        ("core:dashboard", Screen.DASHBOARD),
        ("core:adoption_center", Screen.ADOPTION_CENTER),
        ("core:my_animas", Screen.MY_COLLECTION),
        ("core:anima_library", Screen.ANIMA_CATALOG),
        ("core:enemy_library", Screen.ENEMY_CATALOG),
    ],
)
def test_each_screen_renders_and_highlights_itself(auth_client, url_name, screen) -> None:
    """Navigating to a screen is a plain GET that marks it current."""

    response = auth_client.get(reverse(url_name))
    assert response.status_code == 200
    assert response.context["current_screen"] == screen


def test_dashboard_renders_fallback_greeting_and_metrics(auth_client, player) -> None:
    """The page never waits on insight generation."""

    response = auth_client.get(reverse("core:dashboard"))
    html = response.content.decode("utf-8")
    assert f"Hello, {player.display_name}! Welcome back." in html
    assert reverse("core:insight_api") in html
    assert response.context["metrics"].total_animas == 0


def test_insight_api_returns_fallback_when_generation_fails(auth_client, player, monkeypatch, settings) -> None:
    """A failing collaborator yields the deterministic greeting and no insight."""

    settings.OPENAI_API_KEY = "test-key"

    def _boom():
        raise RuntimeError("upstream unavailable")

    monkeypatch.setattr("core.insight._client", _boom)
    response = auth_client.get(reverse("core:insight_api"))
    assert response.status_code == 200
    assert response.json() == {"greeting": f"Hello, {player.display_name}! Welcome back.", "insight": ""}


def test_insight_api_returns_generated_greeting(auth_client, monkeypatch) -> None:
    """A successful generation is passed through as JSON."""

    monkeypatch.setattr(views, "generate_insight", lambda name: Insight(greeting=f"Hi {name}", insight="Stay sharp."))
    response = auth_client.get(reverse("core:insight_api"))
    assert response.json() == {"greeting": "Hi alice", "insight": "Stay sharp."}


def test_adoption_center_with_empty_catalog_shows_no_rookies(auth_client) -> None:
    """An empty species table renders an empty adoption screen."""

    response = auth_client.get(reverse("core:adoption_center"))
    assert response.status_code == 200
    assert response.context["rookies"] == []
    assert response.context["adoption_available"] is False
    assert "No Rookie species are available" in response.content.decode("utf-8")


def test_adoption_center_lists_only_rookies(auth_client, rookie, champion) -> None:
    """Higher tiers are not offered for adoption."""

    response = auth_client.get(reverse("core:adoption_center"))
    assert [row.pk for row in response.context["rookies"]] == [rookie.pk]


def test_adopt_post_creates_active_creature_and_redirects(auth_client, player, rookie) -> None:
    """Adopting redirects to the collection screen."""

    response = auth_client.post(
        reverse("core:adoption_center"),
        data={"anima_definition_id": rookie.pk, "nickname": "Sprig"},
    )
    assert response.status_code == 302
    assert response["Location"] == reverse("core:my_animas")
    adopted = PlayerAnima.objects.get(player=player)
    assert adopted.is_active is True
    assert adopted.nickname == "Sprig"


def test_adopt_post_rejects_non_rookie_species(auth_client, player, champion) -> None:
    """Posting a higher-tier species id adopts nothing."""

    response = auth_client.post(reverse("core:adoption_center"), data={"anima_definition_id": champion.pk})
    assert response.status_code == 302
    assert not PlayerAnima.objects.filter(player=player).exists()


def test_adopt_post_with_conflicting_active_row_redirects_with_error(auth_client, player, rookie, monkeypatch) -> None:
    """A second active row rejected by validation is reported, not a server error."""

    auth_client.post(reverse("core:adoption_center"), data={"anima_definition_id": rookie.pk})
    monkeypatch.setattr(services.PLAYER_ANIMAS, "count", lambda *args, **kwargs: 0)

    response = auth_client.post(reverse("core:adoption_center"), data={"anima_definition_id": rookie.pk}, follow=True)
    assert response.redirect_chain[-1][0] == reverse("core:adoption_center")
    assert "Could not adopt that Anima." in response.content.decode("utf-8")
    assert PlayerAnima.objects.filter(player=player).count() == 1
    assert PlayerAnima.objects.filter(player=player, is_active=True).count() == 1


def test_my_animas_actions(auth_client, player, rookie) -> None:
    """Set-active and release run through the collection screen."""

    first = services.adopt_anima(player=player, anima_definition_id=rookie.pk)
    second = services.adopt_anima(player=player, anima_definition_id=rookie.pk)
    url = reverse("core:my_animas")

    auth_client.post(url, data={"action": "set_active", "player_anima_id": second.pk})
    first.refresh_from_db()
    second.refresh_from_db()
    assert (first.is_active, second.is_active) == (False, True)

    auth_client.post(url, data={"action": "release", "player_anima_id": second.pk})
    assert not PlayerAnima.objects.filter(pk=second.pk).exists()
    assert not PlayerAnima.objects.filter(player=player, is_active=True).exists()

    response = auth_client.get(url)
    assert [row.player_anima.pk for row in response.context["rows"]] == [first.pk]


def test_my_animas_reports_missing_target(auth_client) -> None:
    """Acting on an unknown creature shows an error message."""

    response = auth_client.post(
        reverse("core:my_animas"),
        data={"action": "set_active", "player_anima_id": 999},
        follow=True,
    )
    assert "Anima not found." in response.content.decode("utf-8")


def test_missing_relation_shows_setup_prompt(auth_client, monkeypatch) -> None:
    """A 'relation does not exist' failure renders the setup screen."""

    def _missing(*args, **kwargs):
        raise SchemaMissingError(
            'relation "definitions_animadefinition" does not exist',
            code="42P01",
            collection="definitions_animadefinition",
        )

    monkeypatch.setattr(views, "adoptable_species", _missing)
    response = auth_client.get(reverse("core:adoption_center"))
    assert response.status_code == 503
    html = response.content.decode("utf-8")
    assert "python manage.py migrate" in html
    assert f'href="{reverse("core:adoption_center")}"' in html


def test_driver_error_is_classified_into_setup_prompt(auth_client, monkeypatch) -> None:
    """A raw driver ProgrammingError reaching the store also yields the prompt."""

    class _BrokenManager:
        def filter(self, *args, **kwargs):
            raise ProgrammingError('relation "player_state_playeranima" does not exist')

    monkeypatch.setattr(services.PLAYER_ANIMAS, "model", type("Broken", (), {"objects": _BrokenManager()}))
    response = auth_client.get(reverse("core:my_animas"))
    assert response.status_code == 503
    assert "player_state_playeranima" in response.content.decode("utf-8")


def test_generic_store_failure_shows_error_message(auth_client, monkeypatch) -> None:
    """Other store failures show a generic notice instead of the setup prompt."""

    def _fail(*args, **kwargs):
        raise StoreError("connection reset")

    monkeypatch.setattr(views, "collection_rows", _fail)
    response = auth_client.get(reverse("core:my_animas"))
    assert response.status_code == 200
    assert "Could not load your Animas." in response.content.decode("utf-8")
