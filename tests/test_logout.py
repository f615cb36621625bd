"""Integration tests for signing out from the sidebar."""

from __future__ import annotations

import pytest
from django.urls import reverse

from core.navigation import NAV_ITEMS

pytestmark = [pytest.mark.integration, pytest.mark.django_db]


def test_sidebar_places_logout_form_after_navigation(auth_client) -> None:
    """Every screen link is listed, followed by a CSRF-protected logout form."""

    html = auth_client.get(reverse("core:dashboard")).content.decode("utf-8")

    logout_form = html.index(f'action="{reverse("logout")}"')
    for item in NAV_ITEMS:
        link = html.index(f'href="{reverse(item.url_name)}"')
        assert link < logout_form
        assert item.label in html
    assert "csrfmiddlewaretoken" in html[logout_form:]
    assert f'href="{reverse("logout")}"' not in html


def test_logout_lands_on_combined_sign_in_page(auth_client) -> None:
    """Signing out returns to the page offering both sign-in and account creation."""

    response = auth_client.post(reverse("logout"), data={"next": reverse("login")}, follow=True)

    assert response.redirect_chain == [(reverse("login"), 302)]
    html = response.content.decode("utf-8")
    assert "<h2>Sign in</h2>" in html
    assert "<h2>Create account</h2>" in html
    assert "Adoption Center" not in html


def test_screens_require_sign_in_again_after_logout(auth_client) -> None:
    """The collection screen is unreachable once the session ends."""

    auth_client.post(reverse("logout"), data={"next": reverse("login")})

    response = auth_client.get(reverse("core:my_animas"))
    assert response.status_code == 302
    assert response["Location"].startswith(reverse("login"))
