"""Template context processors for Anima Nexus."""

from __future__ import annotations

from django.http import HttpRequest

from core.navigation import NAV_ITEMS, can_manage_catalog, screen_for_url_name


def navigation(request: HttpRequest) -> dict[str, object]:
    """Expose sidebar entries and the current screen to all templates.

    Args:
        request: Current request object.

    Returns:
        Context dict with `nav_items`, `current_screen` and
        `can_manage_catalog`.
    """

    match = getattr(request, "resolver_match", None)
    url_name = match.url_name if match is not None and match.namespace == "core" else None
    user = getattr(request, "user", None)
    return {
        "nav_items": NAV_ITEMS,
        "current_screen": screen_for_url_name(url_name),
        "can_manage_catalog": bool(user is not None and can_manage_catalog(user)),
    }
