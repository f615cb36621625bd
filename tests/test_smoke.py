"""Minimal smoke tests for project wiring."""

from __future__ import annotations

import pytest


@pytest.mark.unit
def test_analysis_package_imports_without_django_models() -> None:
    """The pure stat package exposes its public entry points."""

    from analysis import effective_stats, roll, roll_genetic_bonus

    assert callable(roll)
    assert callable(effective_stats)
    assert callable(roll_genetic_bonus)


@pytest.mark.unit
def test_django_project_loads() -> None:
    """Import and initialize Django to verify settings are valid."""

    import os

    import django
    from django.conf import settings

    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "animaNexus.settings")
    django.setup()
    assert "core.apps.CoreConfig" in settings.INSTALLED_APPS
    assert "core.context_processors.navigation" in settings.TEMPLATES[0]["OPTIONS"]["context_processors"]
