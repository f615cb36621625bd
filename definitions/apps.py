"""Django app configuration for the species catalogs."""

from __future__ import annotations

from django.apps import AppConfig


class DefinitionsConfig(AppConfig):
    """AppConfig for the Anima and Enemy catalogs."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "definitions"
    verbose_name = "Species catalogs"
