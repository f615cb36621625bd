"""Admin registrations for the species catalogs."""

from __future__ import annotations

from django.contrib import admin

from definitions.models import AnimaDefinition, EnemyDefinition


@admin.register(AnimaDefinition)
class AnimaDefinitionAdmin(admin.ModelAdmin):
    """Admin configuration for AnimaDefinition."""

    list_display = ("species", "level", "max_health", "attack", "defense", "next_evolution", "created_at")
    list_filter = ("level",)
    search_fields = ("species",)
    autocomplete_fields = ("next_evolution",)
    exclude = ("image_data",)


@admin.register(EnemyDefinition)
class EnemyDefinitionAdmin(admin.ModelAdmin):
    """Admin configuration for EnemyDefinition."""

    list_display = ("species", "level", "max_health", "attack", "defense", "reward_exp", "reward_bits")
    list_filter = ("level",)
    search_fields = ("species",)
    exclude = ("image_data",)
