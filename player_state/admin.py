"""Admin registrations for player state models."""

from __future__ import annotations

from django.contrib import admin
from django.db.models import QuerySet

from player_state.models import Activity, Player, PlayerAnima


class PlayerScopedAdmin(admin.ModelAdmin):
    """ModelAdmin that enforces per-player queryset filtering and ownership on create."""

    player_field_name = "player"

    def get_queryset(self, request) -> QuerySet:
        """Return a queryset scoped to the authenticated user's Player."""

        qs = super().get_queryset(request)
        if request.user.is_superuser:
            return qs
        return qs.filter(**{f"{self.player_field_name}__user": request.user})

    def get_readonly_fields(self, request, obj=None):  # type: ignore[override]
        """Prevent non-superusers from reassigning ownership fields."""

        readonly = list(super().get_readonly_fields(request, obj=obj))
        if not request.user.is_superuser and self.player_field_name not in readonly:
            readonly.append(self.player_field_name)
        return tuple(readonly)

    def save_model(self, request, obj, form, change) -> None:  # type: ignore[override]
        """Assign player ownership automatically for non-superusers."""

        if not request.user.is_superuser and not change:
            setattr(obj, self.player_field_name, request.user.player)
        super().save_model(request, obj, form, change)


@admin.register(Player)
class PlayerAdmin(admin.ModelAdmin):
    """Admin configuration for Player."""

    list_display = ("display_name", "user", "bits", "manager_exp", "created_at")
    search_fields = ("display_name", "user__username")

    def get_queryset(self, request) -> QuerySet:
        """Return a queryset scoped to the authenticated user's Player."""

        qs = super().get_queryset(request)
        if request.user.is_superuser:
            return qs
        return qs.filter(user=request.user)

    def get_readonly_fields(self, request, obj=None):  # type: ignore[override]
        """Prevent non-superusers from editing identity or balance fields."""

        readonly = list(super().get_readonly_fields(request, obj=obj))
        if not request.user.is_superuser:
            readonly.extend(["user", "bits", "manager_exp"])
        return tuple(dict.fromkeys(readonly))


@admin.register(PlayerAnima)
class PlayerAnimaAdmin(PlayerScopedAdmin):
    """Admin configuration for PlayerAnima.

    Genetic bonuses are rolled once at adoption and never edited here.
    """

    list_display = ("player", "anima_definition", "nickname", "is_active", "current_exp", "created_at")
    list_filter = ("is_active", "anima_definition__level")
    search_fields = ("nickname", "anima_definition__species")
    readonly_fields = ("attack_extra", "defense_extra", "max_health_extra", "is_active")


@admin.register(Activity)
class ActivityAdmin(PlayerScopedAdmin):
    """Admin configuration for Activity."""

    list_display = ("player", "type", "message", "timestamp")
    list_filter = ("type",)
    search_fields = ("message",)
