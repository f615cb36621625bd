"""Signals for Player lifecycle, login activity and authorization groups."""

from __future__ import annotations

from django.apps import apps
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group, Permission
from django.contrib.auth.signals import user_logged_in
from django.db.models.signals import post_migrate, post_save
from django.dispatch import receiver

from player_state.models import Activity, Player

PLAYER_GROUP_NAME = "player"
ADMIN_GROUP_NAME = "admin"


@receiver(post_migrate)
def ensure_default_groups(sender, **kwargs) -> None:
    """Ensure the `player` and `admin` groups exist with their permissions.

    This runs on every `post_migrate` invocation so permissions can be attached
    as each app's models become available.
    """

    Group.objects.get_or_create(name=PLAYER_GROUP_NAME)
    Group.objects.get_or_create(name=ADMIN_GROUP_NAME)
    _ensure_default_group_permissions()


UserModel = get_user_model()


@receiver(post_save, sender=UserModel)
def ensure_player_for_user(sender, instance, created: bool, **kwargs) -> None:
    """Create the Player profile and grant the `player` group on sign-up."""

    if kwargs.get("raw", False) or not created:
        return

    from core.services import log_activity

    group, _ = Group.objects.get_or_create(name=PLAYER_GROUP_NAME)
    instance.groups.add(group)
    player, _ = Player.objects.get_or_create(user=instance, defaults={"display_name": instance.get_username()})
    log_activity(player, Activity.Type.ACTION, "Account created.")


@receiver(user_logged_in)
def record_login_activity(sender, request, user, **kwargs) -> None:
    """Add a login entry to the signed-in player's activity feed."""

    from core.services import log_activity

    player = Player.objects.filter(user=user).first()
    if player is None:
        return
    log_activity(player, Activity.Type.LOGIN, "Signed in.")


def _ensure_default_group_permissions() -> None:
    """Assign default model permissions to the built-in auth groups.

    Players manage their own collection and may only view the catalogs;
    admins manage the catalogs as well.
    """

    player_group, _ = Group.objects.get_or_create(name=PLAYER_GROUP_NAME)
    admin_group, _ = Group.objects.get_or_create(name=ADMIN_GROUP_NAME)

    player_perms = _collect_permissions(
        app_labels=("player_state",),
        actions=("add", "change", "delete", "view"),
    ) | _collect_permissions(
        app_labels=("definitions",),
        actions=("view",),
    )
    admin_perms = _collect_permissions(
        app_labels=("player_state", "definitions"),
        actions=("add", "change", "delete", "view"),
    )

    player_group.permissions.set(player_perms)
    admin_group.permissions.set(admin_perms)


def _collect_permissions(*, app_labels: tuple[str, ...], actions: tuple[str, ...]) -> set[Permission]:
    """Return a permission set for the given apps and actions.

    Args:
        app_labels: Django app labels to include.
        actions: Model permission action prefixes (e.g. "view", "change").

    Returns:
        Set of Permission rows that exist for the selected models/actions.
    """

    permissions: set[Permission] = set()
    for app_label in app_labels:
        try:
            config = apps.get_app_config(app_label)
        except LookupError:
            continue
        for model in config.get_models():
            opts = model._meta
            for action in actions:
                codename = f"{action}_{opts.model_name}"
                perm = Permission.objects.filter(content_type__app_label=app_label, codename=codename).first()
                if perm is not None:
                    permissions.add(perm)
    return permissions
