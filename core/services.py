"""Service-layer functions for the core app.

Services in `core` coordinate persistence through the storage port
(`core.store`) with the pure stat modules in `analysis`. Views call services
and translate the `core.errors` taxonomy into messages or setup prompts.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from django.core.exceptions import ValidationError
from django.db.models import F

from analysis.dto import StatBundle
from analysis.effective_stats import effective_stats
from analysis.genetics import roll_genetic_bonus
from analysis.stat_ranges import AnimaLevel
from core.errors import DefinitionInUseError, InvalidReferenceError, NotFoundError, StoreError
from core.store import ACTIVITIES, ANIMAS, ENEMIES, PLAYER_ANIMAS, PLAYERS
from definitions.models import AnimaDefinition, EnemyDefinition
from player_state.models import Activity, Player, PlayerAnima

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_LIMIT = 10
CATALOG_ORDER: tuple[str, ...] = ("-created_at", "-id")


@dataclass(frozen=True, slots=True)
class CollectionRow:
    """One owned creature joined with its species and total stats."""

    player_anima: PlayerAnima
    species: AnimaDefinition
    stats: StatBundle


@dataclass(frozen=True, slots=True)
class DashboardMetrics:
    """Headline numbers for the dashboard metrics grid."""

    bits: int
    manager_exp: int
    total_animas: int


@dataclass(frozen=True, slots=True)
class RewardClaim:
    """Outcome of recording a victory over a catalog adversary."""

    player_anima: PlayerAnima
    enemy: EnemyDefinition
    reward_exp: int
    reward_bits: int


def player_for_user(user) -> Player:
    """Return the Player profile of `user`, creating it on first use."""

    existing = PLAYERS.list({"user": user}, limit=1)
    if existing:
        return existing[0]
    return PLAYERS.insert(user=user, display_name=user.get_username())


# ---------------------------------------------------------------------------
# Activity feed
# ---------------------------------------------------------------------------


def log_activity(player: Player, activity_type: str, message: str) -> Activity | None:
    """Append an entry to the player's activity feed.

    Feed writes are best-effort: a store failure is logged and swallowed so
    the primary action is never reported as failed because of the feed.

    Returns:
        The created Activity, or None when the write failed.
    """

    try:
        return ACTIVITIES.insert(player=player, type=activity_type, message=message[:255])
    except StoreError as exc:
        logger.warning("Could not record activity for player=%s: %s", player.pk, exc)
        return None


def recent_activities(player: Player, *, limit: int = RECENT_ACTIVITY_LIMIT) -> list[Activity]:
    """Return the player's most recent activity entries, newest first."""

    return ACTIVITIES.list({"player": player}, ("-timestamp", "-id"), limit=limit)


# ---------------------------------------------------------------------------
# Adoption invariant manager
# ---------------------------------------------------------------------------


def adoptable_species() -> list[AnimaDefinition]:
    """Return the Rookie-tier creature species offered for adoption."""

    return ANIMAS.list({"level": AnimaLevel.ROOKIE.value}, CATALOG_ORDER)


def adopt_anima(
    *,
    player: Player,
    anima_definition_id: int,
    nickname: str | None = None,
    rng: random.Random | None = None,
) -> PlayerAnima:
    """Create a player-owned copy of a creature species.

    The first creature a player ever holds becomes active; later adoptions
    are inactive and leave existing rows untouched.

    Args:
        player: Owning player derived from the authenticated user.
        anima_definition_id: Primary key of the species to adopt.
        nickname: Optional display override.
        rng: Optional random source for the genetic bonus roll.

    Returns:
        The persisted PlayerAnima.

    Raises:
        InvalidReferenceError: When the species does not exist.
    """

    try:
        definition = ANIMAS.get(anima_definition_id)
    except NotFoundError as exc:
        raise InvalidReferenceError(f"Unknown species {anima_definition_id!r}.") from exc

    bonus = roll_genetic_bonus(rng)
    with PLAYER_ANIMAS.atomic():
        PLAYERS.list({"pk": player.pk}, lock=True)
        already_owned = PLAYER_ANIMAS.count({"player": player})
        player_anima = PLAYER_ANIMAS.insert(
            player=player,
            anima_definition=definition,
            nickname=(nickname or "").strip(),
            is_active=already_owned == 0,
            current_exp=0,
            attack_extra=bonus.attack_extra,
            defense_extra=bonus.defense_extra,
            max_health_extra=bonus.max_health_extra,
        )

    log_activity(player, Activity.Type.ACTION, f"Adopted {player_anima.display_name}.")
    return player_anima


def set_active_anima(*, player: Player, player_anima_id: int) -> PlayerAnima:
    """Make one owned creature the player's only active creature.

    Deactivation of every owned row and activation of the target run in one
    transaction with the player's rows locked, so readers never see zero or
    two active rows.

    Raises:
        NotFoundError: When the target is not owned by `player`.
    """

    with PLAYER_ANIMAS.atomic():
        owned = PLAYER_ANIMAS.list({"player": player}, lock=True)
        if not any(row.pk == player_anima_id for row in owned):
            raise NotFoundError(f"Anima {player_anima_id} not found.")
        PLAYER_ANIMAS.update_where({"player": player}, is_active=False)
        target = PLAYER_ANIMAS.update(player_anima_id, is_active=True)

    log_activity(player, Activity.Type.UPDATE, f"{target.display_name} is now your main Anima.")
    return target


def release_anima(*, player: Player, player_anima_id: int) -> PlayerAnima:
    """Delete an owned creature.

    No other creature is promoted when the released one was active.

    Returns:
        The released row as it was loaded before deletion.

    Raises:
        NotFoundError: When the target is absent or not owned by `player`.
    """

    player_anima = PLAYER_ANIMAS.get(player_anima_id, player=player)
    name = player_anima.display_name
    PLAYER_ANIMAS.delete(player_anima_id, player=player)
    log_activity(player, Activity.Type.ALERT, f"Released {name}.")
    return player_anima


def rename_anima(*, player: Player, player_anima_id: int, nickname: str) -> PlayerAnima:
    """Set or clear the display nickname of an owned creature."""

    player_anima = PLAYER_ANIMAS.get(player_anima_id, player=player)
    player_anima.nickname = (nickname or "").strip()
    return PLAYER_ANIMAS.save(player_anima)


def gain_experience(player_anima: PlayerAnima, amount: int) -> PlayerAnima:
    """Add experience to an owned creature.

    Raises:
        ValidationError: When `amount` is negative.
    """

    if amount < 0:
        raise ValidationError("Experience gains must be non-negative.")
    return PLAYER_ANIMAS.update(player_anima.pk, current_exp=F("current_exp") + amount)


def claim_enemy_rewards(*, player: Player, enemy_definition_id: int) -> RewardClaim:
    """Grant the rewards for defeating a catalog adversary.

    The active creature gains the adversary's experience reward; the player
    gains its currency reward and the same amount of manager experience.

    Raises:
        InvalidReferenceError: When the adversary does not exist.
        NotFoundError: When the player has no active creature.
    """

    try:
        enemy = ENEMIES.get(enemy_definition_id)
    except NotFoundError as exc:
        raise InvalidReferenceError(f"Unknown enemy {enemy_definition_id!r}.") from exc

    with PLAYER_ANIMAS.atomic():
        active = PLAYER_ANIMAS.list({"player": player, "is_active": True}, lock=True, limit=1)
        if not active:
            raise NotFoundError("Choose a main Anima before claiming rewards.")
        player_anima = gain_experience(active[0], enemy.reward_exp)
        PLAYERS.update(
            player.pk,
            bits=F("bits") + enemy.reward_bits,
            manager_exp=F("manager_exp") + enemy.reward_exp,
        )

    log_activity(
        player,
        Activity.Type.ACTION,
        f"{player_anima.display_name} defeated {enemy.species} (+{enemy.reward_exp} XP, +{enemy.reward_bits} bits).",
    )
    return RewardClaim(
        player_anima=player_anima,
        enemy=enemy,
        reward_exp=enemy.reward_exp,
        reward_bits=enemy.reward_bits,
    )


# ---------------------------------------------------------------------------
# Collection + dashboard reads
# ---------------------------------------------------------------------------


def collection_rows(player: Player) -> list[CollectionRow]:
    """Return the player's creatures, active first, with total stats."""

    owned = PLAYER_ANIMAS.list(
        {"player": player},
        ("-is_active", "created_at", "id"),
        select_related=("anima_definition",),
    )
    return [
        CollectionRow(
            player_anima=row,
            species=row.anima_definition,
            stats=effective_stats(row, row.anima_definition),
        )
        for row in owned
    ]


def dashboard_metrics(player: Player) -> DashboardMetrics:
    """Return the dashboard headline numbers for `player`."""

    fresh = PLAYERS.get(player.pk)
    return DashboardMetrics(
        bits=fresh.bits,
        manager_exp=fresh.manager_exp,
        total_animas=PLAYER_ANIMAS.count({"player": player}),
    )


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


def _catalog_filters(query: str, level: str) -> dict[str, str]:
    filters: dict[str, str] = {}
    if query.strip():
        filters["species__icontains"] = query.strip()
    if level:
        filters["level"] = level
    return filters


def list_anima_definitions(*, query: str = "", level: str = "") -> list[AnimaDefinition]:
    """Return creature species, newest first, filtered by name and tier."""

    return ANIMAS.list(_catalog_filters(query, level), CATALOG_ORDER)


def list_enemy_definitions(*, query: str = "", level: str = "") -> list[EnemyDefinition]:
    """Return adversary species, newest first, filtered by name and tier."""

    return ENEMIES.list(_catalog_filters(query, level), CATALOG_ORDER)


def evolution_index(definitions: list[AnimaDefinition]) -> dict[int, AnimaDefinition]:
    """Build an id -> definition map for in-memory evolution lookups.

    The catalog is loaded once per screen; evolution pointers are resolved
    against this map instead of joining the table to itself.
    """

    return {definition.pk: definition for definition in definitions}


def evolution_chain(
    definition: AnimaDefinition, index: dict[int, AnimaDefinition]
) -> list[AnimaDefinition]:
    """Return the successive evolutions of `definition` found in `index`.

    Traversal stops at the first missing or already-visited id, so a cyclic
    chain written before validation existed still terminates.
    """

    chain: list[AnimaDefinition] = []
    seen = {definition.pk}
    cursor = definition.next_evolution_id
    while cursor is not None and cursor not in seen:
        nxt = index.get(cursor)
        if nxt is None:
            break
        chain.append(nxt)
        seen.add(cursor)
        cursor = nxt.next_evolution_id
    return chain


def save_anima_definition(definition: AnimaDefinition, *, actor: Player | None = None) -> AnimaDefinition:
    """Validate and persist a creature species (create or update).

    Raises:
        ValidationError: When a field is missing or invalid.
    """

    return _save_definition(definition, store=ANIMAS, actor=actor, label="Anima")


def save_enemy_definition(definition: EnemyDefinition, *, actor: Player | None = None) -> EnemyDefinition:
    """Validate and persist an adversary species (create or update).

    Raises:
        ValidationError: When a field is missing or invalid.
    """

    return _save_definition(definition, store=ENEMIES, actor=actor, label="Enemy")


def _save_definition(definition, *, store, actor: Player | None, label: str):
    creating = definition.pk is None
    definition.full_clean()
    store.save(definition)
    if actor is not None:
        verb = "Created" if creating else "Updated"
        log_activity(actor, Activity.Type.UPDATE, f"{verb} {label} species {definition.species}.")
    return definition


def delete_anima_definition(definition_id: int, *, actor: Player | None = None) -> None:
    """Delete a creature species.

    Deletion is restricted while any player owns a copy of the species.

    Raises:
        NotFoundError: When the species does not exist.
        DefinitionInUseError: When player-owned creatures reference it.
    """

    definition = ANIMAS.get(definition_id)
    owners = PLAYER_ANIMAS.count({"anima_definition_id": definition_id})
    if owners:
        raise DefinitionInUseError(
            f"{definition.species} is owned by {owners} player Anima(s) and cannot be deleted."
        )
    ANIMAS.delete(definition_id)
    if actor is not None:
        log_activity(actor, Activity.Type.ALERT, f"Deleted Anima species {definition.species}.")


def delete_enemy_definition(definition_id: int, *, actor: Player | None = None) -> None:
    """Delete an adversary species.

    Raises:
        NotFoundError: When the species does not exist.
    """

    definition = ENEMIES.get(definition_id)
    ENEMIES.delete(definition_id)
    if actor is not None:
        log_activity(actor, Activity.Type.ALERT, f"Deleted Enemy species {definition.species}.")
