"""Views for the dashboard, adoption, collection and catalog screens."""

from __future__ import annotations

from django.conf import settings
from django.contrib import messages
from django.contrib.auth import login as auth_login
from django.contrib.auth.decorators import login_required
from django.contrib.auth.forms import AuthenticationForm, UserCreationForm
from django.core.exceptions import PermissionDenied, ValidationError
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import redirect, render
from django.urls import reverse

from analysis.stat_ranges import AnimaLevel
from analysis.stat_roller import InvalidTierError, roll_anima, roll_enemy
from core.errors import (
    DefinitionInUseError,
    InvalidReferenceError,
    NotFoundError,
    SchemaMissingError,
    StoreError,
)
from core.forms import (
    AdoptionForm,
    AnimaDefinitionForm,
    EnemyDefinitionForm,
    RenameAnimaForm,
    anima_filter_form,
    enemy_filter_form,
)
from core.insight import fallback_insight, generate_insight
from core.navigation import can_manage_catalog
from core.redirects import redirect_back, safe_redirect
from core.services import (
    adopt_anima,
    adoptable_species,
    claim_enemy_rewards,
    collection_rows,
    dashboard_metrics,
    delete_anima_definition,
    delete_enemy_definition,
    evolution_index,
    list_anima_definitions,
    list_enemy_definitions,
    player_for_user,
    recent_activities,
    release_anima,
    rename_anima,
    save_anima_definition,
    save_enemy_definition,
    set_active_anima,
)
from core.store import ANIMAS, ENEMIES
from player_state.models import Player

MIGRATE_COMMAND = "python manage.py migrate"


def _request_player(request: HttpRequest) -> Player:
    """Return the Player associated with the authenticated user."""

    return player_for_user(request.user)


def _display_name(request: HttpRequest, player: Player | None) -> str:
    if player is not None and player.display_name:
        return player.display_name
    return request.user.get_username() or "Player"


def _setup_required(request: HttpRequest, error: SchemaMissingError, *, retry_url: str) -> HttpResponse:
    """Render the setup prompt shown when a table or column is missing.

    Args:
        request: Incoming request.
        error: Normalized schema failure from the storage port.
        retry_url: Screen URL to reload once setup has been completed.

    Returns:
        HTTP 503 response with the migrate command and a retry link.
    """

    return render(
        request,
        "core/setup_required.html",
        {
            "collection": error.collection,
            "error_message": str(error),
            "migrate_command": MIGRATE_COMMAND,
            "retry_url": retry_url,
        },
        status=503,
    )


def _post_id(request: HttpRequest, name: str) -> int:
    try:
        return int(request.POST.get(name) or 0)
    except ValueError:
        return 0


def _require_catalog_admin(request: HttpRequest) -> None:
    if not can_manage_catalog(request.user):
        raise PermissionDenied("Only administrators can change the species catalog.")


def login_view(request: HttpRequest) -> HttpResponse:
    """Render a combined sign-in + account creation page."""

    if request.user.is_authenticated:
        return redirect(settings.LOGIN_REDIRECT_URL)

    next_url = request.GET.get("next", "")
    login_form = AuthenticationForm(request)
    signup_form = UserCreationForm()

    if request.method == "POST":
        next_url = request.POST.get("next", next_url)
        if "signup_submit" in request.POST:
            signup_form = UserCreationForm(request.POST)
            if signup_form.is_valid():
                user = signup_form.save()
                auth_login(request, user)
                return safe_redirect(
                    request,
                    candidates=[request.POST.get("next"), request.GET.get("next")],
                    fallback=settings.LOGIN_REDIRECT_URL,
                )
        else:
            login_form = AuthenticationForm(request, data=request.POST)
            if login_form.is_valid():
                auth_login(request, login_form.get_user())
                return safe_redirect(
                    request,
                    candidates=[request.POST.get("next"), request.GET.get("next")],
                    fallback=settings.LOGIN_REDIRECT_URL,
                )

    return render(
        request,
        "registration/login.html",
        {
            "login_form": login_form,
            "signup_form": signup_form,
            "next": next_url,
        },
    )


@login_required
def dashboard(request: HttpRequest) -> HttpResponse:
    """Render the overview: metrics grid, recent activity and greeting.

    The generated greeting is loaded afterwards from `insight_api`; the page
    renders immediately with the fallback greeting.
    """

    retry_url = reverse("core:dashboard")
    player: Player | None = None
    metrics = None
    activities = []
    try:
        player = _request_player(request)
        metrics = dashboard_metrics(player)
        activities = recent_activities(player)
    except SchemaMissingError as exc:
        return _setup_required(request, exc, retry_url=retry_url)
    except StoreError:
        messages.error(request, "Could not load dashboard data.")

    return render(
        request,
        "core/dashboard.html",
        {
            "metrics": metrics,
            "activities": activities,
            "greeting": fallback_insight(_display_name(request, player)),
            "insight_url": reverse("core:insight_api"),
        },
    )


@login_required
def insight_api(request: HttpRequest) -> JsonResponse:
    """Return the generated dashboard greeting as JSON."""

    try:
        player = _request_player(request)
    except StoreError:
        player = None
    return JsonResponse(generate_insight(_display_name(request, player)).as_json())


@login_required
def adoption_center(request: HttpRequest) -> HttpResponse:
    """List Rookie species and adopt one into the player's collection."""

    retry_url = reverse("core:adoption_center")
    try:
        player = _request_player(request)
    except SchemaMissingError as exc:
        return _setup_required(request, exc, retry_url=retry_url)
    except StoreError:
        messages.error(request, "Could not load your profile.")
        return redirect("core:dashboard")

    if request.method == "POST":
        form = AdoptionForm(request.POST)
        if not form.is_valid():
            messages.error(request, "Choose a species to adopt.")
            return redirect(retry_url)
        anima_definition_id = form.cleaned_data["anima_definition_id"]
        try:
            if not ANIMAS.count({"pk": anima_definition_id, "level": AnimaLevel.ROOKIE.value}):
                raise InvalidReferenceError(f"Species {anima_definition_id} is not available for adoption.")
            player_anima = adopt_anima(
                player=player,
                anima_definition_id=anima_definition_id,
                nickname=form.cleaned_data.get("nickname"),
            )
        except InvalidReferenceError:
            messages.error(request, "That species is not available for adoption.")
            return redirect(retry_url)
        except ValidationError:
            messages.error(request, "Could not adopt that Anima. Please try again.")
            return redirect(retry_url)
        except SchemaMissingError as exc:
            return _setup_required(request, exc, retry_url=retry_url)
        except StoreError:
            messages.error(request, "Could not adopt that Anima. Please try again.")
            return redirect(retry_url)

        if player_anima.is_active:
            messages.success(request, f"Adopted {player_anima.display_name}. It is now your main Anima.")
        else:
            messages.success(request, f"Adopted {player_anima.display_name}.")
        return redirect("core:my_animas")

    rookies = []
    try:
        rookies = adoptable_species()
    except SchemaMissingError as exc:
        return _setup_required(request, exc, retry_url=retry_url)
    except StoreError:
        messages.error(request, "Could not load species.")

    return render(
        request,
        "core/adoption_center.html",
        {
            "rookies": rookies,
            "adoption_available": bool(rookies),
            "adoption_form": AdoptionForm(),
        },
    )


@login_required
def my_animas(request: HttpRequest) -> HttpResponse:
    """Render and manage the player's collection (activate, rename, release)."""

    retry_url = reverse("core:my_animas")
    try:
        player = _request_player(request)
    except SchemaMissingError as exc:
        return _setup_required(request, exc, retry_url=retry_url)
    except StoreError:
        messages.error(request, "Could not load your profile.")
        return redirect("core:dashboard")

    if request.method == "POST":
        action = (request.POST.get("action") or "").strip()
        player_anima_id = _post_id(request, "player_anima_id")
        redirect_response = redirect_back(request, fallback=retry_url)
        try:
            if action == "set_active":
                target = set_active_anima(player=player, player_anima_id=player_anima_id)
                messages.success(request, f"{target.display_name} is now your main Anima.")
            elif action == "release":
                released = release_anima(player=player, player_anima_id=player_anima_id)
                messages.success(request, f"Released {released.display_name}.")
            elif action == "rename":
                form = RenameAnimaForm(request.POST)
                if not form.is_valid():
                    messages.error(request, "Nickname is too long.")
                    return redirect_response
                renamed = rename_anima(
                    player=player,
                    player_anima_id=player_anima_id,
                    nickname=form.cleaned_data.get("nickname") or "",
                )
                messages.success(request, f"Saved nickname for {renamed.anima_definition.species}.")
            else:
                messages.error(request, "Unknown action.")
        except NotFoundError:
            messages.error(request, "Anima not found.")
        except SchemaMissingError as exc:
            return _setup_required(request, exc, retry_url=retry_url)
        except StoreError:
            messages.error(request, "Could not update your Animas. Please try again.")
        return redirect_response

    rows = []
    try:
        rows = collection_rows(player)
    except SchemaMissingError as exc:
        return _setup_required(request, exc, retry_url=retry_url)
    except StoreError:
        messages.error(request, "Could not load your Animas.")

    return render(request, "core/my_animas.html", {"rows": rows})


@login_required
def anima_library(request: HttpRequest) -> HttpResponse:
    """Render the creature catalog; administrators may delete from here."""

    retry_url = reverse("core:anima_library")
    if request.method == "POST":
        _require_catalog_admin(request)
        action = (request.POST.get("action") or "").strip()
        if action != "delete":
            messages.error(request, "Unknown action.")
            return redirect(retry_url)
        try:
            delete_anima_definition(_post_id(request, "definition_id"), actor=_request_player(request))
        except DefinitionInUseError as exc:
            messages.error(request, str(exc))
        except NotFoundError:
            messages.error(request, "Species not found.")
        except SchemaMissingError as exc:
            return _setup_required(request, exc, retry_url=retry_url)
        except StoreError:
            messages.error(request, "Could not delete that species.")
        else:
            messages.success(request, "Species deleted.")
        return redirect_back(request, fallback=retry_url)

    filter_form = anima_filter_form(request.GET)
    filter_form.is_valid()
    query = (filter_form.cleaned_data.get("q") or "").strip()
    level = (filter_form.cleaned_data.get("level") or "").strip()

    entries = []
    try:
        catalog = list_anima_definitions()
    except SchemaMissingError as exc:
        return _setup_required(request, exc, retry_url=retry_url)
    except StoreError:
        messages.error(request, "Could not load species.")
        catalog = []

    index = evolution_index(catalog)
    for definition in catalog:
        if query and query.casefold() not in definition.species.casefold():
            continue
        if level and definition.level != level:
            continue
        entries.append({"definition": definition, "next_evolution": index.get(definition.next_evolution_id)})

    return render(
        request,
        "core/anima_library.html",
        {"entries": entries, "filter_form": filter_form, "total": len(catalog)},
    )


def _definition_form_view(
    request: HttpRequest,
    *,
    pk: int | None,
    store,
    form_class,
    roll_fn,
    save_fn,
    template: str,
    library_url_name: str,
    keep_posted: tuple[str, ...] = (),
) -> HttpResponse:
    """Shared create/edit flow for both species catalogs.

    Posting `action=roll` re-renders the form with stats rolled for the
    selected tier without saving. Fields named in `keep_posted` keep their
    posted value when one was given.
    """

    _require_catalog_admin(request)
    library_url = reverse(library_url_name)
    instance = None
    if pk is not None:
        try:
            instance = store.get(pk)
        except NotFoundError:
            messages.error(request, "Species not found.")
            return redirect(library_url)
        except SchemaMissingError as exc:
            return _setup_required(request, exc, retry_url=request.path)
        except StoreError:
            messages.error(request, "Could not load that species.")
            return redirect(library_url)

    if request.method == "POST" and request.POST.get("action") == "roll":
        initial = {name: request.POST.get(name) for name in form_class.Meta.fields if name in request.POST}
        tier = request.POST.get("level") or ""
        try:
            rolled = roll_fn(tier).as_fields()
            for name in keep_posted:
                if request.POST.get(name):
                    rolled.pop(name, None)
            initial.update(rolled)
        except InvalidTierError:
            messages.error(request, "Pick a tier before rolling stats.")
        form = form_class(instance=instance, initial=initial)
        return render(request, template, {"form": form, "instance": instance})

    if request.method == "POST":
        form = form_class(request.POST, request.FILES, instance=instance)
        if form.is_valid():
            definition = form.save(commit=False)
            try:
                save_fn(definition, actor=_request_player(request))
            except ValidationError as exc:
                form.add_error(None, exc)
            except SchemaMissingError as exc:
                return _setup_required(request, exc, retry_url=request.path)
            except StoreError:
                messages.error(request, "Could not save that species.")
            else:
                messages.success(request, f"Saved {definition.species}.")
                return redirect(library_url)
    else:
        form = form_class(instance=instance)

    return render(request, template, {"form": form, "instance": instance})


@login_required
def anima_edit(request: HttpRequest, pk: int | None = None) -> HttpResponse:
    """Create (no pk) or edit a creature species."""

    return _definition_form_view(
        request,
        pk=pk,
        store=ANIMAS,
        form_class=AnimaDefinitionForm,
        roll_fn=roll_anima,
        save_fn=save_anima_definition,
        template="core/anima_form.html",
        library_url_name="core:anima_library",
    )


@login_required
def enemy_edit(request: HttpRequest, pk: int | None = None) -> HttpResponse:
    """Create (no pk) or edit an adversary species."""

    return _definition_form_view(
        request,
        pk=pk,
        store=ENEMIES,
        form_class=EnemyDefinitionForm,
        roll_fn=roll_enemy,
        save_fn=save_enemy_definition,
        template="core/enemy_form.html",
        library_url_name="core:enemy_library",
        keep_posted=("attack_speed", "critical_chance"),
    )


@login_required
def enemy_library(request: HttpRequest) -> HttpResponse:
    """Render the adversary catalog; record victories or delete adversaries."""

    retry_url = reverse("core:enemy_library")
    if request.method == "POST":
        action = (request.POST.get("action") or "").strip()
        definition_id = _post_id(request, "definition_id")
        try:
            if action == "delete":
                _require_catalog_admin(request)
                delete_enemy_definition(definition_id, actor=_request_player(request))
                messages.success(request, "Enemy deleted.")
            elif action == "claim_rewards":
                claim = claim_enemy_rewards(player=_request_player(request), enemy_definition_id=definition_id)
                messages.success(
                    request,
                    f"{claim.player_anima.display_name} defeated {claim.enemy.species}: "
                    f"+{claim.reward_exp} XP, +{claim.reward_bits} bits.",
                )
            else:
                messages.error(request, "Unknown action.")
        except InvalidReferenceError:
            messages.error(request, "Enemy not found.")
        except NotFoundError as exc:
            messages.error(request, str(exc) if action == "claim_rewards" else "Enemy not found.")
        except SchemaMissingError as exc:
            return _setup_required(request, exc, retry_url=retry_url)
        except StoreError:
            messages.error(request, "Could not update enemies. Please try again.")
        return redirect_back(request, fallback=retry_url)

    filter_form = enemy_filter_form(request.GET)
    filter_form.is_valid()
    enemies = []
    try:
        enemies = list_enemy_definitions(
            query=filter_form.cleaned_data.get("q") or "",
            level=filter_form.cleaned_data.get("level") or "",
        )
    except SchemaMissingError as exc:
        return _setup_required(request, exc, retry_url=retry_url)
    except StoreError:
        messages.error(request, "Could not load enemies.")

    return render(
        request,
        "core/enemy_library.html",
        {"enemies": enemies, "filter_form": filter_form},
    )
