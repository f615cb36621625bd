"""Safe redirect helpers for POST-then-redirect views.

Redirect targets taken from `next` or the referer are user-controlled, so they
are validated with Django's `url_has_allowed_host_and_scheme` before use.
"""

from __future__ import annotations

from collections.abc import Iterable

from django.conf import settings
from django.core.exceptions import DisallowedHost
from django.http import HttpRequest, HttpResponseRedirect
from django.shortcuts import redirect
from django.utils.http import url_has_allowed_host_and_scheme


def _allowed_hosts(request: HttpRequest) -> set[str]:
    hosts = set(settings.ALLOWED_HOSTS)
    try:
        hosts.add(request.get_host())
    except DisallowedHost:
        pass
    return hosts


def is_safe_target(request: HttpRequest, url: str | None) -> bool:
    """Return True when `url` is a non-empty, same-site redirect target."""

    value = (url or "").strip()
    if not value:
        return False
    return url_has_allowed_host_and_scheme(
        url=value,
        allowed_hosts=_allowed_hosts(request),
        require_https=request.is_secure(),
    )


def safe_redirect(
    request: HttpRequest,
    *,
    candidates: Iterable[str | None],
    fallback: str,
) -> HttpResponseRedirect:
    """Redirect to the first safe URL among `candidates`, else to `fallback`."""

    for candidate in candidates:
        if is_safe_target(request, candidate):
            return redirect((candidate or "").strip())
    return redirect(fallback)


def redirect_back(request: HttpRequest, *, fallback: str) -> HttpResponseRedirect:
    """Redirect to the posted `next` value or the referer, else to `fallback`."""

    return safe_redirect(
        request,
        candidates=[request.POST.get("next"), request.META.get("HTTP_REFERER")],
        fallback=fallback,
    )
