"""Dashboard greeting + insight from a text-generation model.

The dashboard never waits on this call: it renders the fallback greeting and
loads the generated one afterwards. Any failure yields the fallback.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass

from django.conf import settings
from openai import OpenAI

logger = logging.getLogger(__name__)

INSIGHT_PROMPT = (
    "The user {name} just signed in to the Nexus dashboard for a creature collection game. "
    "Write a short welcome message (at most 20 words) and one motivational or technical "
    '"insight of the day" for a professional dashboard. Reply with a JSON object with the '
    'string keys "greeting" and "insight".'
)


@dataclass(frozen=True, slots=True)
class Insight:
    """Greeting line and optional insight line for the dashboard header."""

    greeting: str
    insight: str = ""

    def as_json(self) -> dict[str, str]:
        """Return a JSON-serializable dict."""

        return asdict(self)


def fallback_insight(display_name: str) -> Insight:
    """Return the static greeting used whenever generation is unavailable."""

    return Insight(greeting=f"Hello, {display_name}! Welcome back.", insight="")


def _client() -> OpenAI:
    return OpenAI(
        api_key=settings.OPENAI_API_KEY,
        timeout=settings.NEXUS_INSIGHT_TIMEOUT_SECONDS,
        max_retries=0,
    )


def generate_insight(display_name: str) -> Insight:
    """Ask the text-generation model for a greeting and insight.

    Args:
        display_name: Name used in the prompt and in the fallback greeting.

    Returns:
        The generated Insight, or `fallback_insight(display_name)` when the API
        key is missing, the call fails, or the reply is not the expected JSON.
    """

    if not settings.OPENAI_API_KEY:
        return fallback_insight(display_name)
    try:
        response = _client().chat.completions.create(
            model=settings.NEXUS_INSIGHT_MODEL,
            messages=[{"role": "user", "content": INSIGHT_PROMPT.format(name=display_name)}],
            response_format={"type": "json_object"},
        )
        payload = json.loads(response.choices[0].message.content or "")
        greeting = str(payload["greeting"]).strip()
        insight = str(payload["insight"]).strip()
    except Exception as exc:
        logger.warning("Insight generation failed for %r: %s", display_name, exc)
        return fallback_insight(display_name)
    if not greeting:
        return fallback_insight(display_name)
    return Insight(greeting=greeting, insight=insight)
