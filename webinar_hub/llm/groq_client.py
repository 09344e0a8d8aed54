from __future__ import annotations

import json
import logging
from collections.abc import Sequence

from groq import Groq

from ..catalog.models import Recommendation, UserProfile, Webinar
from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a webinar recommendation assistant. "
    "Based on the user profile and available webinars, recommend up to 3 "
    "of the most relevant webinars to the user. The relevant webinars have "
    "already been selected by the getRelevantWebinars tool; its result is "
    "included below. Explain the picks to the user in a short, friendly "
    "paragraph. Do not suggest webinars the tool did not select."
)


def _build_user_message(
    profile: UserProfile,
    webinars: Sequence[Webinar],
    recommendations: Sequence[Recommendation],
) -> str:
    lines = ["## User Profile", json.dumps(profile.model_dump(mode="json"), indent=2)]

    lines.append("\n## Available Webinars")
    lines.append("| ID | Title | Topics | Industry | Level | Price |")
    lines.append("|---|---|---|---|---|---|")
    for w in webinars:
        lines.append(
            f"| {w.webinar_id} | {w.title} | {', '.join(w.topics)} "
            f"| {w.industry} | {w.skill_level.value} | {'Free' if w.is_free else 'Paid'} |"
        )

    lines.append("\n## getRelevantWebinars result")
    lines.append(json.dumps([r.model_dump() for r in recommendations], indent=2))

    return "\n".join(lines)


def describe_recommendations(
    profile: UserProfile,
    webinars: Sequence[Webinar],
    recommendations: Sequence[Recommendation],
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> str | None:
    """
    Ask the Groq LLM to explain the recommendations in plain language.

    The text is informational only. Returns ``None`` when the LLM is
    disabled or on any failure (timeout, API error, empty output).
    """
    if not config.enabled or not config.api_key:
        return None

    if not webinars:
        return None

    try:
        client = Groq(api_key=config.api_key, timeout=config.timeout)
        response = client.chat.completions.create(
            model=config.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": _build_user_message(profile, webinars, recommendations),
                },
            ],
            max_tokens=config.max_tokens,
            temperature=0.3,
        )

        content = (response.choices[0].message.content or "").strip()
        return content or None

    except Exception:
        logger.warning("Groq LLM call failed, recommendations are unaffected", exc_info=True)
        return None
