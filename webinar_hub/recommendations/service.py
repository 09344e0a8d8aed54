from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence

from ..analytics.store import record_event
from ..catalog.models import Recommendation, UserProfile, Webinar
from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from ..llm.groq_client import describe_recommendations
from .matcher import match
from .store import store_failure, store_result

logger = logging.getLogger(__name__)


async def _describe(
    profile: UserProfile,
    webinars: Sequence[Webinar],
    recommendations: Sequence[Recommendation],
    config: LLMConfig,
) -> None:
    try:
        summary = await asyncio.wait_for(
            asyncio.to_thread(
                describe_recommendations, profile, webinars, recommendations, config,
            ),
            timeout=config.timeout,
        )
    except asyncio.TimeoutError:
        logger.warning("LLM summary timed out after %.1fs", config.timeout)
        return
    if summary:
        logger.info("LLM summary for %s: %s", profile.user_id, summary)


async def recommend_webinars(
    profile: UserProfile,
    webinars: Sequence[Webinar],
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> list[Recommendation]:
    """
    Recommend up to three webinars for *profile*.

    The result always comes from the deterministic matcher. When an LLM is
    configured it is also asked to summarise the picks; that text is only
    logged.
    """
    recommendations = match(profile, webinars)
    if config.enabled and config.api_key:
        await _describe(profile, webinars, recommendations, config)
    return recommendations


async def compute_recommendations(
    profile: UserProfile,
    webinars: Sequence[Webinar],
    generation: int,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> None:
    """Background job: compute and store recommendations for one catalog load."""
    start_time = time.time()
    try:
        recommendations = await recommend_webinars(profile, webinars, config)
    except Exception as exc:
        logger.exception("Recommendation run failed for %s", profile.user_id)
        store_failure(profile.user_id, generation, str(exc) or type(exc).__name__)
        record_event("recommendations", {
            "user_id": profile.user_id,
            "generation": generation,
            "results_returned": 0,
            "response_time_ms": round((time.time() - start_time) * 1000, 1),
            "failed": True,
        })
        return

    store_result(profile.user_id, generation, recommendations)
    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    logger.info(
        "Computed %d recommendations for %s (generation %d) in %.1fms",
        len(recommendations), profile.user_id, generation, elapsed_ms,
    )
    record_event("recommendations", {
        "user_id": profile.user_id,
        "generation": generation,
        "results_returned": len(recommendations),
        "response_time_ms": elapsed_ms,
        "failed": False,
    })
