from __future__ import annotations

from collections.abc import Sequence

from ..catalog.models import Recommendation, Webinar
from .models import RecommendedWebinar


def partition(
    filtered: Sequence[Webinar],
    recommendations: Sequence[Recommendation] | None,
) -> tuple[list[RecommendedWebinar], list[Webinar]]:
    """
    Split *filtered* into (recommended, others), keeping the filtered order
    on both sides.

    ``recommendations`` is ``None`` while the recommendation call is still
    pending; every webinar then lands in ``others``.
    """
    if not recommendations:
        return [], list(filtered)

    reasons = {r.webinar_id: r.reason for r in recommendations}

    recommended: list[RecommendedWebinar] = []
    others: list[Webinar] = []
    for webinar in filtered:
        reason = reasons.get(webinar.webinar_id)
        if reason is not None:
            recommended.append(RecommendedWebinar(webinar=webinar, reason=reason))
        else:
            others.append(webinar)
    return recommended, others
