from __future__ import annotations

from collections.abc import Sequence

from ..catalog.models import Recommendation, UserProfile, Webinar

MAX_RECOMMENDATIONS = 3


def _reason(profile: UserProfile, webinar: Webinar) -> str:
    """Build the justification for one webinar, or "" when nothing matches."""
    clauses: list[str] = []

    interests = set(profile.interests)
    shared = [topic for topic in webinar.topics if topic in interests]
    if shared:
        clauses.append(f"Matches user interests: {', '.join(shared)}.")

    if webinar.industry == profile.industry:
        clauses.append("Matches user industry.")

    if webinar.skill_level == profile.skill_level:
        clauses.append("Matches user skill level.")

    return " ".join(clauses).strip()


def match(profile: UserProfile, webinars: Sequence[Webinar]) -> list[Recommendation]:
    """
    Pick up to three webinars relevant to *profile*.

    Webinars are taken in input order (the catalog is already sorted by
    popularity); they are not re-ranked by how many clauses matched.
    """
    recommendations: list[Recommendation] = []
    for webinar in webinars:
        reason = _reason(profile, webinar)
        if reason:
            recommendations.append(
                Recommendation(webinar_id=webinar.webinar_id, reason=reason)
            )
        if len(recommendations) == MAX_RECOMMENDATIONS:
            break
    return recommendations
