from __future__ import annotations

import logging
from collections.abc import Sequence

from ..catalog.models import ALL_INDUSTRIES, FilterCriteria, PriceMode, Webinar

logger = logging.getLogger(__name__)


def _topic_ok(criteria: FilterCriteria, webinar: Webinar) -> bool:
    if not criteria.topics:
        return True
    return not criteria.topics.isdisjoint(webinar.topics)


def _industry_ok(criteria: FilterCriteria, webinar: Webinar) -> bool:
    return criteria.industry == ALL_INDUSTRIES or webinar.industry == criteria.industry


def _price_ok(criteria: FilterCriteria, webinar: Webinar) -> bool:
    if criteria.price is PriceMode.free:
        return webinar.is_free
    if criteria.price is PriceMode.paid:
        return not webinar.is_free
    return True


def _skill_ok(criteria: FilterCriteria, webinar: Webinar) -> bool:
    if not criteria.skill_levels:
        return True
    return webinar.skill_level in criteria.skill_levels


def matches_criteria(criteria: FilterCriteria, webinar: Webinar) -> bool:
    """True when *webinar* passes all four filter tests."""
    return (
        _topic_ok(criteria, webinar)
        and _industry_ok(criteria, webinar)
        and _price_ok(criteria, webinar)
        and _skill_ok(criteria, webinar)
    )


def apply_filters(criteria: FilterCriteria, webinars: Sequence[Webinar]) -> list[Webinar]:
    """Return the webinars that satisfy *criteria*, in their original order."""
    result = [w for w in webinars if matches_criteria(criteria, w)]
    removed = len(webinars) - len(result)
    if removed:
        logger.debug("apply_filters: removed %d of %d webinars", removed, len(webinars))
    return result
