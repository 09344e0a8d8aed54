"""
Pure transitions over the discovery view state.

Every function takes a snapshot and returns a new one; nothing here holds
or mutates shared state.
"""
from __future__ import annotations

from collections.abc import Sequence

from ..catalog.models import FilterCriteria, PriceMode, Recommendation, SkillLevel
from .models import (
    FilterEdit,
    FilterEditKind,
    RecommendationState,
    RecommendationStatus,
)

DEFAULT_CRITERIA = FilterCriteria()


def _toggle(values: frozenset, value, checked: bool) -> frozenset:
    return values | {value} if checked else values - {value}


def apply_filter_change(criteria: FilterCriteria, edit: FilterEdit) -> FilterCriteria:
    """Return the criteria that result from applying *edit*."""
    if edit.kind is FilterEditKind.clear:
        return DEFAULT_CRITERIA
    if edit.kind is FilterEditKind.toggle_topic:
        topics = _toggle(criteria.topics, edit.value, edit.checked)
        return criteria.model_copy(update={"topics": topics})
    if edit.kind is FilterEditKind.toggle_skill_level:
        levels = _toggle(criteria.skill_levels, SkillLevel(edit.value), edit.checked)
        return criteria.model_copy(update={"skill_levels": levels})
    if edit.kind is FilterEditKind.set_industry:
        return criteria.model_copy(update={"industry": edit.value})
    if edit.kind is FilterEditKind.set_price:
        return criteria.model_copy(update={"price": PriceMode(edit.value)})
    return criteria


def register(registered: frozenset[str], webinar_id: str) -> tuple[frozenset[str], bool]:
    """
    Add *webinar_id* to the registration set.

    Returns the new set and whether the id was already registered, in
    which case the set is returned unchanged.
    """
    if webinar_id in registered:
        return registered, True
    return registered | {webinar_id}, False


def pending(generation: int) -> RecommendationState:
    return RecommendationState(status=RecommendationStatus.pending, generation=generation)


def resolve(
    state: RecommendationState,
    generation: int,
    recommendations: Sequence[Recommendation],
) -> RecommendationState:
    """Apply a finished result, ignoring results computed for another catalog load."""
    if state.generation != generation:
        return state
    return RecommendationState(
        status=RecommendationStatus.ready,
        generation=generation,
        recommendations=tuple(recommendations),
    )


def fail(state: RecommendationState, generation: int, error: str) -> RecommendationState:
    """Resolve a failed call to "no recommendations" plus an error message."""
    if state.generation != generation:
        return state
    return RecommendationState(
        status=RecommendationStatus.failed,
        generation=generation,
        error=error,
    )
