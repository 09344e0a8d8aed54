from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..catalog.models import (
    FilterCriteria,
    PriceMode,
    Recommendation,
    SkillLevel,
    Webinar,
)


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class FilterEditKind(str, Enum):
    toggle_topic = "toggle_topic"
    toggle_skill_level = "toggle_skill_level"
    set_industry = "set_industry"
    set_price = "set_price"
    clear = "clear"


class FilterEdit(BaseModel):
    """A single change made in the filter panel."""

    kind: FilterEditKind
    value: str | None = None
    checked: bool = True

    @model_validator(mode="after")
    def value_matches_kind(self) -> "FilterEdit":
        if self.kind is FilterEditKind.clear:
            return self
        if not self.value:
            msg = f"{self.kind.value} requires a value"
            raise ValueError(msg)
        if self.kind is FilterEditKind.set_price:
            PriceMode(self.value)
        elif self.kind is FilterEditKind.toggle_skill_level:
            SkillLevel(self.value)
        return self


class RecommendationStatus(str, Enum):
    pending = "pending"
    ready = "ready"
    failed = "failed"


class RecommendationState(BaseModel):
    """Recommendations for one user and one catalog generation."""

    model_config = ConfigDict(frozen=True)

    status: RecommendationStatus
    generation: int
    recommendations: tuple[Recommendation, ...] = ()
    error: str | None = None


class RecommendedWebinar(BaseModel):
    webinar: Webinar
    reason: str


class WebinarView(BaseModel):
    criteria: FilterCriteria
    recommendation_status: RecommendationStatus
    recommended: list[RecommendedWebinar]
    others: list[Webinar]
    registered: list[str]
    total_webinars: int
    total_filtered: int


class RegistrationResponse(BaseModel):
    webinar_id: str
    status: str
    registered: list[str]
