from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

ALL_INDUSTRIES = "all"


class SkillLevel(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"


class PriceMode(str, Enum):
    all = "all"
    free = "free"
    paid = "paid"


class UserProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str = Field(..., min_length=1)
    interests: tuple[str, ...] = ()
    job_title: str = ""
    industry: str = ""
    skill_level: SkillLevel


class Webinar(BaseModel):
    """A catalog entry. Topic and industry tags are opaque strings."""

    model_config = ConfigDict(frozen=True)

    webinar_id: str = Field(..., min_length=1)
    title: str
    description: str = ""
    topics: tuple[str, ...] = ()
    industry: str
    is_free: bool
    skill_level: SkillLevel
    registrants: int = Field(default=0, ge=0)


class Recommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    webinar_id: str
    reason: str


class FilterCriteria(BaseModel):
    """The user's current filter selection.

    Empty sets and ``"all"`` mean "no restriction", so the default
    instance lets every webinar through.
    """

    model_config = ConfigDict(frozen=True)

    topics: frozenset[str] = frozenset()
    industry: str = ALL_INDUSTRIES
    price: PriceMode = PriceMode.all
    skill_levels: frozenset[SkillLevel] = frozenset()


class Catalog(BaseModel):
    """One load of the catalog. ``webinars`` is sorted by popularity."""

    model_config = ConfigDict(frozen=True)

    generation: int
    webinars: tuple[Webinar, ...]
    profiles: dict[str, UserProfile] = Field(default_factory=dict)

    def get_webinar(self, webinar_id: str) -> Webinar | None:
        for webinar in self.webinars:
            if webinar.webinar_id == webinar_id:
                return webinar
        return None


class AvailableFilters(BaseModel):
    topics: list[str]
    industries: list[str]
    skill_levels: list[SkillLevel]
    price_modes: list[PriceMode]
