from __future__ import annotations

import json
import logging
import threading
from pathlib import Path

import pandas as pd

from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .models import AvailableFilters, Catalog, PriceMode, SkillLevel, UserProfile, Webinar

logger = logging.getLogger(__name__)

_catalog: Catalog | None = None
_generation: int = 0
# Guards _catalog and _generation; endpoints run on the threadpool.
_lock = threading.Lock()


def _read_raw(path: Path) -> dict:
    if not path.exists():
        msg = f"Catalog file not found: {path}"
        raise FileNotFoundError(msg)
    return json.loads(path.read_text(encoding="utf-8"))


def _sort_by_popularity(webinars: list[Webinar]) -> list[Webinar]:
    if not webinars:
        return []
    counts = pd.Series([w.registrants for w in webinars])
    # Stable sort: ties keep their file order
    order = counts.sort_values(ascending=False, kind="stable").index
    return [webinars[i] for i in order]


def load_catalog(path: Path, generation: int) -> Catalog:
    """Read the catalog file and build an immutable, popularity-sorted snapshot."""
    raw = _read_raw(path)

    # Validate the raw records so omitted fields fall back to model defaults
    parsed = [Webinar.model_validate(r) for r in raw.get("webinars", [])]
    webinars = tuple(_sort_by_popularity(parsed))
    profiles = {
        p.user_id: p
        for p in (UserProfile.model_validate(r) for r in raw.get("profiles", []))
    }

    logger.info(
        "Loaded catalog generation %d: %d webinars, %d profiles",
        generation, len(webinars), len(profiles),
    )
    return Catalog(generation=generation, webinars=webinars, profiles=profiles)


def _load_next(config: CatalogConfig) -> Catalog:
    global _catalog, _generation
    _catalog = load_catalog(config.catalog_path, _generation + 1)
    _generation += 1
    return _catalog


def get_catalog(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> Catalog:
    """Return the in-memory catalog, loading it on first call."""
    with _lock:
        if _catalog is None:
            return _load_next(config)
        return _catalog


def reload_catalog(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> Catalog:
    """Load a fresh snapshot with a new generation, replacing the cached one."""
    with _lock:
        return _load_next(config)


def available_filters(catalog: Catalog) -> AvailableFilters:
    """Filter vocabulary in first-appearance order over the catalog."""
    topics: list[str] = []
    industries: list[str] = []
    for webinar in catalog.webinars:
        for topic in webinar.topics:
            if topic not in topics:
                topics.append(topic)
        if webinar.industry not in industries:
            industries.append(webinar.industry)
    return AvailableFilters(
        topics=topics,
        industries=industries,
        skill_levels=list(SkillLevel),
        price_modes=list(PriceMode),
    )
