from __future__ import annotations

import logging
import os

from fastapi import BackgroundTasks, Depends, FastAPI, HTTPException, Request
from pydantic import ValidationError
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events, record_event
from .auth.dependencies import require_host, require_user
from .auth.users import authenticate
from .catalog.data_store import available_filters, get_catalog, reload_catalog
from .catalog.models import AvailableFilters, Catalog, FilterCriteria, UserProfile
from .recommendations.filters import apply_filters
from .recommendations.models import (
    FilterEdit,
    FilterEditKind,
    LoginRequest,
    RecommendationState,
    RecommendationStatus,
    RegistrationResponse,
    WebinarView,
)
from .recommendations.partition import partition
from .recommendations.service import compute_recommendations
from .recommendations.state import DEFAULT_CRITERIA, apply_filter_change, register
from .recommendations.store import ensure_pending

logger = logging.getLogger(__name__)

app = FastAPI(title="Webinar Discovery API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "webinar-hub-secret-change-in-production"),
)


# ── Session helpers ──────────────────────────────────────────────────────


def _load_criteria(request: Request) -> FilterCriteria:
    raw = request.session.get("criteria")
    if not raw:
        return DEFAULT_CRITERIA
    try:
        return FilterCriteria.model_validate(raw)
    except ValidationError:
        logger.warning("Discarding invalid filter criteria in session", exc_info=True)
        return DEFAULT_CRITERIA


def _save_criteria(request: Request, criteria: FilterCriteria) -> None:
    request.session["criteria"] = criteria.model_dump(mode="json")


def _load_registered(request: Request) -> frozenset[str]:
    return frozenset(request.session.get("registered", []))


def _profile_for(user: dict, catalog: Catalog) -> UserProfile:
    profile = catalog.profiles.get(user.get("profile_id", ""))
    if profile is None:
        raise HTTPException(status_code=404, detail="No profile for this user")
    return profile


def _recommendation_state(
    user: dict, catalog: Catalog, background_tasks: BackgroundTasks,
) -> RecommendationState:
    """Return the user's recommendations, starting the computation once per catalog load."""
    profile = _profile_for(user, catalog)
    state, started = ensure_pending(profile.user_id, catalog.generation)
    if started:
        background_tasks.add_task(
            compute_recommendations, profile, catalog.webinars, catalog.generation,
        )
    return state


def _build_view(
    request: Request, user: dict, background_tasks: BackgroundTasks,
) -> WebinarView:
    catalog = get_catalog()
    criteria = _load_criteria(request)
    rec_state = _recommendation_state(user, catalog, background_tasks)

    filtered = apply_filters(criteria, catalog.webinars)
    recs = None if rec_state.status is RecommendationStatus.pending else rec_state.recommendations
    recommended, others = partition(filtered, recs)

    return WebinarView(
        criteria=criteria,
        recommendation_status=rec_state.status,
        recommended=recommended,
        others=others,
        registered=sorted(_load_registered(request)),
        total_webinars=len(catalog.webinars),
        total_filtered=len(filtered),
    )


def _update_criteria(request: Request, criteria: FilterCriteria) -> None:
    _save_criteria(request, criteria)
    catalog = get_catalog()
    record_event("filter_change", {
        **criteria.model_dump(mode="json"),
        "results_count": len(apply_filters(criteria, catalog.webinars)),
    })


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata", response_model=AvailableFilters)
def metadata() -> AvailableFilters:
    return available_filters(get_catalog())


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.username, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    # A new login starts from a clean view (no filters, no registrations)
    request.session.clear()
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── Attendee endpoints ───────────────────────────────────────────────────


@app.get("/webinars", response_model=WebinarView)
def webinars(
    request: Request,
    background_tasks: BackgroundTasks,
    user: dict = Depends(require_user),
) -> WebinarView:
    return _build_view(request, user, background_tasks)


@app.post("/filters", response_model=WebinarView)
def change_filter(
    body: FilterEdit,
    request: Request,
    background_tasks: BackgroundTasks,
    user: dict = Depends(require_user),
) -> WebinarView:
    _update_criteria(request, apply_filter_change(_load_criteria(request), body))
    return _build_view(request, user, background_tasks)


@app.put("/filters", response_model=WebinarView)
def replace_filters(
    body: FilterCriteria,
    request: Request,
    background_tasks: BackgroundTasks,
    user: dict = Depends(require_user),
) -> WebinarView:
    _update_criteria(request, body)
    return _build_view(request, user, background_tasks)


@app.delete("/filters", response_model=WebinarView)
def clear_filters(
    request: Request,
    background_tasks: BackgroundTasks,
    user: dict = Depends(require_user),
) -> WebinarView:
    cleared = apply_filter_change(_load_criteria(request), FilterEdit(kind=FilterEditKind.clear))
    _update_criteria(request, cleared)
    return _build_view(request, user, background_tasks)


@app.get("/recommendations", response_model=RecommendationState)
def recommendations(
    background_tasks: BackgroundTasks,
    user: dict = Depends(require_user),
) -> RecommendationState:
    return _recommendation_state(user, get_catalog(), background_tasks)


@app.post("/webinars/{webinar_id}/register", response_model=RegistrationResponse)
def register_webinar(
    webinar_id: str,
    request: Request,
    user: dict = Depends(require_user),
) -> RegistrationResponse:
    if get_catalog().get_webinar(webinar_id) is None:
        raise HTTPException(status_code=404, detail="Webinar not found")

    registered, already = register(_load_registered(request), webinar_id)
    request.session["registered"] = sorted(registered)

    record_event("registration", {
        "webinar_id": webinar_id,
        "username": user["username"],
        "already_registered": already,
    })
    return RegistrationResponse(
        webinar_id=webinar_id,
        status="already_registered" if already else "registered",
        registered=sorted(registered),
    )


# ── Host endpoints ───────────────────────────────────────────────────────


@app.get("/analytics")
def analytics(user: dict = Depends(require_host)) -> dict:
    return compute_analytics(get_events())


@app.post("/catalog/reload")
def catalog_reload(user: dict = Depends(require_host)) -> dict:
    # Stored states from older generations are replaced on next access
    catalog = reload_catalog()
    return {
        "status": "reloaded",
        "generation": catalog.generation,
        "total_webinars": len(catalog.webinars),
    }
