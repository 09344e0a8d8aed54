from __future__ import annotations

import threading
from collections.abc import Sequence

from ..catalog.models import Recommendation
from .models import RecommendationState
from .state import fail, pending, resolve

# One state per user for the latest catalog generation seen.
_states: dict[str, RecommendationState] = {}
_lock = threading.Lock()


def get_state(user_id: str) -> RecommendationState | None:
    return _states.get(user_id)


def ensure_pending(user_id: str, generation: int) -> tuple[RecommendationState, bool]:
    """
    Return the user's state for *generation*, marking it pending if needed.

    The bool is True only for the one caller that should start the
    computation; a state that already exists for this generation (pending
    or finished) is returned with False.
    """
    with _lock:
        state = _states.get(user_id)
        if state is not None and state.generation == generation:
            return state, False
        state = pending(generation)
        _states[user_id] = state
        return state, True


def store_result(
    user_id: str, generation: int, recommendations: Sequence[Recommendation],
) -> None:
    with _lock:
        state = _states.get(user_id)
        if state is not None:
            _states[user_id] = resolve(state, generation, recommendations)


def store_failure(user_id: str, generation: int, error: str) -> None:
    with _lock:
        state = _states.get(user_id)
        if state is not None:
            _states[user_id] = fail(state, generation, error)


def clear_states() -> None:
    with _lock:
        _states.clear()
