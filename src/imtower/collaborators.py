"""
collaborators.py: Narrow interfaces the engine calls out to.
"""

import logging

logger = logging.getLogger(__name__)


def coerce_score(value) -> int:
    """Parses a stored best score, falling back to 0 for anything malformed."""
    if isinstance(value, bool):
        return 0
    try:
        score = int(value)
    except (TypeError, ValueError, OverflowError):
        if value is not None:
            logger.warning(f"Ignoring malformed best score: {value!r}")
        return 0
    return max(score, 0)


class ScoreStore:
    """Persistence collaborator for the best score."""

    def load_best(self) -> int:
        raise NotImplementedError

    def save_best(self, best: int):
        raise NotImplementedError


class SessionListener:
    """
    Lifecycle collaborator. Notifications fire synchronously at the moment
    of the transition; the default implementation ignores them.
    """

    def on_score_changed(self, score: int):
        pass

    def on_game_over(self):
        pass
