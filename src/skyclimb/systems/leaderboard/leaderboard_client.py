"""
leaderboard_client.py
---------------------
HTTP client for the remote top-10 leaderboard.

The service is a plain web app endpoint:
    GET  {api_url}?action=getTop10        -> {"success": bool, "scores": [...]}
    POST {api_url} action=addScore&score=&initial=  -> {"success": bool}

Every network or payload failure degrades to "no leaderboard" and is
logged; nothing here ever raises into the game loop, except invalid
initials, which are a caller error.
"""

import threading
from dataclasses import dataclass
from typing import Callable, List, Optional

import requests

from skyclimb.core.debug.debug_logger import DebugLogger
from skyclimb.core.runtime.game_settings import Leaderboard


@dataclass(frozen=True)
class ScoreEntry:
    """One leaderboard row."""
    initial: str
    score: int


def normalize_initial(initial: str) -> str:
    """
    Upper-case and validate player initials.

    Raises:
        ValueError: initials are not 1-3 letters
    """
    value = (initial or "").strip().upper()
    if not (1 <= len(value) <= 3 and value.isalpha()):
        raise ValueError(f"Initials must be 1-3 letters, got {initial!r}")
    return value


class LeaderboardClient:
    """Loads and submits scores; caches the last successful top list."""

    def __init__(self, api_url: Optional[str] = None, enabled: bool = Leaderboard.ENABLED,
                 timeout: float = Leaderboard.TIMEOUT, session: Optional[requests.Session] = None):
        self.api_url = api_url if api_url is not None else Leaderboard.API_URL
        self.enabled = enabled
        self.timeout = timeout
        self.session = session or requests.Session()

        self.scores: List[ScoreEntry] = []
        self.is_loading = False
        self.last_error: Optional[str] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.enabled and self.api_url and self.api_url != Leaderboard.PLACEHOLDER_URL)

    # ===========================================================
    # Loading
    # ===========================================================
    def load_scores(self) -> List[ScoreEntry]:
        """Fetch the top list. Returns [] when unavailable."""
        if not self.is_configured:
            DebugLogger.system("Leaderboard is disabled or API URL not configured", category="leaderboard")
            return []

        self.is_loading = True
        try:
            response = self.session.get(
                self.api_url, params={"action": "getTop10"}, timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()

            if not data.get("success"):
                self.last_error = str(data.get("error", "unknown error"))
                DebugLogger.fail(f"Failed to load leaderboard: {self.last_error}", category="leaderboard")
                return []

            self.scores = [self._parse_entry(row) for row in data.get("scores", [])]
            self.scores.sort(key=lambda e: e.score, reverse=True)
            self.last_error = None
            return list(self.scores)

        except (requests.RequestException, ValueError, TypeError, KeyError, AttributeError) as e:
            self.last_error = str(e)
            DebugLogger.fail(f"Error loading leaderboard: {e}", category="leaderboard")
            return []
        finally:
            self.is_loading = False

    @staticmethod
    def _parse_entry(row: dict) -> ScoreEntry:
        return ScoreEntry(initial=str(row["initial"]), score=int(row["score"]))

    def load_scores_async(self, callback: Callable[[List[ScoreEntry]], None]) -> threading.Thread:
        """
        Fetch on a daemon thread and hand the result to callback.

        The callback runs on the worker thread; callers that touch UI state
        should hand the result over to their own loop.
        """
        def worker():
            callback(self.load_scores())

        thread = threading.Thread(target=worker, name="leaderboard-fetch", daemon=True)
        thread.start()
        return thread

    # ===========================================================
    # Submission
    # ===========================================================
    def submit_score(self, score: int, initial: str) -> bool:
        """Post a score. Returns False on any failure."""
        initial = normalize_initial(initial)

        if not self.is_configured:
            DebugLogger.system("Leaderboard is disabled or API URL not configured", category="leaderboard")
            return False

        try:
            response = self.session.post(
                self.api_url,
                data={"action": "addScore", "score": int(score), "initial": initial},
                timeout=self.timeout,
            )
            response.raise_for_status()
            success = bool(response.json().get("success"))
        except (requests.RequestException, ValueError, AttributeError) as e:
            self.last_error = str(e)
            DebugLogger.fail(f"Error submitting score: {e}", category="leaderboard")
            return False

        if success:
            DebugLogger.action(f"Submitted {initial} {score}m", category="leaderboard")
        return success

    # ===========================================================
    # Ranking
    # ===========================================================
    def is_top_ten(self, score: int) -> bool:
        """True if score would enter the cached top list."""
        if len(self.scores) < Leaderboard.TOP_N:
            return True
        return score > self.scores[Leaderboard.TOP_N - 1].score
