"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Front end starts a session -> new MemoryGame (in-memory only)
2. During play: select / reset calls go to the session's game
3. Session ends (explicitly or stale) -> game closed, session dropped

PERSISTENCE RULES:
- NO database for gameplay
- Game state is ephemeral (session-scoped only)
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
import random
import time
import uuid

from ..config import GameConfig
from .game import MemoryGame
from .scheduler import Scheduler


logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # All pairs found, waiting for reset or end
    ENDED = "ended"  # Session closed


@dataclass
class Session:
    """
    An ephemeral game session.

    The session is destroyed when it ends.
    State is NOT persisted.
    """
    session_id: str
    game: MemoryGame
    created_at: float
    last_active_at: float = 0.0
    ended: bool = False

    # Seed the deck was dealt from; None means unseeded
    seed: int | None = None

    @property
    def state(self) -> SessionState:
        if self.ended:
            return SessionState.ENDED
        if self.game.won:
            return SessionState.GAME_OVER
        return SessionState.ACTIVE

    def is_active(self) -> bool:
        """Check if session is still open."""
        return not self.ended

    def touch(self) -> None:
        self.last_active_at = time.time()


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions with a fresh game
    - Track active sessions
    - Clean up ended or idle sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, scheduler: Scheduler, config: GameConfig | None = None):
        self.scheduler = scheduler
        self.config = config or GameConfig()
        self._sessions: dict[str, Session] = {}

    def create_session(self, seed: int | None = None) -> Session:
        """
        Create a new game session.

        Args:
            seed: Optional seed for a reproducible deck; falls back to
                the configured seed

        Returns:
            New Session with a freshly dealt game
        """
        session_id = str(uuid.uuid4())
        if seed is None:
            seed = self.config.seed
        game = MemoryGame(
            scheduler=self.scheduler,
            config=self.config,
            rng=random.Random(seed),
            game_id=session_id,
        )
        now = time.time()
        session = Session(
            session_id=session_id,
            game=game,
            created_at=now,
            last_active_at=now,
            seed=seed,
        )
        self._sessions[session_id] = session
        logger.info("Session %s created", session_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """
        End a session and clean up.

        Any pending flip-back is cancelled. Returns False if the
        session did not exist.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        session.game.close()
        session.ended = True
        logger.info("Session %s ended", session_id)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        End sessions idle for longer than max_age.

        Called periodically to free memory. Returns how many were removed.
        """
        current_time = time.time()
        stale = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.last_active_at > max_age_seconds
        ]
        for session_id in stale:
            self.end_session(session_id)
        return len(stale)
