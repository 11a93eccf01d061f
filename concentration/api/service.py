"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to game calls
2. Manages sessions
3. Formats responses for the front end

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .schemas import (
    # Requests
    CreateSessionRequest,
    SelectRequest,
    # Responses
    GameStateResponse,
    SelectResponse,
    ErrorResponse,
    # Shared
    CardInfo,
    # Enums
    ErrorCode,
    SessionStatus,
)
from ..engine_core import InvalidCardError
from ..session import AsyncioScheduler, Session, SessionManager, SessionState


logger = logging.getLogger(__name__)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        state = service.create_session(CreateSessionRequest())
        result = service.select(state.session_id, SelectRequest(card_id=3))
    """
    session_manager: SessionManager = field(
        default_factory=lambda: SessionManager(scheduler=AsyncioScheduler())
    )
    max_session_age: int = 3600

    def create_session(self, request: CreateSessionRequest) -> GameStateResponse:
        """Start a new game session."""
        removed = self.session_manager.cleanup_stale_sessions(self.max_session_age)
        if removed:
            logger.info("Removed %d stale sessions", removed)

        session = self.session_manager.create_session(seed=request.seed)
        return self._game_state(session)

    def get_game_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        """Get the current game state of a session."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)
        return self._game_state(session)

    def select(self, session_id: str, request: SelectRequest) -> SelectResponse | ErrorResponse:
        """Pick a card in a session's game."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)

        try:
            result = session.game.select(request.card_id)
        except InvalidCardError as e:
            return ErrorResponse(
                error=str(e),
                error_code=ErrorCode.INVALID_CARD_ID,
                details={"card_id": e.card_id, "deck_size": e.deck_size},
            )

        session.touch()
        return SelectResponse(
            accepted=result.changed,
            ignored_reason=result.ignored_reason,
            changes=result.state_changes,
            resolution_pending=result.pending_resolution is not None,
            game_state=self._game_state(session),
        )

    def reset(self, session_id: str) -> GameStateResponse | ErrorResponse:
        """Deal a new deck in an existing session."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)

        session.game.reset()
        session.touch()
        return self._game_state(session)

    def end_session(self, session_id: str) -> bool:
        """End a session."""
        return self.session_manager.end_session(session_id)

    def list_sessions(self) -> list[str]:
        """List active sessions."""
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Helpers
    # =========================================================================

    def _session_not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

    def _game_state(self, session: Session) -> GameStateResponse:
        snapshot = session.game.snapshot()
        status = (
            SessionStatus.GAME_OVER
            if session.state == SessionState.GAME_OVER
            else SessionStatus.ACTIVE
        )
        return GameStateResponse(
            session_id=session.session_id,
            status=status,
            phase=snapshot.phase.value,
            cards=[
                CardInfo(
                    card_id=card.id,
                    revealed=card.revealed,
                    matched=card.matched,
                    symbol=card.symbol,
                )
                for card in snapshot.cards
            ],
            selection=list(snapshot.selection),
            move_count=snapshot.move_count,
            won=snapshot.won,
            pairs_total=len(snapshot.cards) // 2,
            pairs_found=session.game.state.matched_pairs,
            seed=session.seed,
        )
