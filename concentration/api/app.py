"""
FastAPI Application - REST API for game front ends.

Endpoints:
    GET    /health                         Liveness check
    GET    /                               API index
    POST   /api/v1/sessions                Start a game session
    GET    /api/v1/sessions                List active sessions
    GET    /api/v1/sessions/{id}           Get game state
    POST   /api/v1/sessions/{id}/select    Turn a card face up
    POST   /api/v1/sessions/{id}/reset     Deal a new deck
    DELETE /api/v1/sessions/{id}           End session

Mismatch flow:
    1. POST /select with the second card of a non-matching pair
    2. Response has resolution_pending=true and both cards face up
    3. After the mismatch delay the server hides both cards
    4. Front end polls GET /sessions/{id} to re-render

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional, Union
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Config, load_config
from ..session import AsyncioScheduler, SessionManager
from .service import APIService
from .schemas import (
    # Request models
    CreateSessionRequest,
    SelectRequest,
    # Response models
    GameStateResponse,
    SelectResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    ErrorResponse,
    # Enums
    ErrorCode,
)


# Environment configuration
CONCENTRATION_ENV = os.getenv("CONCENTRATION_ENV", "development")
ALLOWED_ORIGINS_ENV = os.getenv("ALLOWED_ORIGINS")

ERROR_STATUS = {
    ErrorCode.SESSION_NOT_FOUND: 404,
    ErrorCode.INVALID_CARD_ID: 422,
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.INTERNAL_ERROR: 500,
}


def create_app(service: Optional[APIService] = None, config: Optional[Config] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        config: Optional Config (loaded from CONCENTRATION_CONFIG if not provided)

    Returns:
        FastAPI application instance
    """
    config = config or load_config()

    app = FastAPI(
        title="Concentration API",
        description="""
Single-player memory game. Turn two cards per move; pairs stay face up,
mismatches flip back after a fixed delay.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `INVALID_CARD_ID` | Card id is outside the deck |
| `VALIDATION_ERROR` | Request body is malformed |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    allowed_origins = (
        ALLOWED_ORIGINS_ENV.split(",") if ALLOWED_ORIGINS_ENV
        else config.server.allowed_origins
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService(
        session_manager=SessionManager(scheduler=AsyncioScheduler(), config=config.game),
        max_session_age=config.server.session_max_age,
    )
    app.state.service = api_service

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=ERROR_STATUS.get(error.error_code, 400),
            content=error.model_dump(mode="json"),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return make_error_response(ErrorResponse(
            error="Invalid request",
            error_code=ErrorCode.VALIDATION_ERROR,
            details={"errors": [str(e.get("msg")) for e in exc.errors()]},
        ))

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=GameStateResponse,
        status_code=201,
        tags=["Sessions"],
        summary="Start a new game session",
    )
    async def create_session(request: Optional[CreateSessionRequest] = None) -> GameStateResponse:
        """Deal a fresh deck in a new session."""
        return api_service.create_session(request or CreateSessionRequest())

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        """List all active session IDs."""
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get game state",
    )
    async def get_session(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        """Get the current, render-ready state of a session's game."""
        response = api_service.get_game_state(session_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        """End a game session and release resources."""
        success = api_service.end_session(session_id)
        return EndSessionResponse(
            success=success,
            session_id=session_id,
            message="Session ended" if success else "Session not found",
        )

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/select",
        response_model=SelectResponse,
        responses={
            404: {"model": ErrorResponse, "description": "Session not found"},
            422: {"model": ErrorResponse, "description": "Card id outside the deck"},
        },
        tags=["Game"],
        summary="Turn a card face up",
    )
    async def select_card(
        session_id: str, request: SelectRequest,
    ) -> Union[SelectResponse, JSONResponse]:
        """
        Turn a card face up.

        Picks the rules do not allow (while a mismatch is resolving, on a
        face-up card, after the game is won) are accepted with
        `accepted=false` and leave the game unchanged.
        """
        response = api_service.select(session_id, request)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/reset",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Deal a new deck",
    )
    async def reset_game(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        """Start the session over with a new shuffled deck."""
        response = api_service.reset(session_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    # =========================================================================
    # System Endpoints
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            version=__version__,
            active_sessions=len(api_service.list_sessions()),
        )

    @app.get("/", tags=["System"])
    async def root():
        """API index."""
        return {
            "name": "Concentration API",
            "version": __version__,
            "environment": CONCENTRATION_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app
