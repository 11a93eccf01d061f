"""
API Module - HTTP interface for game front ends.

Exposes the engine via REST API. A front end:
1. Starts a session
2. Sends card picks
3. Re-renders from the returned game state
4. Resets or ends the session

All state is session-scoped. No user accounts required.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    SelectRequest,
    # Responses
    GameStateResponse,
    SelectResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    ErrorResponse,
    # Shared
    CardInfo,
    ErrorCode,
    SessionStatus,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "SelectRequest",
    # Responses
    "GameStateResponse",
    "SelectResponse",
    "SessionListResponse",
    "EndSessionResponse",
    "HealthResponse",
    "ErrorResponse",
    # Shared
    "CardInfo",
    "ErrorCode",
    "SessionStatus",
    # Service
    "APIService",
    "create_app",
]
