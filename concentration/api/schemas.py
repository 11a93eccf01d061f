"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between a front end and the engine.
Face-down card symbols are never part of a response.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has expired
- INVALID_CARD_ID: Card id is outside the deck
- VALIDATION_ERROR: Request body failed validation
- INTERNAL_ERROR: Unexpected server failure
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field, StrictInt


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_CARD_ID = "INVALID_CARD_ID"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """Card information for display."""
    card_id: int
    revealed: bool = False
    matched: bool = False
    symbol: Optional[str] = Field(None, description="Only set while the card is face up")

    model_config = {"from_attributes": True}


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to start a new game session."""
    seed: Optional[int] = Field(None, description="Seed for a reproducible deck")


class SelectRequest(BaseModel):
    """Request to turn a card face up."""
    card_id: StrictInt = Field(..., description="Index of the card in the deck")


# =============================================================================
# Response Models
# =============================================================================

class GameStateResponse(BaseModel):
    """Full render-ready state of a session's game."""
    session_id: str
    status: SessionStatus
    phase: str = Field(description="idle, one_selected, resolving, won")
    cards: list[CardInfo] = Field(default_factory=list)
    selection: list[int] = Field(default_factory=list)
    move_count: int = 0
    won: bool = False
    pairs_total: int = 0
    pairs_found: int = 0
    seed: Optional[int] = Field(None, description="Seed the deck was dealt from")
    api_version: str = "v1"


class SelectResponse(BaseModel):
    """Outcome of a card pick."""
    accepted: bool = Field(description="False when the pick was ignored by the rules")
    ignored_reason: Optional[str] = None
    changes: list[str] = Field(default_factory=list)
    resolution_pending: bool = Field(
        False, description="A mismatched pair will flip back after the delay"
    )
    game_state: GameStateResponse


class SessionListResponse(BaseModel):
    """List of active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response when ending a session."""
    success: bool
    session_id: str
    message: str = "Session ended"


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str
    active_sessions: int = 0


class ErrorResponse(BaseModel):
    """Structured error response."""
    success: bool = False
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None
