"""
Session Module - Owns running games.

A session represents one play-through:
- Created when the player starts a game
- Holds the MemoryGame and its scheduler
- Destroyed when the player leaves

Sessions are EPHEMERAL: nothing is written to disk.
"""

from .scheduler import Scheduler, ManualScheduler, AsyncioScheduler, ScheduledTask
from .game import MemoryGame, GameSnapshot, CardView
from .manager import SessionManager, Session, SessionState

__all__ = [
    "Scheduler",
    "ManualScheduler",
    "AsyncioScheduler",
    "ScheduledTask",
    "MemoryGame",
    "GameSnapshot",
    "CardView",
    "SessionManager",
    "Session",
    "SessionState",
]
