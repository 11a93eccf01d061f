"""
Concentration - Memory Game Engine

A deterministic engine for the single-player card matching game.
The engine provides:
- Shuffled deck generation
- The turn state machine (select, compare, flip back)
- Move counting and win detection
- Ephemeral sessions behind a REST API
"""

__version__ = "0.1.0"
