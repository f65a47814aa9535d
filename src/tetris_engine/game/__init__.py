"""Game module for the Tetris engine.

Exports the core game engine and supporting classes:
- GameGrid: Immutable board representation and line clearing
- Piece: Tetromino piece with precomputed rotations
- TetrominoType: Enum of available piece types
- ScoringRules: Scoring table and level curve
- GameState: Read-only session snapshot
- step: Pure transition function (state, action) -> (state, events)
- TetrisGame: Holder of the current snapshot for collaborators
- DropClock: Gravity timer that follows the session's drop interval
"""

from .grid import GameGrid
from .pieces import PIECE_COLORS, Piece, TetrominoType
from .rules import ScoringRules
from .core import (
    Action,
    Event,
    EventKind,
    GameConfig,
    GameState,
    Phase,
    RejectReason,
    TetrisGame,
    step,
)
from .clock import DropClock

__all__ = [
    "GameGrid",
    "PIECE_COLORS",
    "Piece",
    "TetrominoType",
    "ScoringRules",
    "Action",
    "Event",
    "EventKind",
    "GameConfig",
    "GameState",
    "Phase",
    "RejectReason",
    "TetrisGame",
    "step",
    "DropClock",
]
