"""Game module for Bricks.

Exports the simulation engine and supporting classes:
- TetrominoType, Shape, SHAPES: the shape catalog
- GameGrid: occupancy grid, commit and line clearing
- ActivePiece: the falling piece and its transforms
- DropScheduler, DropTiming: gravity and key-repeat timing
- ScoringRules: score and level formulas
- GameSession: session state machine driven by intents and ticks
"""

from .shapes import SHAPES, Shape, TetrominoType
from .grid import CommitResult, GameGrid
from .validator import is_valid_move
from .pieces import ActivePiece
from .scheduler import DropScheduler, DropState, DropTiming
from .rules import ScoringRules
from .events import GameListener
from .core import Action, GameConfig, GameSession, SessionState

__all__ = [
    "SHAPES",
    "Shape",
    "TetrominoType",
    "CommitResult",
    "GameGrid",
    "is_valid_move",
    "ActivePiece",
    "DropScheduler",
    "DropState",
    "DropTiming",
    "ScoringRules",
    "GameListener",
    "Action",
    "GameConfig",
    "GameSession",
    "SessionState",
]
