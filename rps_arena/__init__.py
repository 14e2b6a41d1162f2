"""
石头剪刀布对战
Rock Paper Scissors Arena
"""
from .game.game_logic import (
    Gesture,
    GameResult,
    Difficulty,
    GameStatistics,
    resolve,
    select_move,
    apply_outcome
)

__version__ = "1.0.0"

__all__ = [
    'Gesture',
    'GameResult',
    'Difficulty',
    'GameStatistics',
    'resolve',
    'select_move',
    'apply_outcome'
]
