"""
游戏模块
Game Module
"""
from .game_logic import (
    Gesture,
    GameRules,
    GameResult,
    Difficulty,
    GameStatistics,
    GameManager,
    RoundResult,
    Opponent,
    resolve,
    select_move,
    apply_outcome
)
from .state_machine import GameState, GameStateMachine
from .game_controller import GameController

__all__ = [
    'GameController',
    'Gesture',
    'GameRules',
    'GameResult',
    'Difficulty',
    'GameStatistics',
    'GameManager',
    'RoundResult',
    'Opponent',
    'resolve',
    'select_move',
    'apply_outcome',
    'GameState',
    'GameStateMachine'
]
