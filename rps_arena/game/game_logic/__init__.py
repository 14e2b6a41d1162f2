"""
游戏逻辑模块
Game Logic Module
"""
from .gesture import Gesture, ALL_GESTURES
from .game_rules import GameRules, GameResult, resolve
from .opponent_strategy import (
    Difficulty,
    OpponentStrategy,
    RandomStrategy,
    EasyStrategy,
    MediumStrategy,
    HardStrategy,
    ExpertStrategy,
    StrategyFactory,
    select_move
)
from .statistics import GameStatistics, apply_outcome
from .opponents import Opponent, AI_OPPONENTS, find_opponent, get_default_opponent
from .game_manager import GameManager, RoundResult

__all__ = [
    'Gesture',
    'ALL_GESTURES',
    'GameRules',
    'GameResult',
    'resolve',
    'Difficulty',
    'OpponentStrategy',
    'RandomStrategy',
    'EasyStrategy',
    'MediumStrategy',
    'HardStrategy',
    'ExpertStrategy',
    'StrategyFactory',
    'select_move',
    'GameStatistics',
    'apply_outcome',
    'Opponent',
    'AI_OPPONENTS',
    'find_opponent',
    'get_default_opponent',
    'GameManager',
    'RoundResult'
]
