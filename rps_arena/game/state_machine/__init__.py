"""
回合阶段状态机
Round Phase State Machine
"""
from .game_state import GameState
from .game_state_machine import GameStateMachine

__all__ = ['GameState', 'GameStateMachine']
