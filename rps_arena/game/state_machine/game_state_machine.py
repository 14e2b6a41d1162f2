"""
游戏状态机
Game State Machine - 回合阶段的先后顺序
"""
from typing import Optional, Callable, Dict, List
from .game_state import GameState
from ...utils.logger import setup_logger

logger = setup_logger("RPS.GameStateMachine")


class GameStateMachine:
    """游戏状态机类"""

    # 状态转换规则（任何状态都可以进入ERROR）
    VALID_TRANSITIONS: Dict[GameState, List[GameState]] = {
        GameState.IDLE: [GameState.WAITING_MOVE, GameState.ERROR],
        GameState.WAITING_MOVE: [GameState.OPPONENT_THINKING, GameState.IDLE, GameState.ERROR],
        GameState.OPPONENT_THINKING: [GameState.REVEALING, GameState.ERROR],
        GameState.REVEALING: [GameState.ROUND_END, GameState.ERROR],
        GameState.ROUND_END: [GameState.WAITING_MOVE, GameState.GAME_OVER, GameState.IDLE, GameState.ERROR],
        GameState.GAME_OVER: [GameState.IDLE, GameState.WAITING_MOVE, GameState.ERROR],
        GameState.ERROR: [GameState.IDLE, GameState.ERROR]
    }

    def __init__(self, initial_state: GameState = GameState.IDLE):
        """
        初始化状态机

        Args:
            initial_state: 初始状态
        """
        self.current_state = initial_state
        self.previous_state: Optional[GameState] = None
        self.state_handlers: Dict[GameState, Callable] = {}

        logger.debug(f"游戏状态机初始化，初始状态: {self.current_state}")

    def register_state_handler(self, state: GameState, handler: Callable):
        """
        注册进入状态时的处理函数

        Args:
            state: 状态
            handler: 处理函数
        """
        self.state_handlers[state] = handler

    def transition_to(self, new_state: GameState, force: bool = False) -> bool:
        """
        转换到新状态

        Args:
            new_state: 新状态
            force: 是否强制转换（忽略转换规则）

        Returns:
            bool: 转换是否成功
        """
        if not force and not self.can_transition_to(new_state):
            logger.warning(f"无效的状态转换: {self.current_state} -> {new_state}")
            return False

        if self.current_state == new_state:
            return True

        self.previous_state = self.current_state
        self.current_state = new_state
        logger.debug(f"状态转换: {self.previous_state} -> {new_state}")

        handler = self.state_handlers.get(new_state)
        if handler:
            handler()

        return True

    def get_current_state(self) -> GameState:
        """获取当前状态"""
        return self.current_state

    def get_previous_state(self) -> Optional[GameState]:
        """获取上一个状态"""
        return self.previous_state

    def can_transition_to(self, state: GameState) -> bool:
        """检查是否可以转换到指定状态"""
        return state in self.VALID_TRANSITIONS.get(self.current_state, [])

    def reset(self, state: GameState = GameState.IDLE):
        """
        重置状态机

        Args:
            state: 重置后的状态
        """
        self.previous_state = self.current_state
        self.current_state = state
        logger.debug(f"状态机已重置到: {state}")

    def is_in_state(self, state: GameState) -> bool:
        """检查是否在指定状态"""
        return self.current_state == state
