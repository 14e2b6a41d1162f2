"""
游戏控制器
Game Controller - 按顺序驱动一回合的各个阶段
"""
import time
from typing import Optional, Callable, TYPE_CHECKING
from .state_machine import GameState, GameStateMachine
from .game_logic import GameManager, Gesture, GameStatistics, RoundResult
from ..utils.exceptions import GameException
from ..utils.logger import setup_logger

if TYPE_CHECKING:
    from ..storage.stats_store import StatsStore

logger = setup_logger("RPS.GameController")


class GameController:
    """游戏控制器类，整合会话、状态机与统计存储"""

    def __init__(self,
                 game_manager: GameManager,
                 stats_store: Optional["StatsStore"] = None,
                 thinking_delay: float = 1.0,
                 reveal_delay: float = 1.5,
                 sleep: Callable[[float], None] = time.sleep):
        """
        初始化游戏控制器

        Args:
            game_manager: 游戏会话
            stats_store: 统计存储（可选，每回合结束后写入）
            thinking_delay: 对手思考阶段的停顿秒数
            reveal_delay: 亮出手势阶段的停顿秒数
            sleep: 停顿函数
        """
        self.game_manager = game_manager
        self.stats_store = stats_store
        self.thinking_delay = thinking_delay
        self.reveal_delay = reveal_delay
        self._sleep = sleep

        self.state_machine = GameStateMachine(initial_state=GameState.IDLE)

        # 回调函数
        self.on_state_changed: Optional[Callable[[GameState], None]] = None
        self.on_round_result: Optional[Callable[[RoundResult], None]] = None
        self.on_stats_changed: Optional[Callable[[GameStatistics], None]] = None

        logger.info("游戏控制器初始化完成")

    def start_game(self):
        """开始游戏"""
        logger.info("开始游戏")
        self.game_manager.start_game()
        self._transition(GameState.WAITING_MOVE)

    def stop_game(self):
        """停止游戏"""
        logger.info("停止游戏")
        if self.game_manager.is_game_active:
            self.game_manager.end_game()
        self.state_machine.reset(GameState.IDLE)
        self._notify(self.on_state_changed, GameState.IDLE)

    def reset_game(self):
        """重置游戏"""
        logger.info("重置游戏")
        self.game_manager.reset()
        self.state_machine.reset(GameState.IDLE)
        self._notify(self.on_state_changed, GameState.IDLE)

    def play(self, player_gesture: Gesture) -> RoundResult:
        """
        进行一回合：对手思考 -> 亮出手势 -> 判定 -> 统计

        Args:
            player_gesture: 玩家已确定的手势

        Returns:
            RoundResult: 回合结果

        Raises:
            GameException: 当前不在等待出招状态
        """
        if not self.state_machine.is_in_state(GameState.WAITING_MOVE):
            raise GameException("当前无法出招",
                                game_state=str(self.state_machine.get_current_state()))

        try:
            # 玩家出招确定后，对手才开始选择
            self._transition(GameState.OPPONENT_THINKING)
            opponent_gesture = self.game_manager.select_opponent_gesture()
            self._pause(self.thinking_delay)

            self._transition(GameState.REVEALING)
            self._pause(self.reveal_delay)
            round_result = self.game_manager.play_round(player_gesture, opponent_gesture)

            stats = self.game_manager.get_statistics()
            if self.stats_store is not None:
                self.stats_store.save(stats)
        except Exception:
            self.state_machine.transition_to(GameState.ERROR)
            self._notify(self.on_state_changed, GameState.ERROR)
            raise

        self._notify(self.on_round_result, round_result)
        self._notify(self.on_stats_changed, stats)

        self._transition(GameState.ROUND_END)
        if self.game_manager.is_game_over():
            self._transition(GameState.GAME_OVER)
        else:
            self._transition(GameState.WAITING_MOVE)

        return round_result

    def reset_statistics(self) -> GameStatistics:
        """清零累计统计（同时写入存储）"""
        if self.stats_store is not None:
            stats = self.stats_store.reset()
        else:
            stats = GameStatistics.zero()
        self.game_manager.reset_statistics(stats)
        self._notify(self.on_stats_changed, stats)
        return stats

    def _pause(self, seconds: float):
        if seconds > 0:
            self._sleep(seconds)

    def _transition(self, state: GameState):
        if not self.state_machine.transition_to(state):
            raise GameException(f"无法进入状态 {state}",
                                game_state=str(self.state_machine.get_current_state()))
        self._notify(self.on_state_changed, state)

    def _notify(self, callback: Optional[Callable], payload):
        """调用回调，回调自身的异常只记录不影响游戏流程"""
        if callback is None:
            return
        try:
            callback(payload)
        except Exception as e:
            logger.error(f"回调执行异常: {e}", exc_info=True)

    def get_current_state(self) -> GameState:
        """获取当前状态"""
        return self.state_machine.get_current_state()

    def get_game_statistics(self) -> GameStatistics:
        """获取统计信息"""
        return self.game_manager.get_statistics()
