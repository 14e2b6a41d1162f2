"""
游戏管理器
Game Manager - 一次对局会话
"""
import random
from typing import Optional, List, Tuple
from dataclasses import dataclass, field
from datetime import datetime
from .gesture import Gesture
from .game_rules import GameRules, GameResult
from .opponents import Opponent, get_default_opponent
from .opponent_strategy import OpponentStrategy, StrategyFactory
from .statistics import GameStatistics, apply_outcome
from ...utils.exceptions import GameException
from ...utils.logger import setup_logger

logger = setup_logger("RPS.GameManager")


@dataclass
class RoundResult:
    """回合结果数据类"""
    round_number: int
    player_gesture: Gesture
    opponent_gesture: Gesture
    result: GameResult
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'round_number': self.round_number,
            'player_gesture': self.player_gesture.value,
            'opponent_gesture': self.opponent_gesture.value,
            'result': self.result.value,
            'timestamp': self.timestamp.isoformat()
        }


class GameManager:
    """游戏管理器类，持有会话内的玩家历史手势与统计"""

    def __init__(self,
                 opponent: Optional[Opponent] = None,
                 statistics: Optional[GameStatistics] = None,
                 max_rounds: int = 0,
                 rng: Optional[random.Random] = None):
        """
        初始化游戏管理器

        Args:
            opponent: 电脑对手，None 使用默认对手
            statistics: 初始统计记录（通常从存储读取）
            max_rounds: 最大回合数，0 表示不限
            rng: 对手策略使用的随机源
        """
        if max_rounds < 0:
            raise GameException(f"最大回合数不能为负: {max_rounds}")

        self.opponent = opponent or get_default_opponent()
        self.rng = rng
        self.strategy: OpponentStrategy = StrategyFactory.create_strategy(
            self.opponent.effective_difficulty, rng)
        self.max_rounds = max_rounds
        self.current_round = 0
        self.statistics = statistics or GameStatistics.zero()
        self.move_history: List[Gesture] = []
        self.round_history: List[RoundResult] = []
        self.is_game_active = False

        logger.info(f"游戏管理器初始化，对手: {self.opponent.name} "
                    f"({self.opponent.effective_difficulty})，最大回合数: {max_rounds or '不限'}")

    def start_game(self):
        """开始游戏（新会话，清空历史手势，保留累计统计）"""
        if self.is_game_active:
            logger.warning("游戏已在进行中")
            return

        self.is_game_active = True
        self.current_round = 0
        self.move_history.clear()
        self.round_history.clear()

        logger.info("游戏开始")

    def end_game(self):
        """结束游戏"""
        if not self.is_game_active:
            logger.warning("游戏未在进行中")
            return

        self.is_game_active = False

        logger.info(f"游戏结束，本局回合数: {self.current_round}, "
                    f"累计: 胜 {self.statistics.wins} / 负 {self.statistics.losses} / "
                    f"平 {self.statistics.draws}")

    def set_opponent(self, opponent: Opponent):
        """
        更换对手（历史手势保留在本会话中）

        Args:
            opponent: 新对手
        """
        self.opponent = opponent
        self.strategy = StrategyFactory.create_strategy(opponent.effective_difficulty, self.rng)
        logger.info(f"对手更换为: {opponent.name} ({opponent.effective_difficulty})")

    def select_opponent_gesture(self) -> Gesture:
        """根据当前历史快照为对手选择手势"""
        return self.strategy.choose(self.get_move_history())

    def play_round(self, player_gesture: Gesture,
                   opponent_gesture: Optional[Gesture] = None) -> RoundResult:
        """
        进行一回合游戏

        Args:
            player_gesture: 玩家手势
            opponent_gesture: 对手手势，None 则由对手策略根据之前的历史选择

        Returns:
            RoundResult: 回合结果

        Raises:
            GameException: 游戏未开始
        """
        if not self.is_game_active:
            raise GameException("游戏未开始，无法进行回合", game_state="inactive")

        if opponent_gesture is None:
            # 对手只能看到本回合之前的历史
            opponent_gesture = self.select_opponent_gesture()

        self.current_round += 1
        result = GameRules.judge(player_gesture, opponent_gesture)

        self.move_history.append(player_gesture)
        self.statistics = apply_outcome(self.statistics, result)

        round_result = RoundResult(
            round_number=self.current_round,
            player_gesture=player_gesture,
            opponent_gesture=opponent_gesture,
            result=result
        )
        self.round_history.append(round_result)

        logger.info(f"回合 {self.current_round}: 玩家={player_gesture}, "
                    f"对手={opponent_gesture}, 结果={result}")

        if self.max_rounds and self.current_round >= self.max_rounds:
            self.end_game()

        return round_result

    def get_current_round(self) -> int:
        """获取当前回合数"""
        return self.current_round

    def get_remaining_rounds(self) -> Optional[int]:
        """获取剩余回合数，不限回合时返回None"""
        if not self.max_rounds:
            return None
        return max(0, self.max_rounds - self.current_round)

    def is_game_over(self) -> bool:
        """检查游戏是否结束"""
        if not self.is_game_active:
            return True
        return bool(self.max_rounds) and self.current_round >= self.max_rounds

    def get_statistics(self) -> GameStatistics:
        """获取统计信息"""
        return self.statistics

    def reset_statistics(self, statistics: Optional[GameStatistics] = None):
        """重置统计信息"""
        self.statistics = statistics or GameStatistics.zero()
        logger.info("统计信息已重置")

    def get_move_history(self) -> Tuple[Gesture, ...]:
        """获取玩家历史手势快照"""
        return tuple(self.move_history)

    def get_round_history(self) -> List[RoundResult]:
        """获取回合历史"""
        return self.round_history.copy()

    def get_last_round_result(self) -> Optional[RoundResult]:
        """获取上一回合结果"""
        if self.round_history:
            return self.round_history[-1]
        return None

    def reset(self):
        """重置会话（不影响累计统计）"""
        self.is_game_active = False
        self.current_round = 0
        self.move_history.clear()
        self.round_history.clear()
        logger.info("游戏已重置")
