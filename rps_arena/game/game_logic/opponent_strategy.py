"""
对手出招策略
Opponent Move Strategies

按难度分级的对手出招策略。每一级都只读取玩家历史手势的快照，
随机源通过参数注入（random.Random 兼容对象），便于测试时固定种子。
"""
import random
from abc import ABC, abstractmethod
from collections import Counter
from enum import Enum
from typing import Dict, List, Optional, Sequence, Union
from .gesture import Gesture, ALL_GESTURES
from .game_rules import GameRules
from ...utils.logger import setup_logger

logger = setup_logger("RPS.OpponentStrategy")

# 默认随机源
_default_rng = random.Random()

History = Sequence[Gesture]


class Difficulty(Enum):
    """对手难度枚举"""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"

    def __str__(self):
        return self.value

    @classmethod
    def from_string(cls, value: Optional[str]) -> Optional["Difficulty"]:
        """
        从字符串创建难度枚举

        Args:
            value: 难度字符串

        Returns:
            Optional[Difficulty]: 难度枚举值，无法识别时返回None
        """
        if value is None:
            return None
        value_lower = str(value).strip().lower()
        for difficulty in cls:
            if difficulty.value == value_lower:
                return difficulty
        return None


def random_gesture(rng: random.Random) -> Gesture:
    """均匀随机选择一个手势"""
    return rng.choice(ALL_GESTURES)


def most_frequent(items: Sequence):
    """出现次数最多的元素，次数相同时取最先出现的"""
    return Counter(items).most_common(1)[0][0]


def _encode(window: Sequence[Gesture]) -> str:
    return "-".join(g.value for g in window)


def _decode_last(pattern: str) -> Gesture:
    return Gesture(pattern.split("-")[-1])


def find_patterns(history: History, length: int) -> List[str]:
    """
    提取历史中所有长度为 length 的连续窗口

    Args:
        history: 玩家历史手势（旧在前）
        length: 窗口长度

    Returns:
        List[str]: 编码后的窗口序列，如 "rock-paper-rock"
    """
    return [_encode(history[i - length + 1:i + 1])
            for i in range(length - 1, len(history))]


def predict_from_patterns(patterns: Sequence[str]) -> Gesture:
    """取出现最多的窗口，以其最后一个手势作为玩家下一手的预测"""
    return _decode_last(most_frequent(patterns))


class OpponentStrategy(ABC):
    """对手策略基类"""

    difficulty: Optional[Difficulty] = None

    def __init__(self, rng: Optional[random.Random] = None):
        """
        初始化策略

        Args:
            rng: 随机源，None 则使用模块默认随机源
        """
        self.rng = rng if rng is not None else _default_rng

    @abstractmethod
    def choose(self, history: History) -> Gesture:
        """
        根据玩家历史选择对手手势

        Args:
            history: 玩家历史手势快照（只读）

        Returns:
            Gesture: 对手手势
        """
        pass

    def counter(self, predicted: Gesture) -> Gesture:
        """返回能战胜预测手势的手势"""
        return GameRules.get_winning_gesture(predicted)


class RandomStrategy(OpponentStrategy):
    """均匀随机策略（未知难度的兜底）"""

    def choose(self, history: History) -> Gesture:
        return random_gesture(self.rng)


class EasyStrategy(OpponentStrategy):
    """简单：偏向石头的随机"""

    difficulty = Difficulty.EASY
    ROCK_BIAS = 0.4

    def choose(self, history: History) -> Gesture:
        if self.rng.random() < self.ROCK_BIAS:
            return Gesture.ROCK
        return random_gesture(self.rng)


class MediumStrategy(OpponentStrategy):
    """中等：克制玩家最近三手中出现最多的手势"""

    difficulty = Difficulty.MEDIUM
    WINDOW = 3

    def choose(self, history: History) -> Gesture:
        if len(history) < self.WINDOW:
            return random_gesture(self.rng)

        predicted = most_frequent(history[-self.WINDOW:])
        logger.debug(f"中等难度预测玩家出: {predicted}")
        return self.counter(predicted)


class HardStrategy(OpponentStrategy):
    """困难：统计三手连续模式，预测并克制"""

    difficulty = Difficulty.HARD
    MIN_HISTORY = 5
    PATTERN_LENGTH = 3

    def choose(self, history: History) -> Gesture:
        if len(history) >= self.MIN_HISTORY:
            patterns = find_patterns(history, self.PATTERN_LENGTH)
            if patterns:
                predicted = predict_from_patterns(patterns)
                logger.debug(f"困难难度预测玩家出: {predicted}")
                return self.counter(predicted)

        return random_gesture(self.rng)


class ExpertStrategy(OpponentStrategy):
    """专家：四手模式匹配，历史不足时使用心理学启发"""

    difficulty = Difficulty.EXPERT
    MIN_HISTORY = 7
    PATTERN_LENGTH = 4

    def choose(self, history: History) -> Gesture:
        if len(history) < self.MIN_HISTORY:
            return self._psychological_choice(history)

        patterns = find_patterns(history, self.PATTERN_LENGTH)
        # 最近窗口的末两手
        recent_tail = _encode(history[-2:])
        similar = [p for p in patterns if p.endswith(recent_tail)]
        if not similar:
            return random_gesture(self.rng)

        predicted = predict_from_patterns(similar)
        logger.debug(f"专家难度在 {len(similar)} 个相似模式中预测玩家出: {predicted}")
        return self.counter(predicted)

    def _psychological_choice(self, history: History) -> Gesture:
        """玩家连续两次出同一手势时，通常不会出第三次"""
        if len(history) >= 2 and history[-1] == history[-2]:
            remaining = [g for g in ALL_GESTURES if g != history[-1]]
            predicted = self.rng.choice(remaining)
            return self.counter(predicted)

        # 开局最常见的是石头
        return Gesture.PAPER


class StrategyFactory:
    """对手策略工厂类"""

    _strategy_classes: Dict[Difficulty, type] = {}

    @classmethod
    def register_strategy(cls, difficulty: Difficulty, strategy_class: type):
        """
        注册策略类

        Args:
            difficulty: 难度
            strategy_class: 策略类（必须继承自OpponentStrategy）
        """
        if not issubclass(strategy_class, OpponentStrategy):
            raise TypeError(f"{strategy_class} must be a subclass of OpponentStrategy")
        cls._strategy_classes[difficulty] = strategy_class

    @classmethod
    def create_strategy(cls, difficulty: Union[Difficulty, str, None],
                        rng: Optional[random.Random] = None) -> OpponentStrategy:
        """
        创建策略实例，未知难度返回均匀随机策略

        Args:
            difficulty: 难度（枚举或字符串）
            rng: 随机源

        Returns:
            OpponentStrategy: 策略实例
        """
        if not isinstance(difficulty, Difficulty):
            difficulty = Difficulty.from_string(difficulty)

        strategy_class = cls._strategy_classes.get(difficulty)
        if strategy_class is None:
            logger.debug(f"未知难度 {difficulty}，使用随机策略")
            strategy_class = RandomStrategy
        return strategy_class(rng)


StrategyFactory.register_strategy(Difficulty.EASY, EasyStrategy)
StrategyFactory.register_strategy(Difficulty.MEDIUM, MediumStrategy)
StrategyFactory.register_strategy(Difficulty.HARD, HardStrategy)
StrategyFactory.register_strategy(Difficulty.EXPERT, ExpertStrategy)


def select_move(difficulty: Union[Difficulty, str, None],
                history: History,
                rng: Optional[random.Random] = None) -> Gesture:
    """
    为对手选择下一手

    Args:
        difficulty: 难度（枚举、字符串或None）
        history: 玩家历史手势（旧在前），不会被修改
        rng: 随机源

    Returns:
        Gesture: 对手手势
    """
    strategy = StrategyFactory.create_strategy(difficulty, rng)
    return strategy.choose(tuple(history))
