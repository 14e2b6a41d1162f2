"""
手势枚举类型
Gesture (Move) Enumeration
"""
from enum import Enum
from ...utils.exceptions import InvalidMoveException


class Gesture(Enum):
    """手势类型枚举"""
    ROCK = "rock"          # 石头
    PAPER = "paper"        # 布
    SCISSORS = "scissors"  # 剪刀

    def __str__(self):
        return self.value

    @classmethod
    def from_string(cls, value: str) -> "Gesture":
        """
        从字符串创建手势枚举

        Args:
            value: 手势字符串（rock, paper, scissors，支持 r/p/s 缩写）

        Returns:
            Gesture: 手势枚举值

        Raises:
            InvalidMoveException: 无法识别的手势
        """
        value_lower = str(value).strip().lower()
        for gesture in cls:
            if gesture.value == value_lower or gesture.value[0] == value_lower:
                return gesture
        raise InvalidMoveException(f"无效的手势: {value!r}", value=value)


# 所有合法手势，按声明顺序
ALL_GESTURES = tuple(Gesture)
