"""
内置电脑对手
Built-in Opponents
"""
from dataclasses import dataclass
from typing import Optional, Tuple
from .opponent_strategy import Difficulty


@dataclass(frozen=True)
class Opponent:
    """电脑对手配置"""
    id: str
    name: str
    avatar: str
    difficulty: Optional[Difficulty] = None

    @property
    def effective_difficulty(self) -> Difficulty:
        """未配置难度的对手按中等难度出招"""
        return self.difficulty or Difficulty.MEDIUM


AI_OPPONENTS: Tuple[Opponent, ...] = (
    Opponent(id="ai-1", name="Beginner Bot", avatar="🤖", difficulty=Difficulty.EASY),
    Opponent(id="ai-2", name="Smart Bot", avatar="🧠", difficulty=Difficulty.MEDIUM),
    Opponent(id="ai-3", name="Master Bot", avatar="👑", difficulty=Difficulty.HARD),
    Opponent(id="ai-4", name="Legend Bot", avatar="⚡", difficulty=Difficulty.EXPERT),
)


def find_opponent(opponent_id: Optional[str]) -> Optional[Opponent]:
    """按ID查找对手，找不到返回None"""
    for opponent in AI_OPPONENTS:
        if opponent.id == opponent_id:
            return opponent
    return None


def get_default_opponent() -> Opponent:
    """获取默认对手"""
    return AI_OPPONENTS[0]
