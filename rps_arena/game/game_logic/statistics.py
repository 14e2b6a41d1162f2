"""
玩家统计记录
Player Statistics Record
"""
from dataclasses import dataclass, replace, fields
from typing import Any, Dict
from .game_rules import GameResult


@dataclass(frozen=True)
class GameStatistics:
    """玩家统计信息（不可变，每回合生成新记录）"""
    total_games: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    win_streak: int = 0
    best_win_streak: int = 0

    @classmethod
    def zero(cls) -> "GameStatistics":
        """全零记录"""
        return cls()

    def _rate(self, count: int) -> float:
        if self.total_games == 0:
            return 0.0
        return count / self.total_games

    @property
    def win_rate(self) -> float:
        """胜率（0.0-1.0）"""
        return self._rate(self.wins)

    @property
    def loss_rate(self) -> float:
        """负率（0.0-1.0）"""
        return self._rate(self.losses)

    @property
    def draw_rate(self) -> float:
        """平局率（0.0-1.0）"""
        return self._rate(self.draws)

    @staticmethod
    def percentage(rate: float) -> int:
        """比率转为四舍五入的整数百分比"""
        return int(rate * 100 + 0.5)

    @property
    def streak_status(self) -> str:
        """当前连胜状态"""
        if self.win_streak > 5:
            return "On Fire!"
        if self.win_streak > 0:
            return "Hot!"
        return "Cold"

    @property
    def estimated_play_minutes(self) -> int:
        """按每局约2.5分钟估算的总游戏时长"""
        return int(self.total_games * 2.5 + 0.5)

    def is_consistent(self) -> bool:
        """
        检查记录是否满足不变式

        Returns:
            bool: 计数非负、总数等于胜负平之和、最佳连胜不小于当前连胜
        """
        values = [getattr(self, f.name) for f in fields(self)]
        if any(not isinstance(v, int) or isinstance(v, bool) or v < 0 for v in values):
            return False
        return (self.total_games == self.wins + self.losses + self.draws
                and self.best_win_streak >= self.win_streak)

    def to_dict(self) -> Dict[str, int]:
        """转换为字典"""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameStatistics":
        """
        从字典创建记录，缺失的字段按0处理

        Args:
            data: 字典数据

        Returns:
            GameStatistics: 统计记录（未校验，调用方应检查 is_consistent）
        """
        return cls(**{f.name: data.get(f.name, 0) for f in fields(cls)})


def apply_outcome(stats: GameStatistics, outcome: GameResult) -> GameStatistics:
    """
    将一回合结果累加到统计记录中

    Args:
        stats: 当前统计记录（不会被修改）
        outcome: 玩家视角的回合结果

    Returns:
        GameStatistics: 新的统计记录
    """
    total_games = stats.total_games + 1

    if outcome == GameResult.WIN:
        win_streak = stats.win_streak + 1
        return replace(stats,
                       total_games=total_games,
                       wins=stats.wins + 1,
                       win_streak=win_streak,
                       best_win_streak=max(stats.best_win_streak, win_streak))
    elif outcome == GameResult.LOSS:
        return replace(stats,
                       total_games=total_games,
                       losses=stats.losses + 1,
                       win_streak=0)
    else:
        return replace(stats,
                       total_games=total_games,
                       draws=stats.draws + 1)
