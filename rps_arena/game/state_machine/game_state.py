"""
游戏状态枚举
Game State Enumeration
"""
from enum import Enum, auto


class GameState(Enum):
    """游戏状态枚举"""
    IDLE = auto()               # 空闲状态
    WAITING_MOVE = auto()       # 等待玩家出招
    OPPONENT_THINKING = auto()  # 对手思考中
    REVEALING = auto()          # 亮出双方手势
    ROUND_END = auto()          # 回合结束
    GAME_OVER = auto()          # 游戏结束
    ERROR = auto()              # 错误状态

    def __str__(self):
        return self.name
