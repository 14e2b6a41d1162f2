"""
游戏规则实现
Game Rules Implementation
"""
from typing import Dict
from enum import Enum
from .gesture import Gesture
from ...utils.logger import setup_logger

logger = setup_logger("RPS.GameRules")


class GameResult(Enum):
    """游戏结果枚举（玩家视角）"""
    WIN = "win"      # 玩家获胜
    LOSS = "loss"    # 玩家失败
    DRAW = "draw"    # 平局

    def __str__(self):
        return self.value

    def invert(self) -> "GameResult":
        """换成对手视角的结果"""
        if self == GameResult.WIN:
            return GameResult.LOSS
        if self == GameResult.LOSS:
            return GameResult.WIN
        return GameResult.DRAW


class GameRules:
    """游戏规则类"""

    # 胜负规则：key胜value
    WIN_RULES: Dict[Gesture, Gesture] = {
        Gesture.ROCK: Gesture.SCISSORS,      # 石头胜剪刀
        Gesture.PAPER: Gesture.ROCK,         # 布胜石头
        Gesture.SCISSORS: Gesture.PAPER      # 剪刀胜布
    }

    @staticmethod
    def judge(player_gesture: Gesture, opponent_gesture: Gesture) -> GameResult:
        """
        判断游戏结果

        Args:
            player_gesture: 玩家手势
            opponent_gesture: 对手手势

        Returns:
            GameResult: 玩家视角的游戏结果
        """
        # 平局
        if player_gesture == opponent_gesture:
            logger.debug(f"平局: {player_gesture}")
            return GameResult.DRAW

        # 判断胜负
        if GameRules.WIN_RULES[player_gesture] == opponent_gesture:
            logger.debug(f"玩家获胜: {player_gesture} 胜 {opponent_gesture}")
            return GameResult.WIN
        else:
            logger.debug(f"对手获胜: {opponent_gesture} 胜 {player_gesture}")
            return GameResult.LOSS

    @staticmethod
    def get_winning_gesture(gesture: Gesture) -> Gesture:
        """
        获取能战胜指定手势的手势

        Args:
            gesture: 目标手势

        Returns:
            Gesture: 能战胜目标的手势
        """
        for winner, loser in GameRules.WIN_RULES.items():
            if loser == gesture:
                return winner
        raise KeyError(gesture)

    @staticmethod
    def get_losing_gesture(gesture: Gesture) -> Gesture:
        """
        获取会被指定手势战胜的手势

        Args:
            gesture: 目标手势

        Returns:
            Gesture: 会被目标战胜的手势
        """
        return GameRules.WIN_RULES[gesture]


def resolve(player_gesture: Gesture, opponent_gesture: Gesture) -> GameResult:
    """判断一回合的结果，等同于 GameRules.judge"""
    return GameRules.judge(player_gesture, opponent_gesture)
