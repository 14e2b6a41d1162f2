"""
应用程序主类
Application Main Class - 终端版石头剪刀布
"""
import random
from pathlib import Path
from typing import Optional, Callable, List
from .game import GameController, GameState
from .game.game_logic import (
    Gesture, GameManager, GameResult, GameStatistics, RoundResult,
    Opponent, AI_OPPONENTS, find_opponent, get_default_opponent
)
from .storage import StatsStore
from .utils.logger import setup_logger, setup_logger_from_config
from .utils.config_loader import ConfigLoader
from .utils.error_handler import global_error_handler
from .utils.exceptions import InvalidMoveException, ConfigurationException

logger = setup_logger("RPS.App")

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "config.yaml"

QUIT_COMMANDS = ('q', 'quit', 'exit')

RESULT_TEXT = {
    GameResult.WIN: "You win!",
    GameResult.LOSS: "You lose!",
    GameResult.DRAW: "It's a draw!"
}


class Application:
    """应用程序主类"""

    def __init__(self,
                 config_path: Optional[str] = None,
                 output: Callable[[str], None] = print):
        """
        初始化应用程序

        Args:
            config_path: 配置文件路径，None 使用默认路径
            output: 输出函数
        """
        self.config_path = str(config_path or DEFAULT_CONFIG_PATH)
        self.output = output

        self.config = ConfigLoader.load_with_defaults(self.config_path)
        setup_logger_from_config(ConfigLoader.get_logging_config(self.config))

        storage_config = ConfigLoader.get_storage_config(self.config)
        self.stats_store = StatsStore(storage_config['stats_file'])

        self.game_controller: Optional[GameController] = None

        logger.debug("应用程序初始化完成")

    def resolve_opponent(self, opponent_id: Optional[str] = None) -> Opponent:
        """
        确定对手：命令行参数 > 配置文件 > 上次选择 > 默认对手

        Args:
            opponent_id: 命令行指定的对手ID

        Returns:
            Opponent: 对手

        Raises:
            ConfigurationException: 指定的对手不存在
        """
        game_config = ConfigLoader.get_game_config(self.config)
        requested = opponent_id or game_config.get('opponent')

        if requested:
            opponent = find_opponent(requested)
            if opponent is None:
                raise ConfigurationException(f"未知的对手: {requested}", config_key="game.opponent")
            return opponent

        opponent = find_opponent(self.stats_store.load_selected_opponent())
        return opponent or get_default_opponent()

    def create_controller(self,
                          opponent_id: Optional[str] = None,
                          max_rounds: Optional[int] = None,
                          seed: Optional[int] = None,
                          delays: bool = True) -> GameController:
        """
        根据配置创建游戏控制器

        Args:
            opponent_id: 对手ID（覆盖配置）
            max_rounds: 最大回合数（覆盖配置）
            seed: 随机种子（覆盖配置）
            delays: 是否启用阶段停顿

        Returns:
            GameController: 游戏控制器
        """
        game_config = ConfigLoader.get_game_config(self.config)

        opponent = self.resolve_opponent(opponent_id)
        self.stats_store.save_selected_opponent(opponent.id)

        if seed is None:
            seed = game_config.get('seed')
        rng = random.Random(seed) if seed is not None else random.Random()

        if max_rounds is None:
            max_rounds = game_config['max_rounds']

        game_manager = GameManager(
            opponent=opponent,
            statistics=self.stats_store.load(),
            max_rounds=max_rounds,
            rng=rng
        )
        self.game_controller = GameController(
            game_manager,
            stats_store=self.stats_store,
            thinking_delay=game_config['thinking_delay'] if delays else 0,
            reveal_delay=game_config['reveal_delay'] if delays else 0
        )
        self.game_controller.on_state_changed = self._on_state_changed
        self.game_controller.on_round_result = self._on_round_result
        return self.game_controller

    def play(self,
             read_input: Callable[[str], str] = input,
             opponent_id: Optional[str] = None,
             max_rounds: Optional[int] = None,
             seed: Optional[int] = None,
             delays: bool = True) -> GameStatistics:
        """
        交互式游戏循环

        Args:
            read_input: 读取玩家输入的函数
            opponent_id: 对手ID
            max_rounds: 最大回合数
            seed: 随机种子
            delays: 是否启用阶段停顿

        Returns:
            GameStatistics: 结束时的累计统计
        """
        controller = self.create_controller(opponent_id, max_rounds, seed, delays)
        opponent = controller.game_manager.opponent

        self.output(f"Battle against {opponent.avatar} {opponent.name} "
                    f"({opponent.effective_difficulty} difficulty)")
        controller.start_game()

        try:
            while controller.get_current_state() == GameState.WAITING_MOVE:
                round_number = controller.game_manager.get_current_round() + 1
                line = read_input(f"Round {round_number} - your move [rock/paper/scissors, q to quit]: ")
                if line.strip().lower() in QUIT_COMMANDS:
                    break

                try:
                    gesture = Gesture.from_string(line)
                except InvalidMoveException as e:
                    global_error_handler.handle(e, "读取玩家输入")
                    self.output(f"Unknown move: {line.strip()!r}")
                    continue

                controller.play(gesture)
        except EOFError:
            logger.info("输入结束")
        finally:
            controller.stop_game()

        stats = controller.get_game_statistics()
        self.output(self.format_statistics(stats))
        return stats

    def show_statistics(self) -> GameStatistics:
        """输出已保存的统计"""
        stats = self.stats_store.load()
        self.output(self.format_statistics(stats))
        return stats

    def reset_statistics(self) -> GameStatistics:
        """清零已保存的统计"""
        stats = self.stats_store.reset()
        self.output("Statistics have been reset!")
        return stats

    def list_opponents(self) -> List[Opponent]:
        """输出对手列表"""
        selected = self.stats_store.load_selected_opponent()
        for opponent in AI_OPPONENTS:
            marker = "*" if opponent.id == selected else " "
            self.output(f"{marker} {opponent.id}  {opponent.avatar} {opponent.name:<14} "
                        f"{opponent.effective_difficulty}")
        return list(AI_OPPONENTS)

    @staticmethod
    def format_statistics(stats: GameStatistics) -> str:
        """格式化统计信息"""
        pct = GameStatistics.percentage
        return "\n".join([
            f"Total Games:  {stats.total_games}",
            f"Wins:         {stats.wins} ({pct(stats.win_rate)}%)",
            f"Losses:       {stats.losses} ({pct(stats.loss_rate)}%)",
            f"Draws:        {stats.draws} ({pct(stats.draw_rate)}%)",
            f"Win Streak:   {stats.win_streak}",
            f"Best Streak:  {stats.best_win_streak}",
            f"Status:       {stats.streak_status}",
            f"Play Time:    {stats.estimated_play_minutes} min",
        ])

    def _on_state_changed(self, state: GameState):
        """游戏状态改变回调"""
        if state == GameState.OPPONENT_THINKING:
            self.output("Opponent is thinking...")
        elif state == GameState.GAME_OVER:
            self.output("Game over!")

    def _on_round_result(self, round_result: RoundResult):
        """回合结果回调"""
        self.output(f"You: {round_result.player_gesture}  "
                    f"Opponent: {round_result.opponent_gesture}  "
                    f"-> {RESULT_TEXT[round_result.result]}")
