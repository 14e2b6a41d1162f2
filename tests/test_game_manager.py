"""
游戏会话、状态机与控制器测试
Game Session, State Machine and Controller Tests
"""
import random

import pytest

from rps_arena.game import GameController, GameState, GameStateMachine
from rps_arena.game.game_logic import (
    Gesture, GameResult, GameManager, GameStatistics, OpponentStrategy,
    find_opponent, get_default_opponent, AI_OPPONENTS, Difficulty,
    MediumStrategy, ExpertStrategy
)
from rps_arena.storage import StatsStore
from rps_arena.utils.exceptions import GameException, StorageException

R, P, S = Gesture.ROCK, Gesture.PAPER, Gesture.SCISSORS


class SpyStrategy(OpponentStrategy):
    """记录收到的历史快照，固定出某个手势"""

    def __init__(self, gesture=Gesture.SCISSORS):
        super().__init__(random.Random(0))
        self.gesture = gesture
        self.seen = []

    def choose(self, history):
        self.seen.append(history)
        return self.gesture


def make_manager(**kwargs):
    manager = GameManager(rng=random.Random(0), **kwargs)
    manager.strategy = SpyStrategy()
    manager.start_game()
    return manager


class TestOpponents:
    """内置对手"""

    def test_roster(self):
        assert [o.id for o in AI_OPPONENTS] == ["ai-1", "ai-2", "ai-3", "ai-4"]
        assert [o.difficulty for o in AI_OPPONENTS] == list(Difficulty)
        assert get_default_opponent().name == "Beginner Bot"

    def test_find(self):
        assert find_opponent("ai-4").name == "Legend Bot"
        assert find_opponent("ai-9") is None
        assert find_opponent(None) is None

    def test_strategy_follows_opponent(self):
        manager = GameManager(opponent=find_opponent("ai-2"))
        assert isinstance(manager.strategy, MediumStrategy)
        manager.set_opponent(find_opponent("ai-4"))
        assert isinstance(manager.strategy, ExpertStrategy)


class TestGameManager:
    """游戏会话"""

    def test_opponent_sees_history_before_current_move(self):
        manager = make_manager()
        manager.play_round(R)
        manager.play_round(P)
        manager.play_round(S)
        assert manager.strategy.seen == [(), (R,), (R, P)]
        assert manager.get_move_history() == (R, P, S)

    def test_round_results_and_statistics(self):
        manager = make_manager()
        first = manager.play_round(R)
        assert first.round_number == 1
        assert first.opponent_gesture == S
        assert first.result == GameResult.WIN
        manager.play_round(P)
        manager.play_round(S)
        stats = manager.get_statistics()
        assert stats == GameStatistics(total_games=3, wins=1, losses=1, draws=1,
                                       win_streak=0, best_win_streak=1)
        assert manager.get_last_round_result().to_dict()['result'] == "draw"
        assert [r.round_number for r in manager.get_round_history()] == [1, 2, 3]

    def test_explicit_opponent_gesture_skips_strategy(self):
        manager = make_manager()
        result = manager.play_round(R, P)
        assert result.result == GameResult.LOSS
        assert manager.strategy.seen == []

    def test_initial_statistics_are_continued(self):
        initial = GameStatistics(total_games=4, wins=4, win_streak=4, best_win_streak=4)
        manager = make_manager(statistics=initial)
        manager.play_round(R)
        assert manager.get_statistics().best_win_streak == 5

    def test_play_before_start_raises(self):
        manager = GameManager()
        with pytest.raises(GameException):
            manager.play_round(R)

    def test_max_rounds_ends_game(self):
        manager = make_manager(max_rounds=2)
        assert manager.get_remaining_rounds() == 2
        manager.play_round(R)
        assert not manager.is_game_over()
        manager.play_round(R)
        assert manager.is_game_over()
        assert manager.get_remaining_rounds() == 0
        assert not manager.is_game_active

    def test_current_round_counts_played_rounds(self):
        manager = make_manager()
        assert manager.get_current_round() == 0
        manager.play_round(R)
        manager.play_round(S)
        assert manager.get_current_round() == 2

    def test_unlimited_rounds(self):
        manager = make_manager()
        for _ in range(20):
            manager.play_round(P)
        assert manager.get_remaining_rounds() is None
        assert not manager.is_game_over()

    def test_negative_max_rounds_rejected(self):
        with pytest.raises(GameException):
            GameManager(max_rounds=-1)

    def test_new_session_clears_history_keeps_statistics(self):
        manager = make_manager()
        manager.play_round(R)
        manager.end_game()
        manager.start_game()
        assert manager.get_move_history() == ()
        assert manager.get_statistics().total_games == 1


class TestGameStateMachine:
    """状态机"""

    def test_valid_and_invalid_transitions(self):
        machine = GameStateMachine()
        assert not machine.transition_to(GameState.REVEALING)
        assert machine.is_in_state(GameState.IDLE)
        assert machine.transition_to(GameState.WAITING_MOVE)
        assert machine.get_previous_state() == GameState.IDLE

    def test_error_reachable_from_every_state(self):
        for state in GameState:
            machine = GameStateMachine(initial_state=state)
            assert machine.can_transition_to(GameState.ERROR)

    def test_state_handler_called_on_enter(self):
        entered = []
        machine = GameStateMachine()
        machine.register_state_handler(GameState.WAITING_MOVE, lambda: entered.append(1))
        machine.transition_to(GameState.WAITING_MOVE)
        assert entered == [1]

    def test_force_and_reset(self):
        machine = GameStateMachine()
        assert machine.transition_to(GameState.GAME_OVER, force=True)
        machine.reset()
        assert machine.get_current_state() == GameState.IDLE


class FailingStore:
    def save(self, stats):
        raise StorageException("disk full", path="stats.yaml")


class TestGameController:
    """游戏控制器"""

    def make_controller(self, store=None, max_rounds=0):
        manager = make_manager(max_rounds=max_rounds)
        manager.end_game()
        self.pauses = []
        controller = GameController(manager, stats_store=store,
                                    thinking_delay=1.0, reveal_delay=1.5,
                                    sleep=self.pauses.append)
        self.states = []
        controller.on_state_changed = self.states.append
        return controller

    def test_round_phases_in_order(self, tmp_path):
        store = StatsStore(tmp_path / "stats.yaml")
        controller = self.make_controller(store)
        rounds, stats_seen = [], []
        controller.on_round_result = rounds.append
        controller.on_stats_changed = stats_seen.append

        controller.start_game()
        result = controller.play(R)

        assert self.states == [
            GameState.WAITING_MOVE,
            GameState.OPPONENT_THINKING,
            GameState.REVEALING,
            GameState.ROUND_END,
            GameState.WAITING_MOVE,
        ]
        assert self.pauses == [1.0, 1.5]
        assert rounds == [result]
        assert stats_seen[0].wins == 1
        assert store.load() == controller.get_game_statistics()

    def test_game_over_after_max_rounds(self):
        controller = self.make_controller(max_rounds=1)
        controller.start_game()
        controller.play(P)
        assert controller.get_current_state() == GameState.GAME_OVER
        with pytest.raises(GameException):
            controller.play(P)

    def test_play_requires_waiting_state(self):
        controller = self.make_controller()
        with pytest.raises(GameException):
            controller.play(R)

    def test_storage_failure_enters_error_state(self):
        controller = self.make_controller(FailingStore())
        controller.start_game()
        with pytest.raises(StorageException):
            controller.play(R)
        assert controller.get_current_state() == GameState.ERROR
        controller.reset_game()
        assert controller.get_current_state() == GameState.IDLE

    def test_callback_errors_do_not_break_round(self):
        controller = self.make_controller()

        def broken(_):
            raise RuntimeError("boom")

        controller.on_round_result = broken
        controller.start_game()
        controller.play(R)
        assert controller.get_current_state() == GameState.WAITING_MOVE

    def test_zero_delay_does_not_sleep(self):
        controller = self.make_controller()
        controller.thinking_delay = 0
        controller.reveal_delay = 0
        controller.start_game()
        controller.play(S)
        assert self.pauses == []

    def test_reset_statistics(self, tmp_path):
        store = StatsStore(tmp_path / "stats.yaml")
        controller = self.make_controller(store)
        controller.start_game()
        controller.play(R)
        assert controller.reset_statistics() == GameStatistics.zero()
        assert controller.get_game_statistics() == GameStatistics.zero()
        assert store.load() == GameStatistics.zero()
