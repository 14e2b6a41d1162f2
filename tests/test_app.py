"""
应用程序与命令行测试
Application and CLI Tests
"""
import logging

import yaml

import pytest

from rps_arena.app import Application
from rps_arena.main import main, build_parser
from rps_arena.game.game_logic import GameStatistics
from rps_arena.storage import StatsStore
from rps_arena.utils.exceptions import ConfigurationException


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config.yaml"
    config = {
        "game": {"thinking_delay": 0, "reveal_delay": 0},
        "storage": {"stats_file": str(tmp_path / "stats.yaml")},
    }
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config, f)
    return str(path)


def scripted_input(lines):
    queue = list(lines)

    def read(prompt):
        if not queue:
            raise EOFError
        return queue.pop(0)

    return read


def make_app(config_path):
    output = []
    return Application(config_path=config_path, output=output.append), output


def test_play_session_persists_statistics(config_path):
    app, output = make_app(config_path)
    stats = app.play(read_input=scripted_input(["rock", "lizard", "p", "q"]),
                     opponent_id="ai-2", seed=1)

    assert stats.total_games == 2
    assert stats.is_consistent()
    assert any("Unknown move" in line for line in output)
    assert app.stats_store.load() == stats
    assert app.stats_store.load_selected_opponent() == "ai-2"


def test_play_stops_at_max_rounds(config_path):
    app, output = make_app(config_path)
    stats = app.play(read_input=scripted_input(["r"] * 10), max_rounds=3, seed=5)
    assert stats.total_games == 3
    assert "Game over!" in output


def test_play_stops_on_end_of_input(config_path):
    app, _ = make_app(config_path)
    stats = app.play(read_input=scripted_input(["s"]), seed=2)
    assert stats.total_games == 1


def test_statistics_accumulate_across_sessions(config_path):
    app, _ = make_app(config_path)
    app.play(read_input=scripted_input(["rock", "rock"]), seed=3)
    app, _ = make_app(config_path)
    stats = app.play(read_input=scripted_input(["paper"]), seed=3)
    assert stats.total_games == 3


def test_opponent_selection_order(config_path):
    app, _ = make_app(config_path)
    assert app.resolve_opponent().id == "ai-1"
    app.stats_store.save_selected_opponent("ai-3")
    assert app.resolve_opponent().id == "ai-3"
    assert app.resolve_opponent("ai-4").id == "ai-4"
    with pytest.raises(ConfigurationException):
        app.resolve_opponent("ai-99")


def test_format_statistics():
    text = Application.format_statistics(
        GameStatistics(total_games=4, wins=3, losses=1, win_streak=0, best_win_streak=3))
    assert "Total Games:  4" in text
    assert "Wins:         3 (75%)" in text
    assert "Best Streak:  3" in text
    assert "Status:       Cold" in text
    assert "Play Time:    10 min" in text


def test_cli_stats_and_reset(config_path, tmp_path, capsys):
    store = StatsStore(tmp_path / "stats.yaml")
    store.save(GameStatistics(total_games=1, wins=1, win_streak=1, best_win_streak=1))

    assert main(["--config", config_path, "stats"]) == 0
    assert "Total Games:  1" in capsys.readouterr().out

    assert main(["--config", config_path, "reset"]) == 0
    assert store.load() == GameStatistics.zero()


def test_cli_opponents(config_path, capsys):
    assert main(["--config", config_path, "opponents"]) == 0
    out = capsys.readouterr().out
    for name in ("Beginner Bot", "Smart Bot", "Master Bot", "Legend Bot"):
        assert name in out


def test_cli_unknown_opponent_fails(config_path):
    assert main(["--config", config_path, "play", "--opponent", "ai-99", "--no-delay"]) == 1


def test_cli_bad_config_fails(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("game:\n  max_rounds: many\n", encoding="utf-8")
    assert main(["--config", str(path), "stats"]) == 1


def test_parser_defaults():
    args = build_parser().parse_args(["play", "--rounds", "3", "--no-delay"])
    assert args.rounds == 3
    assert args.no_delay
    assert args.opponent is None


def test_log_file_receives_round_log(tmp_path):
    log_file = tmp_path / "logs" / "rps.log"
    path = tmp_path / "config.yaml"
    config = {
        "game": {"thinking_delay": 0, "reveal_delay": 0},
        "storage": {"stats_file": str(tmp_path / "stats.yaml")},
        "logging": {"level": "INFO", "file": str(log_file)},
    }
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config, f)

    root_logger = logging.getLogger("RPS")
    try:
        app, _ = make_app(str(path))
        app.play(read_input=scripted_input(["rock"]), seed=4)

        assert log_file.exists()
        assert "回合 1" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in list(root_logger.handlers):
            if isinstance(handler, logging.FileHandler):
                root_logger.removeHandler(handler)
                handler.close()


def test_prompt_shows_round_number(config_path):
    prompts = []
    answers = ["rock", "paper"]

    def read(prompt):
        prompts.append(prompt)
        if not answers:
            raise EOFError
        return answers.pop(0)

    app, _ = make_app(config_path)
    app.play(read_input=read, seed=6)
    assert [p.split(" - ")[0] for p in prompts] == ["Round 1", "Round 2", "Round 3"]
