"""Tests for rules config loading."""

import pytest
from pathlib import Path

from reversicore.board import Board, Color
from reversicore.config import RulesConfig, load_config, parse_color

EXAMPLE_CONFIG = Path(__file__).resolve().parent.parent / "rules.yaml.example"


def _write(tmp_path, text):
    path = tmp_path / "rules.yaml"
    path.write_text(text)
    return path


class TestRulesConfig:
    def test_defaults(self):
        cfg = RulesConfig()
        assert cfg.first_player is Color.BLACK
        assert cfg.opening is None
        assert cfg.opening_board() == Board.new()

    def test_custom_opening_board(self):
        cfg = RulesConfig(opening={(0, 0): Color.WHITE})
        board = cfg.opening_board()
        assert board[0, 0] is Color.WHITE
        assert board.count() == 1


class TestParseColor:
    @pytest.mark.parametrize("raw", ["black", "Black", " BLACK "])
    def test_black_spellings(self, raw):
        assert parse_color(raw) is Color.BLACK

    def test_passthrough(self):
        assert parse_color(Color.WHITE) is Color.WHITE

    @pytest.mark.parametrize("raw", ["red", "", 1, None])
    def test_unknown_rejected(self, raw):
        with pytest.raises(ValueError):
            parse_color(raw)


class TestLoadConfig:
    def test_empty_file_gives_defaults(self, tmp_path):
        cfg = load_config(_write(tmp_path, ""))
        assert cfg == RulesConfig()

    def test_first_player(self, tmp_path):
        cfg = load_config(_write(tmp_path, "rules:\n  first_player: white\n"))
        assert cfg.first_player is Color.WHITE

    def test_opening(self, tmp_path):
        text = (
            "rules:\n"
            "  opening:\n"
            "    - [0, 0, black]\n"
            "    - [1, 0, white]\n"
        )
        cfg = load_config(_write(tmp_path, text))
        assert cfg.opening == {(0, 0): Color.BLACK, (1, 0): Color.WHITE}

    def test_opening_out_of_range(self, tmp_path):
        text = "rules:\n  opening:\n    - [8, 0, black]\n"
        with pytest.raises(ValueError):
            load_config(_write(tmp_path, text))

    def test_opening_malformed_entry(self, tmp_path):
        text = "rules:\n  opening:\n    - [0, black]\n"
        with pytest.raises(ValueError):
            load_config(_write(tmp_path, text))

    def test_unknown_color(self, tmp_path):
        with pytest.raises(ValueError):
            load_config(_write(tmp_path, "rules:\n  first_player: green\n"))

    def test_example_config_loads(self):
        cfg = load_config(EXAMPLE_CONFIG)
        assert cfg.first_player is Color.BLACK
        assert cfg.opening_board() == Board.new()

    def test_rules_not_a_mapping(self, tmp_path):
        with pytest.raises(ValueError):
            load_config(_write(tmp_path, "rules: 5\n"))

    def test_top_level_not_a_mapping(self, tmp_path):
        with pytest.raises(ValueError):
            load_config(_write(tmp_path, "- rules\n"))

    def test_opening_not_a_list(self, tmp_path):
        with pytest.raises(ValueError):
            load_config(_write(tmp_path, "rules:\n  opening: black\n"))

    def test_duplicate_opening_coordinate(self, tmp_path):
        text = (
            "rules:\n"
            "  opening:\n"
            "    - [0, 0, black]\n"
            "    - [0, 0, white]\n"
        )
        with pytest.raises(ValueError):
            load_config(_write(tmp_path, text))
