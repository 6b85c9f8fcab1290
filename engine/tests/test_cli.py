"""Tests for the terminal battle runner."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from cli.battle import main
from beamfield.core.generator import generate_board
from beamfield.core.notation import encode


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("BEAMFIELD_MAX_TURNS", raising=False)
    monkeypatch.delenv("BEAMFIELD_SEED", raising=False)


class TestSingleBattle:
    def test_short_battle(self, capsys):
        assert main(['--max-turns', '2']) == 0
        out = capsys.readouterr().out
        assert "Battle finished after 3 turns, A to move" in out

    def test_show_board(self, capsys):
        assert main(['--max-turns', '0', '--seed', 's', '--show-board']) == 0
        out = capsys.readouterr().out
        assert out.startswith(encode(generate_board(10, 10, 1, 1, 1, seed='s')))

    def test_explicit_preset(self, capsys):
        assert main(['--preset', 'default', '--max-turns', '0']) == 0
        assert "after 1 turns" in capsys.readouterr().out

    def test_unknown_preset(self):
        with pytest.raises(SystemExit):
            main(['--preset', 'huge'])


class TestMatch:
    def test_match(self, capsys):
        assert main(['--match', '--max-turns', '1']) == 0
        out = capsys.readouterr().out
        assert "Battle 1: 2 turns" in out
        assert "Battle 2: 2 turns" in out

    def test_match_rejects_preset(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(['--match', '--preset', 'default'])
        assert excinfo.value.code == 2
        assert "--preset" in capsys.readouterr().err

    def test_match_rejects_show_board(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(['--match', '--show-board'])
        assert excinfo.value.code == 2
        assert "--show-board" in capsys.readouterr().err
