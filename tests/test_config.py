import argparse

import pytest

from mineboard.config import GameConfig, DEFAULT_ROWS, DEFAULT_COLUMNS, DEFAULT_MINES
from mineboard.engine import InvalidConfig


def test_defaults_match_classic_game():
    config = GameConfig()
    assert (config.rows, config.columns, config.mines) == (DEFAULT_ROWS, DEFAULT_COLUMNS, DEFAULT_MINES)
    assert config.validate() is config


@pytest.mark.parametrize("seed,expected", [(-1, None), (None, None), (0, 0), (42, 42)])
def test_from_args_seed_handling(seed, expected):
    args = argparse.Namespace(rows=4, columns=5, mines=3, seed=seed)
    assert GameConfig.from_args(args).seed == expected


def test_from_args_validates():
    args = argparse.Namespace(rows=2, columns=2, mines=4, seed=-1)
    with pytest.raises(InvalidConfig):
        GameConfig.from_args(args)


def test_create_board_uses_seed():
    config = GameConfig(rows=6, columns=7, mines=5, seed=9)
    a = config.create_board()
    b = config.create_board()
    assert (a.rows, a.columns, a.mine_count) == (6, 7, 5)
    a.dig(3, 3)
    b.dig(3, 3)
    assert (a.truth_grid == b.truth_grid).all()
