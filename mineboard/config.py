
from __future__ import annotations
import argparse
from dataclasses import dataclass
from typing import Optional

from .engine import Board, check_dimensions

# Defaults of the classic command loop
DEFAULT_ROWS = 10
DEFAULT_COLUMNS = 10
DEFAULT_MINES = 20


@dataclass
class GameConfig:
    rows: int = DEFAULT_ROWS
    columns: int = DEFAULT_COLUMNS
    mines: int = DEFAULT_MINES
    seed: Optional[int] = None

    def validate(self) -> 'GameConfig':
        check_dimensions(self.rows, self.columns, self.mines)
        return self

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'GameConfig':
        # <0 means OS entropy, same convention as the seed flags elsewhere
        seed = None if args.seed is None or args.seed < 0 else args.seed
        return cls(rows=args.rows, columns=args.columns, mines=args.mines, seed=seed).validate()

    def create_board(self) -> Board:
        return Board(self.rows, self.columns, self.mines, seed=self.seed)
