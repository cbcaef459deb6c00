
from __future__ import annotations
import random
from enum import Enum
from typing import Iterable, List, Optional, Tuple
import numpy as np

Coordinate = Tuple[int, int]

# Cell codes. Counts 0..8 are stored as themselves.
MINE = -1
UNKNOWN = -2
FLAG = -3

SYMBOLS = {UNKNOWN: '#', FLAG: 'F', MINE: '*', **{n: str(n) for n in range(9)}}

NEIGHBOR_OFFSETS: List[Coordinate] = [
    (dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)
]

# Grids tried for a 0 at the first dig before settling for any non-mine
MAX_ZERO_ATTEMPTS = 1000


class BoardError(Exception):
    """Base class for board misuse."""


class InvalidConfig(BoardError, ValueError):
    pass


class GridNotGenerated(BoardError):
    pass


class BoardDestroyed(BoardError):
    pass


class DigResult(Enum):
    OK = 'ok'
    BOOM = 'boom'
    OUT_OF_BOUNDS = 'out_of_bounds'


class FlagResult(Enum):
    OK = 'ok'
    OUT_OF_BOUNDS = 'out_of_bounds'


class Target(Enum):
    VISIBLE = 'visible'
    TRUTH = 'truth'


def check_dimensions(rows: int, columns: int, mines: int) -> None:
    if rows <= 0 or columns <= 0:
        raise InvalidConfig(f'board must have positive dimensions, got {rows}x{columns}')
    if mines < 0:
        raise InvalidConfig(f'mine count must be non-negative, got {mines}')
    if mines >= rows * columns:
        raise InvalidConfig(f'{mines} mines do not fit a {rows}x{columns} board with a safe cell left')


class Board:
    """Minesweeper board: a hidden truth grid and the player's visible grid.

    Both grids are flat row-major int8 arrays. The truth grid is generated
    on the first dig so that the first dug cell can be guaranteed safe.
    """

    def __init__(self, rows: int, columns: int, mines: int, seed: Optional[int] = None,
                 rng: Optional[random.Random] = None):
        check_dimensions(rows, columns, mines)
        self.rows = rows
        self.columns = columns
        self.mine_count = mines
        if rng is not None:
            self.rng = rng
        else:
            self.rng = random.Random(int(seed)) if seed is not None else random.Random()
        self.truth_grid: Optional[np.ndarray] = None
        self.visible_grid: Optional[np.ndarray] = np.full(rows * columns, UNKNOWN, dtype=np.int8)
        self.generation_attempts = 0
        self.max_zero_attempts = MAX_ZERO_ATTEMPTS
        self._destroyed = False

    @classmethod
    def from_mines(cls, rows: int, columns: int, mines: Iterable[Coordinate]) -> 'Board':
        """Build a board with a fixed mine layout; no safe-first-dig step applies."""
        positions = set((int(r), int(c)) for r, c in mines)
        board = cls(rows, columns, len(positions))
        for r, c in positions:
            if not board.in_bounds(r, c):
                raise InvalidConfig(f'mine at ({r}, {c}) is outside a {rows}x{columns} board')
        board.truth_grid = np.zeros(rows * columns, dtype=np.int8)
        for r, c in positions:
            board.truth_grid[board.index(r, c)] = MINE
        board._fill_counts()
        return board

    @property
    def is_generated(self) -> bool:
        return self.truth_grid is not None

    def _check_alive(self) -> None:
        if self._destroyed:
            raise BoardDestroyed('board has been destroyed')

    def in_bounds(self, row: int, column: int) -> bool:
        return 0 <= row < self.rows and 0 <= column < self.columns

    def index(self, row: int, column: int) -> int:
        return row * self.columns + column

    def neighbors(self, row: int, column: int) -> List[Coordinate]:
        coords = []
        for dr, dc in NEIGHBOR_OFFSETS:
            nr, nc = row + dr, column + dc
            if self.in_bounds(nr, nc):
                coords.append((nr, nc))
        return coords

    def generate_grid(self) -> None:
        ncells = self.rows * self.columns
        if self.truth_grid is None:
            self.truth_grid = np.zeros(ncells, dtype=np.int8)
        else:
            self.truth_grid[:] = 0
        # Reject-resample until every mine has a distinct cell
        remaining = self.mine_count
        while remaining > 0:
            i = self.rng.randrange(ncells)
            if self.truth_grid[i] != MINE:
                self.truth_grid[i] = MINE
                remaining -= 1
        self._fill_counts()

    def _fill_counts(self) -> None:
        grid = self.truth_grid.reshape(self.rows, self.columns)
        is_mine = grid == MINE
        padded = np.pad(is_mine.astype(np.int8), 1)
        counts = np.zeros((self.rows, self.columns), dtype=np.int8)
        for dr, dc in NEIGHBOR_OFFSETS:
            counts += padded[1 + dr:1 + dr + self.rows, 1 + dc:1 + dc + self.columns]
        grid[~is_mine] = counts[~is_mine]

    def zero_reachable(self, row: int, column: int) -> bool:
        """Whether some layout leaves (row, column) with no adjacent mines."""
        protected = 1 + len(self.neighbors(row, column))
        return self.mine_count <= self.rows * self.columns - protected

    def ensure_safe_first_dig(self, row: int, column: int) -> None:
        idx = self.index(row, column)
        # Dense boards cannot always give a 0 at the first dig; settle for a non-mine.
        wanted_zero = self.zero_reachable(row, column)
        tries = 0
        while True:
            self.generate_grid()
            self.generation_attempts += 1
            tries += 1
            if wanted_zero and tries >= self.max_zero_attempts:
                wanted_zero = False
            value = self.truth_grid[idx]
            if value == 0 or (not wanted_zero and value != MINE):
                return

    def dig(self, row: int, column: int) -> DigResult:
        self._check_alive()
        if not self.in_bounds(row, column):
            return DigResult.OUT_OF_BOUNDS
        idx = self.index(row, column)
        if self.visible_grid[idx] == FLAG:
            return DigResult.OK
        if self.truth_grid is None:
            self.ensure_safe_first_dig(row, column)
        if self.truth_grid[idx] == MINE:
            self.visible_grid[idx] = MINE
            return DigResult.BOOM
        self._flood_reveal(row, column)
        return DigResult.OK

    def _cascade_target(self, idx: int) -> bool:
        # A flag does not hold back the cascade from a cell with no adjacent mines
        shown = self.visible_grid[idx]
        return shown == UNKNOWN or (shown == FLAG and self.truth_grid[idx] == 0)

    def _flood_reveal(self, row: int, column: int) -> None:
        stack = [(row, column)]
        while stack:
            r, c = stack.pop()
            idx = self.index(r, c)
            if not self._cascade_target(idx):
                continue
            value = self.truth_grid[idx]
            self.visible_grid[idx] = value
            if value == 0:
                for nr, nc in self.neighbors(r, c):
                    if self._cascade_target(self.index(nr, nc)):
                        stack.append((nr, nc))

    def flag(self, row: int, column: int) -> FlagResult:
        self._check_alive()
        if not self.in_bounds(row, column):
            return FlagResult.OUT_OF_BOUNDS
        idx = self.index(row, column)
        if self.visible_grid[idx] == UNKNOWN:
            self.visible_grid[idx] = FLAG
        return FlagResult.OK

    def is_cleared(self) -> bool:
        """True once every non-mine cell has been revealed."""
        self._check_alive()
        if self.truth_grid is None:
            return False
        safe = self.truth_grid != MINE
        return bool(np.all(self.visible_grid[safe] == self.truth_grid[safe]))

    def render(self, which: Target = Target.VISIBLE) -> str:
        self._check_alive()
        if which is Target.TRUTH:
            if self.truth_grid is None:
                raise GridNotGenerated('truth grid is generated on the first dig')
            buffer = self.truth_grid
        else:
            buffer = self.visible_grid
        width = max(2, len(str(self.rows - 1)))
        gutter = ' ' * width
        tens = ''.join(str(i // 10 % 10) if i % 10 == 0 else ' ' for i in range(self.columns))
        ones = ''.join(str(i % 10) for i in range(self.columns))
        lines = [
            f'{gutter}| {tens}',
            f'{gutter}| {ones}',
            '-' * width + '|-' + '-' * self.columns,
        ]
        for r in range(self.rows):
            start = self.index(r, 0)
            cells = ''.join(SYMBOLS[int(v)] for v in buffer[start:start + self.columns])
            lines.append(f'{r:>{width}}| {cells}')
        return '\n'.join(lines)

    def destroy(self) -> None:
        self.truth_grid = None
        self.visible_grid = None
        self._destroyed = True
