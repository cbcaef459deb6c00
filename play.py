from __future__ import annotations
import argparse
import re
import sys
from typing import List, Optional, TextIO, Tuple
from mineboard.config import GameConfig, DEFAULT_ROWS, DEFAULT_COLUMNS, DEFAULT_MINES
from mineboard.engine import Board, DigResult, FlagResult, Target

CLEAR_SCREEN = '\x1b[1;1H\x1b[2J'
COMMAND_RE = re.compile(r'^\s*(\S)\s*(-?\d+)\s*[,\s]\s*(-?\d+)\s*$')


def parse_command(line: str) -> Optional[Tuple[str, int, int]]:
    m = COMMAND_RE.match(line)
    if m is None:
        return None
    op, r, c = m.groups()
    return op, int(r), int(c)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Play Minesweeper in the terminal.')
    parser.add_argument('--rows', type=int, default=DEFAULT_ROWS)
    parser.add_argument('--columns', type=int, default=DEFAULT_COLUMNS)
    parser.add_argument('--mines', type=int, default=DEFAULT_MINES)
    parser.add_argument('--seed', type=int, default=-1, help='RNG seed; <0 uses OS entropy (random every run)')
    parser.add_argument('--verbose', action='store_true', help='Print board parameters and generation stats')
    parser.add_argument('--no_clear', action='store_true', help='Do not clear the screen between moves')
    return parser


def apply_command(board: Board, op: str, row: int, column: int):
    # 'd' digs, anything else flags
    if op == 'd':
        return board.dig(row, column)
    return board.flag(row, column)


def main(argv: Optional[List[str]] = None, stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = GameConfig.from_args(args)
    except ValueError as e:
        parser.error(str(e))
    board = config.create_board()

    def out(text: str = '') -> None:
        print(text, file=stdout)

    def redraw() -> None:
        if not args.no_clear:
            stdout.write(CLEAR_SCREEN)
        out(board.render())

    if args.verbose:
        out(f"[play] {config.rows}x{config.columns} board, {config.mines} mines, seed={config.seed}")
    redraw()
    outcome = None
    try:
        while outcome is None:
            stdout.write('>')
            stdout.flush()
            line = stdin.readline()
            if not line:
                break
            cmd = parse_command(line)
            if cmd is None:
                redraw()
                out(f"[play] Could not parse {line.strip()!r}; expected '<op> <row>, <column>'")
                continue
            was_generated = board.is_generated
            result = apply_command(board, *cmd)
            redraw()
            if args.verbose and board.is_generated and not was_generated:
                out(f"[play] Grid generated after {board.generation_attempts} attempt(s)")
            if result in (DigResult.OUT_OF_BOUNDS, FlagResult.OUT_OF_BOUNDS):
                out(f"[play] ({cmd[1]}, {cmd[2]}) is off the board")
            elif result is DigResult.BOOM:
                outcome = 'LOSE'
            elif board.is_cleared():
                outcome = 'WIN'
    except KeyboardInterrupt:
        out()
        out("[play] Interrupted.")
    finally:
        if outcome == 'LOSE':
            out()
            out(board.render(Target.TRUTH))
        if outcome is not None:
            out(outcome)
        board.destroy()
    return 0


if __name__ == '__main__':
    sys.exit(main())
