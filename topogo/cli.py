"""Text sessions for Go and Invasion, driven by the same keys as the board views."""

from __future__ import annotations

import argparse
import random
import sys
from typing import Callable

from topogo.boards import (
    Board,
    board_from_name,
    create_cube,
    create_cylinder,
    create_honeycomb3,
    create_honeycomb5,
    create_honeycomb6,
    create_layered,
    create_mobius,
    create_sphere,
    create_standard,
    create_torus,
)
from topogo.go import GoGame, IllegalMove, Stone
from topogo.invasion import COLOR_NAMES, NUM_COLORS, InvasionGame

GO_HELP = """\
The '+' marks and empty points are where stones may be played.
Type 'play N' to place a stone on node N.
Type 'remove N' to remove a dead stone from node N.
Press 'N' for a new game.
Press 'P' to Pass.
Press 'U' to Undo previous moves.
Press 'Q' to count occupied areas and show score.

Board Types - Press the associated key to change to that board.
F - Flat standard game board
S - Sphereical board
C - Cylinder board
B - Box or cubed board
D - Diamond board
3 - 3 neighbors board
5 - 5 neighbors board
6 - 6 neighbors board
L - Layered planes
T - Torus board
M - Mobius strip board
"""

INVASION_HELP = """\
Each turn, type 'color N' or a colour name to change into that colour.
Colours: 0 Red, 1 Green, 2 Dark Blue, 3 Purple, 4 Yellow, 5 Light Blue.
Press 'N' for a new game.
Press '2' to turn 2 player mode on and off (off by default).
Press 'U' to Undo the previous move.
Press ']' to let the computer choose the current player's colour.

Board Types - Press the associated key to change to that board.
F - Flat standard game board
S - Sphereical board
C - Cylinder board
B - Box or cubed board
3 - 3 neighbors board
5 - 5 neighbors board
6 - 6 neighbors board
L - Layered planes
T - Torus board
M - Mobius strip board
"""

_GO_BOARD_KEYS = {
    "f": "flat",
    "4": "flat",
    "d": "diamond",
    "s": "sphere",
    "m": "mobius",
    "t": "torus",
    "3": "3",
    "5": "5",
    "6": "6",
    "l": "layered",
    "c": "cylinder",
    "b": "box",
}

_INVASION_SPECIAL_RATIO = 0.9

_INVASION_BOARD_KEYS: dict[str, Callable[[], Board]] = {
    "f": lambda: create_standard(10, 10),
    "4": lambda: create_standard(10, 10),
    "s": lambda: create_sphere(9, 13),
    "m": lambda: create_mobius(15, 6),
    "t": lambda: create_torus(12, 8, _INVASION_SPECIAL_RATIO),
    "3": lambda: create_honeycomb3(8, 8),
    "5": lambda: create_honeycomb5(8, 8),
    "6": lambda: create_honeycomb6(8, 8),
    "l": lambda: create_layered(8, 8),
    "c": lambda: create_cylinder(15, 8),
    "b": lambda: create_cube(5, 5),
}

_COLOR_BY_NAME = {name.lower(): index for index, name in enumerate(COLOR_NAMES)}


def _split(command: str) -> list[str]:
    words = command.strip().lower().split()
    if not words:
        raise ValueError("empty command")
    return words


def _index(text: str, limit: int, what: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise ValueError(f"{what} must be a number, not {text!r}") from None
    if not 0 <= value < limit:
        raise ValueError(f"{what} {value} is out of range 0..{limit - 1}")
    return value


class GoSession:
    """Interprets typed commands for a game of Go."""

    def __init__(self, board_name: str | None = None) -> None:
        self.game = GoGame(board_from_name(board_name or "mobius"))

    def _status(self) -> str:
        white, black = self.game.scores[Stone.WHITE], self.game.scores[Stone.BLACK]
        if self.game.turn == Stone.WHITE:
            return f"White: {white} - Black: {black}"
        return f"Black: {black} - White: {white}"

    def _node(self, text: str) -> int:
        return _index(text, len(self.game.board), "node")

    def handle(self, command: str) -> str:
        """Carry out one command and return the text to show."""
        words = _split(command)
        key = words[0]
        try:
            if key == "play" and len(words) == 2:
                self.game.play(self._node(words[1]))
            elif key == "remove" and len(words) == 2:
                self.game.remove(self._node(words[1]))
            elif len(words) != 1:
                raise ValueError(f"unknown command {command.strip()!r}")
            elif key in _GO_BOARD_KEYS:
                self.game.switch_board(board_from_name(_GO_BOARD_KEYS[key]))
            elif key == "n":
                self.game.new_game()
            elif key == "u":
                self.game.undo()
            elif key == "p":
                self.game.pass_turn()
            elif key == "q":
                return self.game.result_text()
            else:
                raise ValueError(f"unknown command {command.strip()!r}")
        except IllegalMove as exc:
            return str(exc)
        return self._status()


class InvasionSession:
    """Interprets typed commands for a game of Invasion."""

    def __init__(self, two_player: bool = False, rng: random.Random | None = None) -> None:
        self.game = InvasionGame(
            _INVASION_BOARD_KEYS["m"](),
            two_player=two_player,
            rng=rng if rng is not None else random.Random(),
        )

    def _status(self) -> str:
        return (
            f"Player 1: {self.game.region_size(0)} - "
            f"Player 2: {self.game.region_size(1)} - "
            f"Player {self.game.turn + 1} to move"
        )

    def _click(self, color: int) -> str:
        self.game.click(color)
        message = self.game.end_message()
        return message if message is not None else self._status()

    def handle(self, command: str) -> str:
        """Carry out one command and return the text to show."""
        words = _split(command)
        key = words[0]
        phrase = " ".join(words)
        try:
            if phrase in _COLOR_BY_NAME:
                return self._click(_COLOR_BY_NAME[phrase])
            if key in ("color", "colour") and len(words) == 2:
                return self._click(_index(words[1], NUM_COLORS, "colour"))
            if len(words) != 1:
                raise ValueError(f"unknown command {command.strip()!r}")
            if key in _INVASION_BOARD_KEYS:
                self.game.switch_board(_INVASION_BOARD_KEYS[key]())
            elif key == "n":
                self.game.new_game()
            elif key == "2":
                self.game.two_player = not self.game.two_player
                return "2 Player Mode is " + ("ON" if self.game.two_player else "OFF")
            elif key == "u":
                self.game.undo()
            elif key in ("a", "h"):
                return INVASION_HELP
            elif key == "]":
                choice = self.game.ai.think(self.game.board, self.game.state, self.game.turn)
                return self._click(choice)
            else:
                raise ValueError(f"unknown command {command.strip()!r}")
        except IllegalMove as exc:
            return str(exc)
        return self._status()


def main(argv: list[str] | None = None) -> int:
    """Run a game session that reads commands from standard input."""
    parser = argparse.ArgumentParser(prog="topogo", description="Go and Invasion on odd boards.")
    parser.add_argument("game", nargs="?", choices=("go", "invasion"), default="go")
    parser.add_argument("--board", help="built-in board name or board file (go only)")
    parser.add_argument("--two-player", action="store_true", help="two human players (invasion only)")
    args = parser.parse_args(argv)

    session: GoSession | InvasionSession
    try:
        if args.game == "go":
            session = GoSession(args.board)
            print(GO_HELP)
        else:
            session = InvasionSession(two_player=args.two_player)
            print(INVASION_HELP)
    except (OSError, ValueError) as exc:
        print(f"Couldn't create that board: {exc}", file=sys.stderr)
        return 1

    for line in sys.stdin:
        text = line.strip()
        if not text:
            continue
        if text.lower() in ("quit", "exit"):
            break
        try:
            print(session.handle(text))
        except (OSError, ValueError) as exc:
            print(f"Error: {exc}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())