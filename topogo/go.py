"""Go rules and game state for boards of arbitrary topology."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import MutableSequence, Sequence

from topogo.boards import Board, BoardDelta


class Stone(IntEnum):
    """The state of a single board point."""

    WHITE = 0
    BLACK = 1
    EMPTY = 2

    @property
    def opponent(self) -> Stone:
        if self is Stone.EMPTY:
            raise ValueError("an empty point has no opponent")
        return Stone((self + 1) % 2)

    @property
    def label(self) -> str:
        return self.name.capitalize()


class IllegalMove(Exception):
    """A move that the rules do not allow."""


SPOT_TAKEN = "Spot already taken"
SUICIDE = "Going there would be suicide"
KO_VIOLATION = "KO Violation"
REMOVE_EMPTY = "Can't remove empty stones."


@dataclass(frozen=True)
class LandStats:
    """Empty points enclosed by each colour, and those enclosed by neither."""

    white: int
    black: int
    free: int


def _other(turn: int) -> int:
    return (turn + 1) % 2


class GoRules:
    """Placement, capture and territory counting."""

    @staticmethod
    def _group(board: Board, state: Sequence[int], at: int) -> tuple[list[int], int]:
        """Return the stones connected to ``at`` and the count of their liberties."""
        color = state[at]
        if color == Stone.EMPTY:
            return [], 0
        enemy = _other(color)
        seen = {at}
        stack = [at]
        stones: list[int] = []
        liberties = 0
        while stack:
            current = stack.pop()
            if state[current] == Stone.EMPTY:
                liberties += 1
                continue
            stones.append(current)
            for n in board[current].neighbors:
                if n not in seen and state[n] != enemy:
                    seen.add(n)
                    stack.append(n)
        return stones, liberties

    def make_move(
        self, board: Board, state: MutableSequence[int], at: int, turn: int
    ) -> list[int]:
        """Place a stone of ``turn`` at ``at``, capturing as needed.

        Returns the captured points. Raises IllegalMove, leaving ``state``
        untouched, if the point is occupied or the move would be suicide.
        """
        if state[at] != Stone.EMPTY:
            raise IllegalMove(SPOT_TAKEN)
        backup = list(state)
        state[at] = turn
        enemy = _other(turn)
        captured: list[int] = []
        for n in board[at].neighbors:
            if state[n] != enemy:
                continue
            stones, liberties = self._group(board, state, n)
            if liberties == 0:
                for s in stones:
                    state[s] = Stone.EMPTY
                captured.extend(stones)
        _, liberties = self._group(board, state, at)
        if liberties == 0:
            state[:] = backup
            raise IllegalMove(SUICIDE)
        return captured

    def land_stats(self, board: Board, state: Sequence[int]) -> LandStats:
        """Count empty regions bordered by only one colour."""
        white = black = free = 0
        seen: set[int] = set()
        for start in range(len(board)):
            if state[start] != Stone.EMPTY or start in seen:
                continue
            seen.add(start)
            stack = [start]
            size = 0
            touches: set[int] = set()
            while stack:
                current = stack.pop()
                size += 1
                for n in board[current].neighbors:
                    value = state[n]
                    if value == Stone.EMPTY:
                        if n not in seen:
                            seen.add(n)
                            stack.append(n)
                    else:
                        touches.add(value)
            hit_white = Stone.WHITE in touches
            hit_black = Stone.BLACK in touches
            if hit_white and not hit_black:
                white += size
            elif hit_black and not hit_white:
                black += size
            else:
                free += size
        return LandStats(white, black, free)


@dataclass
class GoGame:
    """A game of Go on one board, with move history and capture scores."""

    board: Board
    state: list[int] = field(default_factory=list)
    turn: Stone = Stone.BLACK
    scores: list[int] = field(default_factory=lambda: [0, 0])
    game_over: bool = False
    history: list[BoardDelta] = field(default_factory=list)
    rules: GoRules = field(default_factory=GoRules)

    def __post_init__(self) -> None:
        self.new_game()

    def switch_board(self, board: Board) -> None:
        """Play on a different board, starting a new game."""
        self.board = board
        self.new_game()

    def new_game(self) -> None:
        self.game_over = False
        self.turn = Stone.BLACK
        self.scores = [0, 0]
        self.history.clear()
        self.state = [Stone.EMPTY] * len(self.board)

    def _record(self, turn_from: int, before: Sequence[int]) -> BoardDelta:
        delta = BoardDelta.between(turn_from, before, self.turn, self.state)
        self.history.append(delta)
        return delta

    def _score(self, delta: BoardDelta, step: int) -> None:
        for change in delta.deltas:
            if change.after == Stone.EMPTY:
                self.scores[_other(change.before)] += step

    def play(self, at: int) -> None:
        """Place the current player's stone at ``at``."""
        before = list(self.state)
        turn_from = self.turn
        self.rules.make_move(self.board, self.state, at, self.turn)
        delta = BoardDelta.between(turn_from, before, self.turn, self.state)
        if self.history and delta.cancels(self.history[-1]):
            self.state[:] = before
            raise IllegalMove(KO_VIOLATION)
        self.history.append(delta)
        self.turn = self.turn.opponent
        self._score(delta, 1)

    def remove(self, at: int) -> None:
        """Take a dead stone off the board; it counts for the other colour."""
        if self.state[at] == Stone.EMPTY:
            raise IllegalMove(REMOVE_EMPTY)
        before = list(self.state)
        self.state[at] = Stone.EMPTY
        delta = self._record(self.turn, before)
        self._score(delta, 1)

    def undo(self) -> bool:
        """Revert the last move, pass or removal; False if there is none."""
        if not self.history:
            return False
        delta = self.history.pop()
        self.game_over = False
        self.turn = Stone(delta.undo_effect(self.state))
        self._score(delta, -1)
        return True

    def pass_turn(self) -> None:
        turn_from = self.turn
        self.turn = self.turn.opponent
        self._record(turn_from, self.state)

    def _totals(self) -> tuple[LandStats, int, int]:
        land = self.rules.land_stats(self.board, self.state)
        return (
            land,
            self.scores[Stone.WHITE] + land.white,
            self.scores[Stone.BLACK] + land.black,
        )

    def end_game(self) -> Stone | None:
        """Count territory and captures; return the winner, or None on a tie."""
        _, white, black = self._totals()
        if white == black:
            return None
        return Stone.WHITE if white > black else Stone.BLACK

    def result_text(self) -> str:
        land, white, black = self._totals()
        text = (
            f"White: {land.white} Land + {self.scores[Stone.WHITE]} Dead = {white}\n"
            f"Black: {land.black} Land + {self.scores[Stone.BLACK]} Dead = {black}\n"
            f"Free Land: {land.free}\n"
        )
        if white == black:
            return text + "\nTie!"
        winner = Stone.WHITE if white > black else Stone.BLACK
        return text + f"\n{winner.label} Wins!"