"""A colour-flooding territory game with a look-ahead computer opponent."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import MutableSequence, Sequence

from topogo.boards import Board, BoardDelta
from topogo.go import IllegalMove

NUM_COLORS = 6
COLOR_NAMES = ("Red", "Green", "Dark Blue", "Purple", "Yellow", "Light Blue")
THINK_DEPTH = 4

GAME_OVER = "Game Over\nPress 'N' for a new game"
ALREADY_TAKEN = "Already taken"


def _other(turn: int) -> int:
    return (turn + 1) % 2


def _start_of(board: Board, turn: int) -> int:
    return board.start_p0 if turn == 0 else board.start_p1


def _region(board: Board, state: Sequence[int], start: int) -> set[int]:
    """The points connected to ``start`` through points of its colour."""
    color = state[start]
    seen = {start}
    stack = [start]
    while stack:
        current = stack.pop()
        for n in board[current].neighbors:
            if n not in seen and state[n] == color:
                seen.add(n)
                stack.append(n)
    return seen


def _flood(board: Board, state: MutableSequence[int], start: int, color: int) -> None:
    """Recolour the region around ``start`` with ``color``."""
    if state[start] == color:
        return
    for index in _region(board, state, start):
        state[index] = color


class InvasionAI:
    """Chooses a colour by searching a few moves ahead for both players."""

    def __init__(self, depth: int = THINK_DEPTH) -> None:
        if depth < 1:
            raise ValueError("search depth must be at least 1")
        self.depth = depth
        self._board: Board | None = None
        self._initial: list[int] = []
        self._favorite = 0
        self._best_score = 0
        self._best_color: int | None = None
        self._base_color = 0

    def _move(self, state: list[int], turn: int, color: int) -> bool:
        board = self._board
        if state[board.start_p0] == color or state[board.start_p1] == color:
            return False
        _flood(board, state, _start_of(board, turn), color)
        return True

    def _score(self, state: Sequence[int], turn: int) -> tuple[int, int]:
        board = self._board
        mine = _region(board, state, _start_of(board, turn))
        theirs_start = _start_of(board, _other(turn))
        theirs = 0 if theirs_start in mine else len(_region(board, state, theirs_start))
        return len(mine), theirs

    def _sub_think(
        self, previous: list[int], level: int, turn: int, chosen: bool
    ) -> int:
        work = list(previous)
        last_me, last_other = self._score(
            self._initial if chosen else previous, turn
        )
        best_color: int | None = None
        best_score = -len(self._board) * 10

        def gain(state: Sequence[int]) -> int:
            me, other = self._score(state, turn)
            return (me - last_me) - (other - last_other)

        if level == self.depth - 1:
            for color in range(NUM_COLORS):
                if self._move(work, turn, color):
                    current = gain(work)
                    if current > best_score:
                        best_score, best_color = current, color
                    work = list(previous)
            if chosen:
                if turn != self._favorite:
                    best_score = -best_score
                if best_score > self._best_score:
                    self._best_score = best_score
                    self._best_color = self._base_color
            if best_color is None:
                raise RuntimeError("no colour is available to play")
            return best_color

        for color in range(NUM_COLORS):
            if level == 0:
                self._base_color = color
            if self._move(work, turn, color):
                reply = self._sub_think(work, level + 1, _other(turn), False)
                self._move(work, _other(turn), reply)
                current = gain(work)
                if current > best_score:
                    best_score, best_color = current, color
                work = list(previous)

        if best_color is None:
            raise RuntimeError("no colour is available to play")
        if chosen or level == 1:
            self._move(work, turn, best_color)
            self._sub_think(work, level + 1, _other(turn), True)
        return best_color

    def think(self, board: Board, state: Sequence[int], turn: int) -> int:
        """Return the colour the player ``turn`` should switch to."""
        self._board = board
        self._initial = list(state)
        self._favorite = turn
        self._best_score = -len(board) * 10
        self._best_color = None
        self._sub_think(list(state), 0, turn, self.depth == 1)
        if self._best_color is None:
            raise RuntimeError("search found no move")
        return self._best_color


@dataclass
class InvasionGame:
    """Two players flood their regions with colours to take over the board."""

    board: Board
    two_player: bool = False
    rng: random.Random = field(default_factory=random.Random)
    ai: InvasionAI = field(default_factory=InvasionAI)
    state: list[int] = field(default_factory=list)
    turn: int = 0
    game_over: bool = False
    history: list[BoardDelta] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.new_game()

    def switch_board(self, board: Board) -> None:
        """Play on a different board, starting a new game."""
        self.board = board
        self.new_game()

    def new_game(self) -> None:
        """Colour the board at random, in runs, with the two starts differing."""
        self.game_over = False
        self.turn = 0
        self.history.clear()
        last = 0
        state: list[int] = []
        for _ in range(len(self.board)):
            current = self.rng.randrange(NUM_COLORS + 1)
            if current >= NUM_COLORS:
                current = last
            last = current
            state.append(current)
        p0, p1 = self.board.start_p0, self.board.start_p1
        while state[p0] == state[p1]:
            state[p0] = self.rng.randrange(NUM_COLORS)
        self.state = state
        self._update()

    def _start(self, player: int) -> int:
        return _start_of(self.board, player)

    def region_size(self, player: int) -> int:
        """Number of points held by ``player`` (0 or 1)."""
        if player not in (0, 1):
            raise ValueError("player must be 0 or 1")
        start = self._start(player)
        if player == 1 and start in _region(self.board, self.state, self._start(0)):
            return 0
        return len(_region(self.board, self.state, start))

    def _update(self) -> None:
        self.game_over = self.region_size(0) + self.region_size(1) == len(self.board)

    def click(self, color: int) -> None:
        """Switch the current player's region to ``color``."""
        if not 0 <= color < NUM_COLORS:
            raise ValueError(f"colour must be between 0 and {NUM_COLORS - 1}")
        if self.game_over:
            raise IllegalMove(GAME_OVER)
        if color in (self.state[self._start(0)], self.state[self._start(1)]):
            raise IllegalMove(ALREADY_TAKEN)

        before = list(self.state)
        turn_from = self.turn
        _flood(self.board, self.state, self._start(self.turn), color)
        if self.two_player:
            self.turn = _other(self.turn)
        else:
            opponent = _other(self.turn)
            reply = self.ai.think(self.board, self.state, opponent)
            _flood(self.board, self.state, self._start(opponent), reply)
        self.history.append(
            BoardDelta.between(turn_from, before, self.turn, self.state)
        )
        self._update()

    def undo(self) -> bool:
        """Revert the last turn; False if there is none."""
        if not self.history:
            return False
        delta = self.history.pop()
        self.turn = delta.undo_effect(self.state)
        self._update()
        return True

    def end_message(self) -> str | None:
        """The final score text once the game is over, otherwise None."""
        if not self.game_over:
            return None
        name0 = COLOR_NAMES[self.state[self.board.start_p0]]
        name1 = COLOR_NAMES[self.state[self.board.start_p1]]
        zero, one = self.region_size(0), self.region_size(1)
        text = (
            f"Player 1 ({name0}) had {zero} nodes and\n"
            f"Player 2 ({name1}) had {one} nodes"
        )
        if zero == one:
            return text + "\n\nA Tie!"
        winner = name0 if zero > one else name1
        return text + f"\n\n{winner} Wins!"