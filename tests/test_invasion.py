import random

import pytest

from topogo.boards import create_standard, create_torus
from topogo.go import IllegalMove
from topogo.invasion import COLOR_NAMES, NUM_COLORS, InvasionAI, InvasionGame


def small_game(two_player=True):
    board = create_standard(2, 2)
    game = InvasionGame(board, two_player=two_player, rng=random.Random(1))
    # start_p0 is node 2, start_p1 is node 1
    game.state = [3, 1, 0, 3]
    game.game_over = False
    return game


def test_new_game_colours_valid_and_starts_differ():
    board = create_standard(6, 6)
    game = InvasionGame(board, rng=random.Random(5))
    assert len(game.state) == len(board)
    assert all(0 <= c < NUM_COLORS for c in game.state)
    assert game.state[board.start_p0] != game.state[board.start_p1]
    assert game.turn == 0
    assert game.history == []


def test_new_game_reproducible_with_seed():
    board = create_standard(5, 5)
    a = InvasionGame(board, rng=random.Random(42))
    b = InvasionGame(board, rng=random.Random(42))
    assert a.state == b.state


def test_click_taken_colour_raises():
    game = small_game()
    with pytest.raises(IllegalMove, match="Already taken"):
        game.click(1)


def test_click_invalid_colour_raises():
    game = small_game()
    with pytest.raises(ValueError):
        game.click(NUM_COLORS)


def test_two_player_click_fills_and_ends_game():
    game = small_game()
    game.click(3)
    assert game.state == [3, 1, 3, 3]
    assert game.turn == 1
    assert game.region_size(0) == 3
    assert game.region_size(1) == 1
    assert game.game_over
    message = game.end_message()
    assert message == (
        "Player 1 (Purple) had 3 nodes and\nPlayer 2 (Green) had 1 nodes"
        "\n\nPurple Wins!"
    )
    with pytest.raises(IllegalMove, match="Game Over"):
        game.click(4)


def test_undo_restores_state_and_turn():
    game = small_game()
    game.click(3)
    assert game.undo()
    assert game.state == [3, 1, 0, 3]
    assert game.turn == 0
    assert not game.game_over
    assert game.end_message() is None
    assert not game.undo()


def test_ai_picks_available_colour():
    board = create_torus(6, 6)
    game = InvasionGame(board, rng=random.Random(3))
    ai = InvasionAI()
    color = ai.think(board, game.state, 1)
    assert 0 <= color < NUM_COLORS
    assert color not in (game.state[board.start_p0], game.state[board.start_p1])
    assert ai.think(board, game.state, 1) == color


def test_ai_does_not_change_state():
    board = create_standard(5, 5)
    game = InvasionGame(board, rng=random.Random(9))
    before = list(game.state)
    InvasionAI().think(board, game.state, 0)
    assert game.state == before


def test_one_player_click_lets_ai_answer():
    board = create_standard(5, 5)
    game = InvasionGame(board, rng=random.Random(11))
    taken = {game.state[board.start_p0], game.state[board.start_p1]}
    choice = next(c for c in range(NUM_COLORS) if c not in taken)
    game.click(choice)
    assert game.turn == 0
    assert len(game.history) == 1
    assert game.state[board.start_p0] == choice
    assert game.state[board.start_p1] != choice
    assert game.region_size(0) + game.region_size(1) <= len(board)


def test_switch_board_resets():
    game = small_game()
    game.click(3)
    bigger = create_standard(4, 4)
    game.switch_board(bigger)
    assert len(game.state) == 16
    assert game.history == []
    assert game.turn == 0


def test_color_names_match_count():
    game = small_game()
    game.state = [0, 0, 0, 5]
    assert COLOR_NAMES[game.state[3]] == "Light Blue"
    assert game.region_size(1) == 0