import math

import pytest

from topogo.boards import (
    Board,
    BoardDelta,
    GoNode,
    NodeDelta,
    Vec3,
    board_from_name,
    create_cube,
    create_cylinder,
    create_diamond,
    create_honeycomb3,
    create_honeycomb5,
    create_honeycomb6,
    create_layered,
    create_mobius,
    create_sphere,
    create_standard,
    create_torus,
    is_board_name,
    load_board,
)

NAMES = [
    "diamond", "flat", "sphere", "mobius", "torus",
    "3", "5", "6", "layered", "cylinder", "box",
]


def _assert_consistent(board: Board) -> None:
    count = len(board)
    for i, node in enumerate(board):
        assert node.index == i
        for other in node.neighbors:
            assert 0 <= other < count
            assert i in board[other].neighbors
    assert 0 <= board.start_p0 < count
    assert 0 <= board.start_p1 < count


@pytest.mark.parametrize("name", NAMES)
def test_named_boards_are_symmetric_graphs(name):
    board = board_from_name(name)
    assert board.name == name
    _assert_consistent(board)


@pytest.mark.parametrize("name", NAMES)
def test_named_boards_are_recognised(name):
    assert is_board_name(name)


def test_vec3_cross_and_dot():
    x, y = Vec3(1, 0, 0), Vec3(0, 1, 0)
    assert x.cross(y) == Vec3(0, 0, 1)
    assert y.cross(x) == Vec3(0, 0, -1)
    assert x.dot(y) == 0


def test_vec3_length_and_normalized():
    v = Vec3(3, 4, 0)
    assert v.length() == 5
    assert v.normalized().length() == pytest.approx(1.0)
    assert Vec3().normalized() == Vec3()


def test_vec3_arithmetic():
    a = Vec3(1, 2, 3)
    assert a + a == a * 2
    assert a - a == Vec3()
    assert a * Vec3(2, 0, 1) == Vec3(2, 0, 3)
    assert -a == Vec3(-1, -2, -3)


def test_safe_add_neighbor_skips_duplicates():
    node = GoNode(0)
    node.safe_add_neighbor(3)
    node.safe_add_neighbor(3)
    assert node.neighbors == [3]
    node.add_neighbor(3)
    assert node.neighbors == [3, 3]


def test_set_all_normals():
    board = create_cube(2)
    board.set_all_normals(Vec3(0, 0, 1))
    assert all(node.normal == Vec3(0, 0, 1) for node in board)


def test_standard_board_layout():
    width, height = 4, 3
    board = create_standard(width, height)
    assert len(board) == width * height
    assert board[board.start_p0].position == Vec3(-1, 1, 0)
    assert board[board.start_p1].position == Vec3(1, -1, 0)
    assert board.node_scale == pytest.approx(1.0 / max(width, height))
    assert all(node.normal == Vec3(0, 0, 1) for node in board)
    _assert_consistent(board)


@pytest.mark.parametrize(
    "factory, limit",
    [(create_honeycomb3, 3), (create_honeycomb5, 5), (create_honeycomb6, 6), (create_standard, 4)],
)
def test_grid_degrees(factory, limit):
    board = factory(9, 10)
    assert max(len(node.neighbors) for node in board) == limit
    _assert_consistent(board)


def test_torus_degrees_and_ratio():
    board = create_torus(5, 4)
    assert all(len(node.neighbors) == 4 for node in board)
    _assert_consistent(board)
    scaled = create_torus(5, 4, 0.9)
    assert scaled.node_scale / board.node_scale == pytest.approx(0.9)


def test_sphere_poles():
    rings, slices = 3, 6
    board = create_sphere(rings, slices)
    assert len(board) == rings * slices + 2
    assert board.start_p0 == len(board) - 2
    assert board[board.start_p0].position == Vec3(0, -1, 0)
    assert board[board.start_p1].position == Vec3(0, 1, 0)
    assert len(board[board.start_p0].neighbors) == slices
    assert len(board[board.start_p1].neighbors) == slices
    _assert_consistent(board)


def test_cube_corners_and_centre():
    size = 3
    board = create_cube(size, 99)
    assert len(board) == size ** 3
    assert board[board.start_p0].position == Vec3(-0.75, -0.75, -0.75)
    assert board[board.start_p1].position == Vec3(0.75, 0.75, 0.75)
    centre = size * size + size + 1
    assert len(board[centre].neighbors) == 6
    _assert_consistent(board)


def test_layered_links_planes():
    width, height = 5, 6
    base = create_honeycomb3(width, height)
    board = create_layered(width, height)
    count = len(base)
    assert len(board) == 2 * count
    assert board.start_p1 == base.start_p1 + count
    for i in range(count):
        assert board[i].neighbors[-1] == i + count
        assert board[i + count].neighbors[-1] == i
        assert board[i].position.z == pytest.approx(0.35)
        assert board[i + count].position.z == pytest.approx(-0.35)
    _assert_consistent(board)


def test_mobius_normals_and_degrees():
    board = create_mobius(7, 4)
    assert all(len(node.neighbors) >= 3 for node in board)
    assert all(node.normal.length() > 0 for node in board)
    _assert_consistent(board)


def test_cylinder_shape():
    width, height = 6, 3
    board = create_cylinder(width, height)
    for node in board:
        assert node.normal.y == 0
        assert abs(node.position.y) == pytest.approx(0.8) or node.position.y == pytest.approx(0.0)
    assert all(len(board[x].neighbors) == 3 for x in range(width))
    _assert_consistent(board)


def test_diamond_fixed_shape():
    board = create_diamond()
    assert len(board) == 1 + 9 + 25 + 47 + 25 + 9 + 1 - 12 - 12 - 8
    assert board.node_scale == 0.15
    assert board[0].position == Vec3(0, 1.3, 0)
    assert all(node.normal == Vec3(0, 1, 0) for node in board)
    _assert_consistent(board)


def test_invalid_sizes_raise():
    with pytest.raises(ValueError):
        create_standard(1, 5)
    with pytest.raises(ValueError):
        create_mobius(5, 1)
    with pytest.raises(ValueError):
        create_cube(1)


def test_board_delta_undo_and_cancel():
    before = [2, 2, 2]
    after = [2, 0, 1]
    delta = BoardDelta.between(1, before, 0, after)
    assert delta.deltas == (NodeDelta(1, 2, 0), NodeDelta(2, 2, 1))
    state = list(after)
    assert delta.undo_effect(state) == 1
    assert state == before
    reverse = BoardDelta.between(0, after, 1, before)
    assert delta.cancels(reverse)
    assert reverse.cancels(delta)
    assert not delta.cancels(BoardDelta.between(0, after, 1, [2, 0, 2]))
    assert not delta.cancels(BoardDelta.between(0, before, 1, before))


def test_board_delta_size_mismatch():
    with pytest.raises(ValueError):
        BoardDelta.between(0, [1, 2], 1, [1])


def _write_board(tmp_path):
    path = tmp_path / "tri.txt"
    path.write_text("3 0.5\n2 1 2 0 0 0\n0 1 0 0\n1 0 0 1 0\n")
    return path


def test_load_board(tmp_path):
    path = _write_board(tmp_path)
    board = load_board(path)
    assert board.node_scale == 0.5
    assert board[0].neighbors == [1, 2]
    assert board[1].neighbors == [0]
    assert board[2].neighbors == [0]
    assert board[1].position == Vec3(1, 0, 0)
    assert board.name == str(path)
    assert (board.start_p0, board.start_p1) == (0, 0)
    _assert_consistent(board)


def test_board_from_name_reads_files(tmp_path):
    path = _write_board(tmp_path)
    assert is_board_name(str(path))
    board = board_from_name(str(path))
    assert board == load_board(path)


def test_missing_board_file(tmp_path):
    missing = tmp_path / "missing.txt"
    assert not is_board_name(str(missing))
    with pytest.raises(FileNotFoundError):
        board_from_name(str(missing))


def test_malformed_board_files(tmp_path):
    short = tmp_path / "short.txt"
    short.write_text("2 1.0\n1 1 0 0\n")
    with pytest.raises(ValueError):
        load_board(short)
    bad = tmp_path / "bad.txt"
    bad.write_text("1 1.0\n1 5 0 0 0\n")
    with pytest.raises(ValueError):
        load_board(bad)