"""Go boards of arbitrary topology: nodes, neighbour graphs and board deltas."""

from __future__ import annotations

import math
import os
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, MutableSequence, Sequence


@dataclass(frozen=True)
class Vec3:
    """An immutable three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, other: float | Vec3) -> Vec3:
        """Scale by a number, or component-wise by another vector."""
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other: float) -> Vec3:
        return self * other

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> Vec3:
        """Return a unit vector in the same direction; a zero vector stays zero."""
        size = self.length()
        if size == 0:
            return self
        return Vec3(self.x / size, self.y / size, self.z / size)


@dataclass
class GoNode:
    """A playable point on a board together with its neighbour indices."""

    index: int
    neighbors: list[int] = field(default_factory=list)
    position: Vec3 = field(default_factory=Vec3)
    normal: Vec3 = field(default_factory=Vec3)

    def add_neighbor(self, index: int) -> None:
        self.neighbors.append(index)

    def safe_add_neighbor(self, index: int) -> None:
        """Add a neighbour unless it is already present."""
        if index not in self.neighbors:
            self.neighbors.append(index)


@dataclass
class Board:
    """A graph of nodes forming a board, with the two players' start nodes."""

    nodes: list[GoNode] = field(default_factory=list)
    node_scale: float = 1.0
    start_p0: int = 0
    start_p1: int = 0
    name: str | None = None

    @classmethod
    def _blank(cls, count: int) -> Board:
        return cls(nodes=[GoNode(i) for i in range(count)])

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> GoNode:
        return self.nodes[index]

    def __iter__(self) -> Iterator[GoNode]:
        return iter(self.nodes)

    def set_all_normals(self, normal: Vec3) -> None:
        for node in self.nodes:
            node.normal = normal


@dataclass(frozen=True)
class NodeDelta:
    """The change of one node's state between two board states."""

    index: int
    before: int
    after: int


@dataclass(frozen=True)
class BoardDelta:
    """All node changes made by one turn, with the turns before and after it."""

    turn_from: int
    turn_to: int
    deltas: tuple[NodeDelta, ...] = ()

    @classmethod
    def between(
        cls,
        turn_from: int,
        before: Sequence[int],
        turn_to: int,
        after: Sequence[int],
    ) -> BoardDelta:
        if len(before) != len(after):
            raise ValueError("board states differ in size")
        changes = tuple(
            NodeDelta(index, old, new)
            for index, (old, new) in enumerate(zip(before, after))
            if old != new
        )
        return cls(turn_from, turn_to, changes)

    def undo_effect(self, state: MutableSequence[int]) -> int:
        """Restore the changed nodes in ``state`` and return the turn before."""
        for delta in self.deltas:
            state[delta.index] = delta.before
        return self.turn_from

    def cancels(self, other: BoardDelta) -> bool:
        """True when ``other`` exactly reverses this delta."""
        if len(self.deltas) != len(other.deltas):
            return False
        for delta in self.deltas:
            match = next((o for o in other.deltas if o.index == delta.index), None)
            if match is None:
                return False
            if delta.before != match.after or delta.after != match.before:
                return False
        return True


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ValueError(message)


def create_sphere(rings: int, slices: int) -> Board:
    """A sphere of rings and slices with a pole node at each end."""
    _require(rings >= 1 and slices >= 2, "sphere needs at least 1 ring and 2 slices")
    board = Board._blank(rings * slices + 2)
    board.node_scale = 1.95 / (slices - 1)
    south, north = len(board) - 2, len(board) - 1
    board.start_p0 = south
    board.start_p1 = north

    for r in range(rings):
        z = (r + 1) / (rings + 1)
        z = z * 2.0 - 1.0
        scale = math.sqrt(1.0 - z * z)
        if z >= 0:
            z += (math.sqrt(z) - z) / 4.0
        else:
            z -= (math.sqrt(-z) + z) / 4.0

        for s in range(slices):
            node = board[s + r * slices]
            node.add_neighbor(r * slices + (s + 1) % slices)
            node.add_neighbor(r * slices + (s + slices - 1) % slices)
            if r != 0:
                node.add_neighbor((r - 1) * slices + s)
            if r < rings - 1:
                node.add_neighbor((r + 1) * slices + s)

            d = s / slices * 2 * math.pi
            node.position = Vec3(math.cos(d) * scale, z, math.sin(d) * scale)
            node.normal = node.position

    pole = board[south]
    pole.position = Vec3(0, -1, 0)
    pole.normal = pole.position
    for i in range(slices):
        pole.add_neighbor(i)
        board[i].add_neighbor(south)

    pole = board[north]
    pole.position = Vec3(0, 1, 0)
    pole.normal = pole.position
    for i in range(slices):
        v = (rings - 1) * slices + i
        pole.add_neighbor(v)
        board[v].add_neighbor(north)
    return board


def create_torus(width: int, height: int, special_ratio: float = 1.0) -> Board:
    """A grid wrapped in both directions onto a torus."""
    _require(width >= 1 and height >= 1, "torus needs a positive size")
    board = Board._blank(width * height)
    board.node_scale = (special_ratio * 1.65) / height
    board.start_p0 = 0
    board.start_p1 = width // 2 + (height // 2) * width

    for y in range(height):
        for x in range(width):
            ang = math.pi * 2 * (x / width)
            pitch = math.pi * 2.0 * (y / height)
            ring = Vec3(math.cos(ang), math.sin(ang), 0.0)
            offset = Vec3(
                ring.x * math.sin(pitch), ring.y * math.sin(pitch), math.cos(pitch)
            ) * 0.5

            node = board[x + y * width]
            node.add_neighbor((x + width - 1) % width + y * width)
            node.add_neighbor((x + 1) % width + y * width)
            node.add_neighbor(x + ((y + height - 1) % height) * width)
            node.add_neighbor(x + ((y + 1) % height) * width)

            node.position = ring + offset
            node.normal = offset
    return board


def create_mobius(width: int, height: int) -> Board:
    """A strip whose ends join with a half twist."""
    _require(width >= 1 and height >= 2, "mobius strip needs width >= 1 and height >= 2")
    board = Board._blank(width * height)
    board.node_scale = 0.75 / height
    board.start_p1 = (height - 1) * width
    board.start_p0 = (height - 1) * width + width // 2

    for y in range(height):
        along = y / (height - 1) * 2 - 1
        for x in range(width):
            ang = math.pi * 2 * (x / width)
            pitch = math.pi * (x / width)
            ring = Vec3(math.cos(ang), math.sin(ang), 0.0)
            offset = Vec3(
                ring.x * math.sin(pitch), ring.y * math.sin(pitch), math.cos(pitch)
            ) * 0.5

            node = board[x + y * width]
            mirrored = (height - y - 1) * width
            if x > 0:
                node.add_neighbor(x - 1 + y * width)
            else:
                node.add_neighbor(width - 1 + mirrored)
            if x < width - 1:
                node.add_neighbor(x + 1 + y * width)
            else:
                node.add_neighbor(mirrored)
            if y != 0:
                node.add_neighbor(x + (y - 1) * width)
            if y < height - 1:
                node.add_neighbor(x + (y + 1) * width)

            node.position = ring + offset * along

    for node in board:
        centre = node.position
        a, b, c = (board[n].position for n in node.neighbors[:3])
        c = c - centre
        a = (a - centre).cross(c)
        b = (b - centre).cross(c)
        if a.dot(b) < 0:
            a = -a
        node.normal = a + b
    return board


def create_cylinder(width: int, height: int) -> Board:
    """A grid wrapped around its width into an open cylinder."""
    _require(width >= 1 and height >= 2, "cylinder needs width >= 1 and height >= 2")
    board = Board._blank(width * height)
    board.node_scale = 1.0 / height
    board.start_p0 = 0
    board.start_p1 = (height - 1) * width + width // 2
    offset = Vec3(0, 0.8, 0)

    for y in range(height):
        along = y / (height - 1) * 2 - 1
        for x in range(width):
            ang = math.pi * 2 * (x / width)
            ring = Vec3(math.cos(ang) * 0.8, 0.0, math.sin(ang) * 0.8)

            node = board[x + y * width]
            node.add_neighbor((x + width - 1) % width + y * width)
            node.add_neighbor((x + 1) % width + y * width)
            if y != 0:
                node.add_neighbor(x + (y - 1) * width)
            if y < height - 1:
                node.add_neighbor(x + (y + 1) * width)

            node.position = ring + offset * along
            node.normal = ring
    return board


def _flat_board(width: int, height: int) -> Board:
    _require(width >= 2 and height >= 2, "flat boards need width and height >= 2")
    board = Board._blank(width * height)
    board.node_scale = 1.0 / (width if width > height else height)
    board.start_p0 = (height - 1) * width
    board.start_p1 = width - 1
    return board


def _flat_position(x: int, y: int, width: int, height: int) -> Vec3:
    return Vec3(2.0 * (x / (width - 1)) - 1.0, 2.0 * (y / (height - 1)) - 1.0, 0.0)


def _grid(
    width: int,
    height: int,
    horizontal: Callable[[int], bool],
    down_left: Callable[[int], bool],
    down_right: Callable[[int], bool],
    shifted: Callable[[int], bool],
) -> Board:
    board = _flat_board(width, height)

    def link(node: GoNode, other: int) -> None:
        node.add_neighbor(other)
        board[other].add_neighbor(node.index)

    for y in range(height):
        for x in range(width):
            node = board[x + y * width]
            if horizontal(y):
                if x != 0:
                    node.add_neighbor(x - 1 + y * width)
                if x < width - 1:
                    node.add_neighbor(x + 1 + y * width)
            if y != 0:
                node.add_neighbor(x + (y - 1) * width)
            if y < height - 1:
                node.add_neighbor(x + (y + 1) * width)

            if down_left(y) and y < height - 1 and x > 0:
                link(node, x - 1 + (y + 1) * width)
            if down_right(y) and y < height - 1 and x < width - 1:
                link(node, x + 1 + (y + 1) * width)

            position = _flat_position(x, y, width, height)
            if shifted(y):
                position = position + Vec3(1.0 / (width - 1), 0.0, 0.0)
            node.position = position
    board.set_all_normals(Vec3(0, 0, 1))
    return board


def create_honeycomb6(width: int, height: int) -> Board:
    """A flat board in which interior nodes have six neighbours."""
    return _grid(
        width,
        height,
        horizontal=lambda y: True,
        down_left=lambda y: y % 2 == 0,
        down_right=lambda y: y % 2 == 1,
        shifted=lambda y: y % 2 == 1,
    )


def create_honeycomb5(width: int, height: int) -> Board:
    """A flat board in which interior nodes have at most five neighbours."""
    return _grid(
        width,
        height,
        horizontal=lambda y: True,
        down_left=lambda y: (y - 1) % 4 == 0,
        down_right=lambda y: (y - 3) % 4 == 0,
        shifted=lambda y: y % 4 >= 2,
    )


def create_honeycomb3(width: int, height: int) -> Board:
    """A flat board in which every node has at most three neighbours."""
    return _grid(
        width,
        height,
        horizontal=lambda y: y == 0 or y == height - 1,
        down_left=lambda y: (y - 1) % 4 == 0,
        down_right=lambda y: (y - 3) % 4 == 0,
        shifted=lambda y: y % 4 >= 2,
    )


def create_standard(width: int, height: int) -> Board:
    """The ordinary rectangular Go grid."""
    return _grid(
        width,
        height,
        horizontal=lambda y: True,
        down_left=lambda y: False,
        down_right=lambda y: False,
        shifted=lambda y: False,
    )


def create_layered(width: int, height: int) -> Board:
    """Two stacked three-neighbour boards joined node to node."""
    worker = create_honeycomb3(width, height)
    count = len(worker)
    board = Board._blank(count * 2)
    board.node_scale = worker.node_scale
    board.start_p0 = worker.start_p0
    board.start_p1 = worker.start_p1 + count

    for source in worker:
        top = board[source.index]
        top.neighbors = [*source.neighbors, source.index + count]
        top.position = source.position + Vec3(0, 0, 0.35)
    for source in worker:
        bottom = board[source.index + count]
        bottom.neighbors = [n + count for n in source.neighbors] + [source.index]
        bottom.position = source.position + Vec3(0, 0, -0.35)
    board.set_all_normals(Vec3(0, 0, 1))
    return board


def create_cube(width: int, height: int = 0) -> Board:
    """A solid cubic lattice of ``width`` nodes per side; ``height`` is unused."""
    size = width
    _require(size >= 2, "cube needs at least 2 nodes per side")
    scale = 0.75
    board = Board._blank(size * size * size)
    board.node_scale = scale / size
    board.start_p0 = 0
    board.start_p1 = (size - 1) * size * size + (size - 1) * size + (size - 1)

    layer = size * size
    for z in range(size):
        for y in range(size):
            for x in range(size):
                index = z * layer + y * size + x
                node = board[index]
                if x != 0:
                    node.add_neighbor(index - 1)
                if x < size - 1:
                    node.add_neighbor(index + 1)
                if y != 0:
                    node.add_neighbor(index - size)
                if y < size - 1:
                    node.add_neighbor(index + size)
                if z != 0:
                    node.add_neighbor(index - layer)
                if z < size - 1:
                    node.add_neighbor(index + layer)

                node.position = Vec3(
                    2.0 * (x / (size - 1)) - 1.0,
                    2.0 * (y / (size - 1)) - 1.0,
                    2.0 * (z / (size - 1)) - 1.0,
                ) * scale
    board.set_all_normals(Vec3(0, 1, 0))
    return board


_DIAMOND_NODES = 1 + 9 + 25 + 47 + 25 + 9 + 1 - 12 - 12 - 8
_UNPLACED_Z = -100.0


def _diamond_layer(index: int) -> tuple[int, int, int]:
    """Map a diamond node index to its layer side length and x, y in that layer."""
    below = True
    layer = 1
    area = 1
    while index >= area:
        index -= area
        layer += 2 if below else -2
        _require(layer > 0, "index lies outside the diamond")
        if layer == 7:
            below = False
        area = layer * layer
    return layer, index % layer, index // layer


def _find_below(board: Board, target: Vec3) -> GoNode | None:
    return next(
        (
            node
            for node in board
            if node.position.x == target.x
            and node.position.y == target.y
            and node.position.z <= target.z
        ),
        None,
    )


def create_diamond(width: int = 4, height: int = 4) -> Board:
    """A stacked diamond lattice of fixed shape; ``width`` and ``height`` are unused."""
    board = Board._blank(_DIAMOND_NODES)
    board.start_p0 = 0
    board.start_p1 = 1

    for node in board:
        side, x, y = _diamond_layer(node.index)
        half = side >> 1
        node.position = Vec3(float(x - half), float(y - half), _UNPLACED_Z)

    first = board[0]
    first.position = Vec3(first.position.x, first.position.y, 1.0)
    queue: deque[tuple[GoNode, int]] = deque([(first, 1)])
    while queue:
        node, dx = queue.popleft()
        delta = Vec3(float(dx), float((dx + 1) % 2), -0.15)
        for step in (delta, Vec3(-delta.x, -delta.y, delta.z)):
            other = _find_below(board, node.position + step)
            if other is None:
                continue
            node.add_neighbor(other.index)
            other.add_neighbor(node.index)
            if other.position.z < -50:
                queue.append((other, (dx + 1) % 2))
                other.position = Vec3(
                    other.position.x, other.position.y, node.position.z + step.z
                )

    board.node_scale = 0.15
    scale = Vec3(0.3, 0.3, 1.3)
    for node in board:
        work = node.position * scale
        node.position = Vec3(work.x, work.z, work.y)
    board.set_all_normals(Vec3(0, 1, 0))
    return board


def load_board(path: str | os.PathLike[str]) -> Board:
    """Read a board from a whitespace-separated text file.

    The file holds the node count and node scale, then for each node its
    neighbour count, the neighbour indices and its x, y, z position.
    Neighbour links are made symmetric.
    """
    text = Path(path).read_text()
    tokens = iter(text.split())

    def take(kind: Callable[[str], int | float], what: str):
        try:
            token = next(tokens)
        except StopIteration:
            raise ValueError(f"board file ends early, expected {what}") from None
        try:
            return kind(token)
        except ValueError:
            raise ValueError(f"bad {what} in board file: {token!r}") from None

    count = take(int, "node count")
    _require(count >= 0, "negative node count in board file")
    board = Board._blank(count)
    board.node_scale = take(float, "node scale")
    for node in board:
        links = take(int, "neighbour count")
        for _ in range(links):
            other = take(int, "neighbour index")
            _require(0 <= other < count, f"neighbour index {other} out of range")
            node.safe_add_neighbor(other)
            board[other].safe_add_neighbor(node.index)
        node.position = Vec3(
            take(float, "x"), take(float, "y"), take(float, "z")
        )
    board.name = str(path)
    board.set_all_normals(Vec3(0, 0, 1))
    return board


_NAMED_BOARDS: dict[str, tuple[Callable[[int, int], Board], int, int]] = {
    "diamond": (create_diamond, 4, 4),
    "flat": (create_standard, 9, 9),
    "sphere": (create_sphere, 7, 15),
    "mobius": (create_mobius, 13, 6),
    "torus": (create_torus, 13, 13),
    "3": (create_honeycomb3, 9, 10),
    "5": (create_honeycomb5, 9, 10),
    "6": (create_honeycomb6, 9, 10),
    "layered": (create_layered, 9, 10),
    "cylinder": (create_cylinder, 13, 9),
    "box": (create_cube, 5, 5),
}


def is_board_name(name: str) -> bool:
    """True if ``name`` is a built-in board or an existing board file."""
    return name in _NAMED_BOARDS or Path(name).is_file()


def board_from_name(name: str) -> Board:
    """Build a built-in board by name, or load it from the file of that name."""
    entry = _NAMED_BOARDS.get(name)
    if entry is None:
        return load_board(name)
    factory, width, height = entry
    board = factory(width, height)
    board.name = name
    return board