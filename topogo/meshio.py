"""Index meshes and their export to OFF and IOFF text formats."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from topogo.boards import Board, Vec3

Color = tuple[float, float, float, float]
WHITE: Color = (1.0, 1.0, 1.0, 1.0)


@dataclass
class Mesh:
    """An indexed mesh of polygons with ``vpp`` vertices per polygon."""

    vertices: list[Vec3]
    indices: list[int]
    vpp: int = 2
    colors: list[Color] | None = None
    normals: list[Vec3] | None = field(default=None)

    def __post_init__(self) -> None:
        if self.vpp < 1:
            raise ValueError("vertices per polygon must be positive")
        if len(self.indices) % self.vpp:
            raise ValueError("index count is not a multiple of vertices per polygon")
        count = len(self.vertices)
        if any(not 0 <= i < count for i in self.indices):
            raise ValueError("index refers to a missing vertex")
        if self.colors is not None and len(self.colors) != count:
            raise ValueError("one colour per vertex is required")
        if self.normals is not None and len(self.normals) != count:
            raise ValueError("one normal per vertex is required")

    def polygon_count(self) -> int:
        return len(self.indices) // self.vpp

    def polygons(self):
        for start in range(0, len(self.indices), self.vpp):
            yield self.indices[start : start + self.vpp]


def board_wireframe(board: Board) -> Mesh:
    """A line mesh joining every pair of neighbouring nodes once."""
    pairs: list[tuple[int, int]] = []
    seen: set[tuple[int, int]] = set()
    for node in board:
        for n in node.neighbors:
            if (n, node.index) in seen:
                continue
            seen.add((node.index, n))
            pairs.append((node.index, n))
    return Mesh(
        vertices=[node.position for node in board],
        indices=[i for pair in pairs for i in pair],
        vpp=2,
        colors=[WHITE] * len(board),
    )


def _num(value: float) -> str:
    return f"{value:g}"


def export_off(mesh: Mesh, path: str | os.PathLike[str]) -> None:
    """Write the mesh in OFF format."""
    lines = [
        "OFF\n",
        f"{len(mesh.vertices)} {mesh.polygon_count()} "
        f"{mesh.polygon_count() * mesh.vpp}\n",
    ]
    lines += [f"{_num(v.x)} {_num(v.y)} {_num(v.z)}\n" for v in mesh.vertices]
    for polygon in mesh.polygons():
        lines.append(f"{mesh.vpp} " + "".join(f"{i} " for i in polygon) + "\n")
    Path(path).write_text("".join(lines))


def export_ioff(
    mesh: Mesh,
    model_name: str,
    path: str | os.PathLike[str],
    color: bool,
    normals: bool,
) -> None:
    """Write the mesh as an IOFF block, optionally with colours and normals."""
    layout = ("C4F_" if color else "") + ("N3F_" if normals else "") + "V3F "
    lines = [
        f"IOFF( {model_name}, {len(mesh.vertices)}, {mesh.polygon_count()}, "
        f"{mesh.vpp}, {layout})\n{{\n"
    ]
    colors = mesh.colors or [WHITE] * len(mesh.vertices)
    vertex_normals = mesh.normals or [Vec3()] * len(mesh.vertices)
    for vertex, rgba, normal in zip(mesh.vertices, colors, vertex_normals):
        parts = []
        if color:
            parts += [_num(c) for c in rgba]
        if normals:
            parts += [_num(normal.x), _num(normal.y), _num(normal.z)]
        parts += [_num(vertex.x), _num(vertex.y), _num(vertex.z)]
        lines.append("\t{ " + ", ".join(parts) + "},\n")
    lines.append("},\n{\n")
    for polygon in mesh.polygons():
        lines.append("\t" + "".join(f"{i}, " for i in polygon) + "\n")
    lines.append(f"}}\nIOFF_END({model_name})\n")
    Path(path).write_text("".join(lines))