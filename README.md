# topogo

This package has Go and a colour-flood strategy game called Invasion. Both are
played on boards that need not be flat grids. A board is a graph of nodes, and
each node has a 3D position. The same rules therefore work on a sphere, a torus,
a Mobius strip, a cylinder, a cube, a diamond, on honeycomb layouts with 3, 5 or
6 neighbours per node, on two stacked layers, or on a board loaded from a text
file.

## Installing

    pip install .

To run the tests:

    pip install ".[test]"
    pytest

## Playing from the terminal

    topogo                  # Go, starting on the Mobius strip
    topogo go --board torus # Go on another built-in board, or a board file
    topogo invasion         # Invasion against the computer
    topogo invasion --two-player

The command prints a help text and then reads one command per line from
standard input. An empty line is skipped. `quit` or `exit` ends the session.

Go commands:

- `play N` places the current player's stone on node N.
- `remove N` takes a dead stone off node N. The stone counts as a capture for the other colour.
- `n` starts a new game.
- `p` passes.
- `u` undoes the last move, pass or removal.
- `q` prints the territory, capture and winner count.
- These keys switch the board:
  - `f` or `4`: flat
  - `d`: diamond
  - `s`: sphere
  - `m`: Mobius strip
  - `t`: torus
  - `3`, `5`, `6`: honeycombs
  - `l`: layered
  - `c`: cylinder
  - `b`: box

After each command the session prints the capture scores, the player to move
first. If a move is illegal it prints the reason instead, for example "Spot
already taken", "Going there would be suicide" or "KO Violation".

Invasion commands:

- A colour name (`red`, `green`, `dark blue`, `purple`, `yellow`, `light blue`) or `color N`, with N from 0 to 5, switches the current player's region to that colour.
- `]` lets the computer choose the current player's colour.
- `2` turns two-player mode on or off.
- `n` starts a new game.
- `u` undoes the last turn.
- `a` or `h` prints the help.
- The same board keys as in Go switch the board, except `d`.

## Using the library

```python
from topogo.boards import board_from_name
from topogo.go import GoGame

game = GoGame(board_from_name("torus"))
game.play(0)
game.pass_turn()
print(game.result_text())
```

### `topogo.boards`

- The `create_*` functions build the built-in boards: `create_standard`, `create_sphere`, `create_torus`, `create_mobius`, `create_cylinder`, `create_honeycomb3`, `create_honeycomb5`, `create_honeycomb6`, `create_layered`, `create_cube` and `create_diamond`.
- `board_from_name` builds a built-in board by name. If the name is not a built-in board, it loads the file with that name.
- `load_board` reads a board file. The file holds the node count and the node scale. Then, for each node, it holds the neighbour count, the neighbour indices and the node's x, y, z position. Neighbour links are made symmetric.
- `BoardDelta` records the changes made by one turn, can undo them, and detects a turn that exactly reverses another.

### `topogo.go`

- `GoRules.make_move` places a stone and removes captured groups. It raises `IllegalMove` for an occupied point or for suicide, and then leaves the state unchanged.
- `GoRules.land_stats` counts empty regions that border only one colour.
- `GoGame` adds turns, capture scores, removal of dead stones, passing, undo, the ko rule, and the final count through `end_game` and `result_text`.

### `topogo.invasion`

- `InvasionGame` plays the flood game. It fills the board with random runs of six colours, and the two players start from different colours.
- Each turn a player recolours the region they hold. The game is over when the two regions together cover the board.
- Unless `two_player` is set, `InvasionAI` answers every move. Its search depth is four by default.

### `topogo.meshio`

`board_wireframe` turns a board's connections into a line `Mesh`. `export_off`
and `export_ioff` write a mesh as an OFF file or as an IOFF block:

```python
from topogo.boards import create_sphere
from topogo.meshio import board_wireframe, export_off

export_off(board_wireframe(create_sphere(7, 15)), "sphere.off")
```

## What it does not do

- There is no graphical or 3D view of the boards. Play happens through the text session, and board geometry is only available as positions and exported meshes.
- There is no network play between two machines.