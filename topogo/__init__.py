"""Go and Invasion on boards of arbitrary topology, with a text session and mesh export."""

__version__ = "0.1.0"