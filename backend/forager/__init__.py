"""Ant foraging simulation: pathfinding and behavior core plus a small server."""

__version__ = "0.1.0"
