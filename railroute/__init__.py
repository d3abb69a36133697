"""Shortest-path route planning over a railway network."""

__version__ = "0.1.0"
