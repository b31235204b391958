"""Core scoring package for the Rook scorekeeper."""

__all__ = [
    "teams",
    "normalize",
    "hand",
    "scoring",
    "dealer",
    "state",
    "persistence",
    "config",
    "log",
    "service",
    "cli",
]
