"""Authoritative game-state server for a real-time multiplayer arena."""

__version__ = "0.1.0"
