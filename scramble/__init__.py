"""Multi-round word scramble game server."""

__version__ = "0.1.0"
