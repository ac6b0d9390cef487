"""GameHorizon: a small inventory manager for a personal video-game collection."""

__version__ = "0.1.0"
