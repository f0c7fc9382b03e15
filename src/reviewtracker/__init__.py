"""Peer-review tracker: rebuilds revision and reviewer timelines from review events."""

__version__ = "0.1.0"
