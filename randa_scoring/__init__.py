"""RANDA 70:30 educator effectiveness scoring."""

__version__ = "1.0.0"
