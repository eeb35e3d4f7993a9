"""Live poker session tracker - tournament structure engine."""

__version__ = "0.1.0"
