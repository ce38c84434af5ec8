"""Morph registry lookup, package resolution, logging set-up and chat prompt models for Hayride."""

__version__ = "0.0.1"
__all__ = ["chat", "logger", "paths", "prompt", "resolver", "sidebar"]