"""
Infrastructure layer - Tooling around the engine.

This layer contains helpers for testing applications built on the engine.
It depends on both Application and Domain layers.
"""

from . import testing

__all__ = [
    "testing",
]
