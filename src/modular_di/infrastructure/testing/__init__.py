"""
Testing utilities module.

Provides helpers and utilities for testing applications using modular-di.
"""

from .utilities import IsolatedEngine, TestEngine, create_mock_engine

__all__ = [
    "TestEngine",
    "create_mock_engine",
    "IsolatedEngine",
]
