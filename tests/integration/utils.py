"""Utility types for integration tests."""

from typing import Callable

GitRunner = Callable[..., str]
"""Runs git in the test repository and returns its stripped stdout."""
