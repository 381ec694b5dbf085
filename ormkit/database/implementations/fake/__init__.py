"""Fake driver used by tests."""

from .fake_connection import FakeConnection, RecordedStatement

__all__ = ["FakeConnection", "RecordedStatement"]
