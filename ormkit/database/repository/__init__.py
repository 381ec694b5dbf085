"""Repositories over the Model contract."""

from .base import Repository

__all__ = ["Repository"]
