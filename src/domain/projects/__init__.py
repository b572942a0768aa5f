"""Collaborative projects and their uploaded tracks."""

from .store import ProjectStore

__all__ = ["ProjectStore"]
