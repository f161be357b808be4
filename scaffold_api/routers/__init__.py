"""Routers package."""

from . import generate, health, projects

__all__ = ["generate", "health", "projects"]
