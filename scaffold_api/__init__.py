"""Scaffold API - generates starter projects from a stack and feature selection."""

__version__ = "0.1.0"
