"""Shared utilities for the scaffold services."""
