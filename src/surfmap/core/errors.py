"""
Error types shared by the map engine.

Core functions are pure, so they never retry or mask bad input: anything that
would produce a misleading pixel position or distance is raised immediately.
"""

from __future__ import annotations


class ValidationError(ValueError):
    """Input coordinates, sizes or thresholds are outside their valid range."""


class NotFoundError(LookupError):
    """A referenced listing id does not exist in the catalog."""
