"""Pygame backend: window, per-frame driver and keyboard input."""

from __future__ import annotations

__all__ = []
