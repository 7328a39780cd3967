"""Lightweight runtime function-usage tracking."""

from .runtime import reset, save_counts, snapshot, t

__all__ = ["t", "snapshot", "reset", "save_counts"]
