"""Database model exports."""

from .run import Run

__all__ = ["Run"]
