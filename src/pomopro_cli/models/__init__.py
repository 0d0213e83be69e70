"""PomoPro CLI domain models."""

from .task import Task

__all__ = ["Task"]
