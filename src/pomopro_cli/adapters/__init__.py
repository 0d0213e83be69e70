"""Adapters module - Store implementations for different backends."""

from .json_store import JsonFileStore

__all__ = ["JsonFileStore"]
