"""Testing utilities for DazzleGraphLib consumers."""

from .fixtures import RecordingPolicy

__all__ = ['RecordingPolicy']
