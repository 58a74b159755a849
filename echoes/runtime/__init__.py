"""Runtime — host execution environment (атомарные transitions, event log)."""

from .host import Host

__all__ = ["Host"]
