"""Cache adapters - Verification code stores."""

from .memory import InMemoryCodeCache

__all__ = ["InMemoryCodeCache"]
