"""In-process repository implementations."""

from brokerage_assistant.repositories.memory.cache_repo import InMemoryCacheRepository

__all__ = ["InMemoryCacheRepository"]
