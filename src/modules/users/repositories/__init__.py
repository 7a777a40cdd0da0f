"""User repositories package."""

from modules.users.repositories.interfaces import IUserRepository
from modules.users.repositories.memory_repository import InMemoryUserRepository

__all__ = ["IUserRepository", "InMemoryUserRepository"]
