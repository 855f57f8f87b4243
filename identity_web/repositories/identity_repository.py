"""
Abstract base class for identity repositories.
Defines the contract for identity storage operations.
"""
from abc import ABC, abstractmethod
from typing import Optional
from identity_web.models.identity import Identity


class IdentityRepository(ABC):
    """Abstract repository interface for identity operations."""
    
    @abstractmethod
    def save(self, identity: Identity) -> None:
        """Save a new identity. Raises DuplicateIdentityException if the username exists."""
        pass
    
    @abstractmethod
    def find_by_username(self, username: str) -> Optional[Identity]:
        """Find an identity by username."""
        pass
