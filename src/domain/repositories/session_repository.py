"""
Session repository interface

Defines the contract for conversation session storage.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities.session_entity import Session


class SessionRepository(ABC):
    """Repository interface for session operations"""

    @abstractmethod
    async def get(self, user_id: int) -> Optional[Session]:
        """Get the session of a user, None for a never-seen user"""

    @abstractmethod
    async def upsert(self, user_id: int, session: Session) -> None:
        """Create or replace the session of a user"""
