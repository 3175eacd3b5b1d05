"""
In-memory Session Repository

Process-local implementation of SessionRepository. Contents are lost on restart.
"""

import logging
from typing import Dict, Optional

from src.domain.entities.session_entity import Session
from src.domain.repositories.session_repository import SessionRepository


class InMemorySessionRepository(SessionRepository):
    """Dictionary-backed session repository"""

    def __init__(self):
        self._sessions: Dict[int, Session] = {}
        self._logger = logging.getLogger(self.__class__.__name__)

    async def get(self, user_id: int) -> Optional[Session]:
        return self._sessions.get(user_id)

    async def upsert(self, user_id: int, session: Session) -> None:
        if session.user_id != user_id:
            raise ValueError(f"Session belongs to user {session.user_id}, not {user_id}")
        self._sessions[user_id] = session
        self._logger.debug("💾 SESSION SAVED: user %s, state %s", user_id, session.state.value)

    def __len__(self) -> int:
        return len(self._sessions)
