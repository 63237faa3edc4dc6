"""In-memory store of open chat sessions"""

from collections import OrderedDict
from typing import List

from sky_financial.config import settings
from sky_financial.domain.chat import ChatSession
from sky_financial.domain.exceptions import ChatSessionNotFoundError


class ChatSessionRepository:
    """Repository for chat sessions; least recently used sessions are evicted past max_sessions"""

    def __init__(self, max_sessions: int | None = None):
        self.max_sessions = settings.chat_max_sessions if max_sessions is None else max_sessions
        self._sessions: "OrderedDict[str, ChatSession]" = OrderedDict()

    def create_session(self) -> ChatSession:
        """Open a new session with the advisor instructions"""
        session = ChatSession()
        self._sessions[session.session_id] = session

        while len(self._sessions) > self.max_sessions:
            self._sessions.popitem(last=False)

        return session

    def get_session(self, session_id: str) -> ChatSession:
        """Fetch a session and mark it recently used"""
        try:
            session = self._sessions[session_id]
        except KeyError as e:
            raise ChatSessionNotFoundError(f"Chat session {session_id} not found") from e

        self._sessions.move_to_end(session_id)
        return session

    def delete_session(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise ChatSessionNotFoundError(f"Chat session {session_id} not found")

    def list_session_ids(self) -> List[str]:
        return list(self._sessions)
