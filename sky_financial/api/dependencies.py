"""Dependency injection for FastAPI endpoints"""

from fastapi import Request

from sky_financial.infrastructure.clients.llm import LLMChatClient
from sky_financial.infrastructure.sessions import ChatSessionRepository


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_chat_client() -> LLMChatClient:
    """Provide language model client instance"""
    return LLMChatClient()


def get_session_repository(request: Request) -> ChatSessionRepository:
    """Provide the application's chat session store"""
    return request.app.state.chat_sessions
