"""Pytest fixtures for testing"""

import pytest
from typing import AsyncIterator, List, Optional
from fastapi.testclient import TestClient
from sky_financial.api.main import create_app
from sky_financial.api.dependencies import get_chat_client
from sky_financial.domain.chat import ChatSession
from sky_financial.domain.exceptions import ChatServiceError
from sky_financial.domain.models import CalculationInput


class FakeChatClient:
    """Replays fixed reply chunks, or raises the given error before replying"""

    def __init__(self, chunks: List[str], error: Optional[Exception] = None):
        self.chunks = chunks
        self.error = error
        self.messages: List[str] = []

    async def stream_reply(self, session: ChatSession, message: str) -> AsyncIterator[str]:
        self.messages.append(message)
        if self.error is not None:
            raise self.error
        for chunk in self.chunks:
            yield chunk
        session.record_exchange(message, "".join(self.chunks))


@pytest.fixture
def chat_client() -> FakeChatClient:
    """Chat client answering with a short canned reply"""
    return FakeChatClient(["A **SIP** ", "is a monthly ", "investment."])


@pytest.fixture
def failing_chat_client() -> FakeChatClient:
    """Chat client whose upstream call always fails"""
    return FakeChatClient([], error=ChatServiceError("Language model API error: 503"))


@pytest.fixture
def client(chat_client: FakeChatClient) -> TestClient:
    """Create FastAPI test client with the language model stubbed out"""
    app = create_app()
    app.dependency_overrides[get_chat_client] = lambda: chat_client
    return TestClient(app)


@pytest.fixture
def sip_input() -> CalculationInput:
    """Default SIP: 5,000 a month at 12% for 10 years"""
    return CalculationInput(amount=5000, rate=12, duration=10)
