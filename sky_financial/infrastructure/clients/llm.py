"""Language model HTTP client streaming chat replies over server-sent events"""

import asyncio
import json
import logging
import time
from typing import Any, AsyncIterator, Dict, List

import httpx

from sky_financial.config import settings
from sky_financial.domain.chat import ChatSession
from sky_financial.domain.exceptions import ChatServiceError
from sky_financial.infrastructure.observability.metrics import llm_failure_counter, llm_latency_histogram


class LLMChatClient:
    """Client for the hosted language model's streaming generate endpoint"""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key or settings.llm_api_key
        self.base_url = base_url or settings.llm_api_base
        self.model = model or settings.llm_model
        self.timeout = timeout or settings.http_timeout_seconds
        self.max_retries = settings.llm_max_retries
        self.backoff_base = settings.llm_backoff_base
        self.transport = transport

    @property
    def stream_url(self) -> str:
        return f"{self.base_url}/models/{self.model}:streamGenerateContent"

    def build_payload(self, session: ChatSession, message: str) -> Dict[str, Any]:
        """Prior turns of the session followed by the new user message"""
        contents = [
            {"role": turn.role.value, "parts": [{"text": turn.text}]}
            for turn in session.history
        ]
        contents.append({"role": "user", "parts": [{"text": message}]})

        return {
            "systemInstruction": {"parts": [{"text": session.system_instruction}]},
            "contents": contents,
        }

    async def stream_reply(self, session: ChatSession, message: str) -> AsyncIterator[str]:
        """
        Stream the assistant's reply to message as text increments.

        The exchange is recorded on the session only once the stream completes,
        so a failed or cancelled reply leaves the history untouched.

        Retry strategy:
        - Exponential backoff: base, 2x base, 4x base ...
        - Retries on 5xx errors and network failures, up to max_retries attempts
        - Never retries once text has been handed to the caller

        Raises:
            ChatServiceError: Missing API key, timeout, HTTP errors, invalid events,
                or a reply that finished without any text
        """
        if not self.api_key:
            llm_failure_counter.inc()
            logging.error("Language model API key is missing from configuration")
            raise ChatServiceError("Language model API key is not configured")

        payload = self.build_payload(session, message)
        chunks: List[str] = []
        attempt = 0
        start_time = time.time()

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            while True:
                try:
                    async for text in self._stream_once(client, payload):
                        chunks.append(text)
                        yield text
                    break

                except (httpx.HTTPStatusError, httpx.RequestError) as e:
                    attempt += 1
                    llm_failure_counter.inc()

                    retryable = not (
                        isinstance(e, httpx.HTTPStatusError) and e.response.status_code < 500
                    )
                    if chunks or not retryable or attempt >= self.max_retries:
                        raise ChatServiceError(self._describe(e)) from e

                    backoff = self.backoff_base * (2 ** (attempt - 1))
                    await asyncio.sleep(backoff)

                except (KeyError, IndexError, ValueError, TypeError) as e:
                    llm_failure_counter.inc()
                    raise ChatServiceError(f"Invalid event from language model: {e}") from e

        llm_latency_histogram.observe(time.time() - start_time)

        # A blocked reply finishes with no text parts; history never holds an empty model turn
        if not chunks:
            llm_failure_counter.inc()
            raise ChatServiceError("Language model returned an empty reply")

        session.record_exchange(message, "".join(chunks))

    async def _stream_once(self, client: httpx.AsyncClient, payload: Dict[str, Any]) -> AsyncIterator[str]:
        async with client.stream(
            "POST",
            self.stream_url,
            params={"alt": "sse"},
            headers={"x-goog-api-key": self.api_key},
            json=payload,
        ) as response:
            response.raise_for_status()

            async for line in response.aiter_lines():
                if not line.startswith("data:"):
                    continue
                event = json.loads(line[len("data:"):].strip())
                for text in self._event_texts(event):
                    yield text

    @staticmethod
    def _event_texts(event: Dict[str, Any]) -> List[str]:
        """Text parts of the first candidate; the final event may carry none"""
        candidates = event.get("candidates") or []
        if not candidates:
            return []
        parts = candidates[0].get("content", {}).get("parts", [])
        return [part["text"] for part in parts if part.get("text")]

    def _describe(self, error: Exception) -> str:
        if isinstance(error, httpx.TimeoutException):
            return f"Language model timeout after {self.timeout}s"
        if isinstance(error, httpx.HTTPStatusError):
            return f"Language model API error: {error.response.status_code}"
        return f"Language model unreachable: {error}"
