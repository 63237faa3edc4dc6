"""/v1/chat/sessions - finance assistant conversations"""

import logging
from typing import AsyncIterator

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import StreamingResponse

from sky_financial.api.v1.schemas import ChatMessageRequest, ChatMessageSchema, ChatSessionResponse
from sky_financial.api.dependencies import get_chat_client, get_request_id, get_session_repository
from sky_financial.domain.chat import FALLBACK_REPLY, WELCOME_MESSAGE, ChatSession
from sky_financial.domain.exceptions import ChatServiceError, ChatSessionNotFoundError
from sky_financial.infrastructure.clients.llm import LLMChatClient
from sky_financial.infrastructure.sessions import ChatSessionRepository

router = APIRouter()


def _session_response(session: ChatSession) -> ChatSessionResponse:
    return ChatSessionResponse(
        session_id=session.session_id,
        created_at=session.created_at,
        welcome=WELCOME_MESSAGE,
        messages=[
            ChatMessageSchema(
                id=turn.id,
                role=turn.role.value,
                text=turn.text,
                timestamp=turn.timestamp,
            )
            for turn in session.history
        ],
    )


def _lookup(sessions: ChatSessionRepository, session_id: str) -> ChatSession:
    try:
        return sessions.get_session(session_id)
    except ChatSessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


async def _reply_stream(
    chat_client: LLMChatClient,
    session: ChatSession,
    message: str,
    request_id: str,
) -> AsyncIterator[str]:
    """Relay reply increments; a failed upstream call ends with the fallback text"""
    async with session.reply_lock:
        try:
            async for text in chat_client.stream_reply(session, message):
                yield text
        except ChatServiceError as e:
            logging.error(f"Chat service error: {e}", extra={"request_id": request_id})
            yield FALLBACK_REPLY


@router.post("/chat/sessions", response_model=ChatSessionResponse, status_code=201)
def create_chat_session(sessions: ChatSessionRepository = Depends(get_session_repository)):
    """Open a conversation; the response carries the assistant's welcome message"""
    return _session_response(sessions.create_session())


@router.get("/chat/sessions/{session_id}", response_model=ChatSessionResponse)
def get_chat_session(
    session_id: str,
    sessions: ChatSessionRepository = Depends(get_session_repository),
):
    """Retrieve the transcript of completed exchanges"""
    return _session_response(_lookup(sessions, session_id))


@router.post("/chat/sessions/{session_id}/messages")
async def send_chat_message(
    session_id: str,
    request_body: ChatMessageRequest,
    request: Request,
    sessions: ChatSessionRepository = Depends(get_session_repository),
    chat_client: LLMChatClient = Depends(get_chat_client),
):
    """
    Send a user message and stream the assistant's reply as plain text.

    Disconnecting mid-stream cancels the upstream call and nothing is
    added to the transcript.

    A session answers one message at a time; a message sent while a reply
    is still streaming is rejected with 409.
    """
    session = _lookup(sessions, session_id)
    if session.reply_lock.locked():
        raise HTTPException(
            status_code=409,
            detail=f"Chat session {session_id} is still replying to the previous message",
        )

    request_id = get_request_id(request)

    return StreamingResponse(
        _reply_stream(chat_client, session, request_body.message, request_id),
        media_type="text/plain; charset=utf-8",
    )


@router.delete("/chat/sessions/{session_id}", status_code=204)
def delete_chat_session(
    session_id: str,
    sessions: ChatSessionRepository = Depends(get_session_repository),
):
    """Close a conversation"""
    try:
        sessions.delete_session(session_id)
    except ChatSessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
