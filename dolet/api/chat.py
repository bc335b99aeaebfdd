"""Chat assistant API endpoints."""
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field, field_validator

from dolet.services.ai_schemas import ConversationTurn
from dolet.services.chat_service import ChatService
from dolet.services.dependencies import get_chat_service


router = APIRouter(prefix="/chat", tags=["chat"])


class ChatRequest(BaseModel):
    """
    Request model for one chat turn.

    conversation_history is the full prior conversation in upstream format:
    [{"role": "user"|"model", "parts": [{"text": "..."}]}]
    """

    model_config = ConfigDict(populate_by_name=True)

    session_id: Optional[str] = Field(default=None, alias="sessionId")
    message: Optional[str] = None
    conversation_history: Optional[list[ConversationTurn]] = Field(
        default=None, alias="conversationHistory"
    )

    @field_validator("conversation_history", mode="before")
    @classmethod
    def ignore_non_list_history(cls, value):
        # Anything other than an array is treated as no history
        return value if isinstance(value, list) else None


@router.post("/start", status_code=201)
async def start_chat():
    """Start a chat session. The id is only echoed back on later turns."""
    session = ChatService().start_session()

    return {
        "success": True,
        "message": "Chat session started successfully",
        "data": {
            "sessionId": session["session_id"],
            "userId": None,
            "welcomeMessage": session["welcome_message"],
        },
    }


@router.post("")
async def chat(
    request: ChatRequest = Body(...),
    chat_service: ChatService = Depends(get_chat_service),
):
    """Send a message with the prior conversation and get the assistant's reply."""
    if not request.session_id or not request.message or not request.message.strip():
        raise HTTPException(
            status_code=400, detail="Session ID and message are required"
        )

    result = await chat_service.reply(request.message, request.conversation_history)

    return {
        "success": True,
        "message": "Chat response generated successfully",
        "data": {
            "sessionId": request.session_id,
            "userMessage": request.message,
            "botResponse": result.text,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    }
