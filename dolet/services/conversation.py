"""Conversation assembly for the chat assistant."""
from typing import Optional, Sequence

from dolet.services.ai_schemas import ConversationTurn


def assemble_conversation(
    history: Optional[Sequence[ConversationTurn]], message: str
) -> list[ConversationTurn]:
    """
    Append the new user message to client-supplied history.

    History is owned by the client and sent on every call; nothing is looked
    up server-side. The input sequence is not modified.

    Raises:
        ValueError: message is empty or whitespace
    """
    if not message or not message.strip():
        raise ValueError("message must not be empty")

    turns = list(history or [])
    turns.append(ConversationTurn.user(message))
    return turns
