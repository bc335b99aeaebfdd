"""Stateless health chat assistant."""
import logging
import uuid
from typing import Optional, Sequence

from dolet.config import settings
from dolet.services.ai_schemas import (
    ConversationTurn,
    GenerationRequest,
    GenerationResult,
)
from dolet.services.conversation import assemble_conversation
from dolet.services.prompts import CHAT_SYSTEM_INSTRUCTION, CHAT_WELCOME_MESSAGE
from dolet.services.vertex_service import VertexService


logger = logging.getLogger(__name__)


class ChatService:
    """
    Multi-turn chat over the shared Vertex invoker.

    The client owns the conversation history and sends it on every turn.
    Session ids are only echoed back for client bookkeeping.
    """

    def __init__(self, vertex: Optional[VertexService] = None):
        self.vertex = vertex

    def start_session(self) -> dict:
        return {
            "session_id": str(uuid.uuid4()),
            "welcome_message": CHAT_WELCOME_MESSAGE,
        }

    async def reply(
        self, message: str, history: Optional[Sequence[ConversationTurn]] = None
    ) -> GenerationResult:
        """
        Answer the newest user message given the prior turns.

        Raises:
            ValueError: Empty message
            AuthError: Upstream credentials unavailable
            AllCandidatesExhausted: Every candidate model failed
        """
        turns = assemble_conversation(history, message)
        logger.info("Chat reply requested (%d turns)", len(turns))

        request = GenerationRequest.from_conversation(
            turns, system_instruction=CHAT_SYSTEM_INSTRUCTION
        )
        return await self.vertex.generate(request, settings.chat_models)
