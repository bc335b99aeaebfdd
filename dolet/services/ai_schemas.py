"""
Pydantic models for the Vertex AI generateContent wire format.

Conversation turns use the upstream shape directly
({"role": ..., "parts": [{"text": ...}]}) so client-supplied history can be
validated and forwarded without translation.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


# --- Conversation ---


class Part(BaseModel):
    text: str


class ConversationTurn(BaseModel):
    role: Literal["user", "model"]
    parts: list[Part] = Field(min_length=1)

    @field_validator("parts")
    @classmethod
    def require_text(cls, parts: list[Part]) -> list[Part]:
        if not "".join(part.text for part in parts).strip():
            raise ValueError("turn text must not be empty")
        return parts

    @property
    def text(self) -> str:
        return "".join(part.text for part in self.parts)

    @classmethod
    def user(cls, text: str) -> "ConversationTurn":
        return cls(role="user", parts=[Part(text=text)])


# --- Request / Result ---


class GenerationRequest(BaseModel):
    """A single-turn prompt or a multi-turn conversation, ending with a user turn."""

    contents: list[ConversationTurn] = Field(min_length=1)
    system_instruction: Optional[str] = None

    @model_validator(mode="after")
    def ends_with_user_turn(self) -> "GenerationRequest":
        if self.contents[-1].role != "user":
            raise ValueError("conversation must end with a user turn")
        return self

    @classmethod
    def from_prompt(cls, prompt: str) -> "GenerationRequest":
        return cls(contents=[ConversationTurn.user(prompt)])

    @classmethod
    def from_conversation(
        cls, turns: list[ConversationTurn], system_instruction: Optional[str] = None
    ) -> "GenerationRequest":
        return cls(contents=list(turns), system_instruction=system_instruction)

    def to_payload(self) -> dict:
        """Build the generateContent JSON body."""
        payload = {
            "contents": [turn.model_dump() for turn in self.contents],
        }
        if self.system_instruction:
            payload["systemInstruction"] = {
                "parts": [{"text": self.system_instruction}]
            }
        return payload


class GenerationResult(BaseModel):
    text: str
    model: str  # Candidate that produced the text
    attempts: int  # Outbound calls made, including the successful one
