"""
Vertex AI Gemini integration with ordered model fallback.

One shared invoker serves both use cases:
1. Health recommendations (single-turn prompt)
2. Chat assistant (multi-turn conversation + system instruction)

Each call fetches one bearer token, then tries the candidate models in order
until one returns text. Candidate failures are logged and skipped; only the
last one is reported if every candidate fails.
"""

import asyncio
import logging
from typing import Callable, Optional, Sequence

import httpx

from dolet.config import settings
from dolet.services.ai_schemas import GenerationRequest, GenerationResult
from dolet.services.credentials import CredentialProvider
from dolet.services.exceptions import (
    AbsentContentError,
    AllCandidatesExhausted,
    CandidateFailure,
)


logger = logging.getLogger(__name__)

VERTEX_ENDPOINT_TEMPLATE = (
    "https://{location}-aiplatform.googleapis.com/v1/projects/{project}"
    "/locations/{location}/publishers/google/models/{model}:generateContent"
)


def extract_text(response: object) -> Optional[str]:
    """
    Pull the generated text out of a generateContent response body.

    Reads candidates[0].content.parts[0].text. Any missing layer, wrong type or
    empty text yields None; this never raises.
    """
    if not isinstance(response, dict):
        return None

    candidates = response.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None

    first = candidates[0]
    if not isinstance(first, dict):
        return None

    content = first.get("content")
    if not isinstance(content, dict):
        return None

    parts = content.get("parts")
    if not isinstance(parts, list) or not parts:
        return None

    part = parts[0]
    if not isinstance(part, dict):
        return None

    text = part.get("text")
    if not isinstance(text, str) or not text:
        return None
    return text


def _upstream_error_message(response: httpx.Response) -> str:
    """Best-effort error message from a non-2xx upstream response."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])

    return response.text[:500] or response.reason_phrase or "Unknown error"


class VertexService:
    """Resilient generateContent client shared by all generation use cases."""

    def __init__(
        self,
        credentials: Optional[CredentialProvider] = None,
        project_id: str = "",
        location: str = "us-central1",
        timeout: float = 1200,
        connect_timeout: float = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        credentials_factory: Optional[Callable[[], CredentialProvider]] = None,
    ):
        """
        Args:
            credentials: Token provider used for every call
            credentials_factory: Builds the provider on first generate() when
                no provider is given, so requests that never generate do not
                need working credentials
        """
        if credentials is None and credentials_factory is None:
            raise ValueError("credentials or credentials_factory is required")

        self._credentials = credentials
        self._credentials_factory = credentials_factory
        self.project_id = project_id
        self.location = location
        self.timeout = httpx.Timeout(timeout=timeout, connect=connect_timeout)
        self.transport = transport

        if not project_id:
            logger.warning("VERTEX_PROJECT_ID is not set; upstream calls will fail")

    @classmethod
    def from_settings(
        cls,
        credentials: Optional[CredentialProvider] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        credentials_factory: Optional[Callable[[], CredentialProvider]] = None,
    ) -> "VertexService":
        return cls(
            credentials=credentials,
            project_id=settings.vertex_project_id,
            location=settings.vertex_location,
            timeout=settings.vertex_timeout,
            connect_timeout=settings.vertex_connect_timeout,
            transport=transport,
            credentials_factory=credentials_factory,
        )

    @property
    def credentials(self) -> CredentialProvider:
        """The token provider. Raises AuthError if the factory cannot build one."""
        if self._credentials is None:
            self._credentials = self._credentials_factory()
        return self._credentials

    def endpoint_for(self, model: str) -> str:
        return VERTEX_ENDPOINT_TEMPLATE.format(
            location=self.location, project=self.project_id, model=model
        )

    # =========================================================================
    # GENERATION
    # =========================================================================

    async def generate(
        self, request: GenerationRequest, models: Sequence[str]
    ) -> GenerationResult:
        """
        Generate text, trying each candidate model in order.

        Args:
            request: Prompt or conversation (+ optional system instruction)
            models: Candidate model identifiers, most preferred first

        Returns:
            GenerationResult from the first candidate that produced text

        Raises:
            ValueError: Empty candidate list
            AuthError: Token acquisition failed (no candidate attempted)
            AllCandidatesExhausted: Every candidate failed
            AbsentContentError: Every candidate failed, the last one with no text
        """
        candidates = tuple(models)
        if not candidates:
            raise ValueError("At least one candidate model is required")

        token = await asyncio.to_thread(self.credentials.get_token)
        payload = request.to_payload()
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

        last_failure: Optional[CandidateFailure] = None

        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self.transport
        ) as client:
            for attempt, model in enumerate(candidates, start=1):
                logger.info("Trying Vertex AI model %s (%d/%d)", model, attempt, len(candidates))
                try:
                    text = await self._attempt(client, model, payload, headers)
                except CandidateFailure as failure:
                    last_failure = failure
                    logger.warning(
                        "Model %s failed (%s): %s",
                        model,
                        failure.status_code,
                        failure.message,
                    )
                    if failure.status_code == 401:
                        self.credentials.invalidate()
                    continue

                logger.info("Model %s succeeded", model)
                return GenerationResult(text=text, model=model, attempts=attempt)

        if last_failure.absent_content:
            raise AbsentContentError(last_failure, attempts=len(candidates))
        raise AllCandidatesExhausted(last_failure, attempts=len(candidates))

    async def _attempt(
        self, client: httpx.AsyncClient, model: str, payload: dict, headers: dict
    ) -> str:
        """One POST to one candidate. Raises CandidateFailure on any failure."""
        try:
            response = await client.post(
                self.endpoint_for(model), json=payload, headers=headers
            )
        except httpx.HTTPError as e:
            raise CandidateFailure(model, f"{type(e).__name__}: {e}") from e

        if not response.is_success:
            logger.debug("Full error response from %s: %s", model, response.text)
            raise CandidateFailure(
                model,
                _upstream_error_message(response),
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError:
            body = None

        text = extract_text(body)
        if text is None:
            raise CandidateFailure(
                model,
                "No text content in model response",
                status_code=response.status_code,
                absent_content=True,
            )
        return text
