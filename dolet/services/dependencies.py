"""FastAPI dependencies for the generation services."""
from functools import lru_cache

from fastapi import Depends

from dolet.services.chat_service import ChatService
from dolet.services.credentials import CredentialProvider
from dolet.services.vertex_service import VertexService


@lru_cache
def get_credential_provider() -> CredentialProvider:
    """
    Process-wide credential provider.

    Raises AuthError if the identity source is unusable. Failures are not
    cached, so a fixed configuration is picked up on the next request.
    """
    return CredentialProvider.from_settings()


def get_vertex_service() -> VertexService:
    """
    Vertex invoker bound to the process-wide credential provider.

    The provider is resolved on the first generation call, so request
    validation and lookups answer 400/404 even when credentials are broken.
    """
    return VertexService.from_settings(credentials_factory=get_credential_provider)


def get_chat_service(
    vertex: VertexService = Depends(get_vertex_service),
) -> ChatService:
    return ChatService(vertex)
