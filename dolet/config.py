from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql://postgres:postgres@db:5432/dolet"

    # Vertex AI
    vertex_project_id: str = ""
    vertex_location: str = "us-central1"
    google_application_credentials: str = ""  # Empty = Application Default Credentials

    # Vertex AI timeout settings (seconds)
    vertex_timeout: float = 1200  # 20 minutes, generation latency is unpredictable
    vertex_connect_timeout: float = 10

    # 0 disables token reuse: every generation call fetches a fresh token
    vertex_token_cache_seconds: int = 0

    # Candidate models, most capable first
    recommendation_models: list[str] = [
        "gemini-2.5-pro",
        "gemini-2.5-flash",
        "gemini-1.5-flash",
        "gemini-1.5-pro",
    ]
    chat_models: list[str] = [
        "gemini-2.0-flash-exp",
        "gemini-1.5-flash",
        "gemini-1.5-pro",
    ]

    # Attach upstream error text to API responses (development only)
    expose_upstream_errors: bool = False

    verify_credentials_on_startup: bool = True
    log_level: str = "INFO"

    class Config:
        env_file = ".env"

    @field_validator("recommendation_models", "chat_models")
    @classmethod
    def require_candidates(cls, value: list[str]) -> list[str]:
        models = [model.strip() for model in value if model.strip()]
        if not models:
            raise ValueError("at least one candidate model is required")
        return models


settings = Settings()
