"""CLI commands for the Dolet health assistant."""

import argparse
import asyncio
import sys

from sqlalchemy.orm import Session

from dolet.config import settings
from dolet.database import SessionLocal
from dolet.services.ai_schemas import GenerationRequest
from dolet.services.credentials import CredentialProvider
from dolet.services.exceptions import GenerationError
from dolet.services.recommendation_service import (
    MissingDiagnosisError,
    RecommendationService,
)
from dolet.services.vertex_service import VertexService


def check_credentials() -> None:
    """Fetch one access token to verify the Vertex AI identity setup."""
    try:
        provider = CredentialProvider.from_settings()
        provider.get_token()
    except GenerationError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(
        f"Credentials OK (project={settings.vertex_project_id or '<unset>'}, "
        f"location={settings.vertex_location})"
    )


def generate(prompt: str, models: list[str] | None = None) -> None:
    """Run one single-turn generation and print the text."""
    try:
        vertex = VertexService.from_settings(CredentialProvider.from_settings())
        result = asyncio.run(
            vertex.generate(
                GenerationRequest.from_prompt(prompt),
                models or settings.recommendation_models,
            )
        )
    except GenerationError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"[{result.model}, {result.attempts} attempt(s)]")
    print(result.text)


def recommend(analytics_id: int) -> None:
    """Generate and store recommendations for an analytics record."""
    db: Session = SessionLocal()

    try:
        vertex = VertexService.from_settings(CredentialProvider.from_settings())
        service = RecommendationService(db, vertex)

        analytics = service.get_analytics(analytics_id)
        if not analytics:
            print(f"Error: Analytics {analytics_id} not found.")
            sys.exit(1)

        recommendation = asyncio.run(service.generate_for_analytics(analytics))
        print(f"Recommendation {recommendation.id} saved for analytics {analytics_id}")

    except (GenerationError, MissingDiagnosisError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Dolet health assistant CLI")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "check-credentials", help="Verify Vertex AI credentials by fetching a token"
    )

    generate_parser = subparsers.add_parser(
        "generate", help="Generate text for a single prompt"
    )
    generate_parser.add_argument("--prompt", required=True, help="Prompt text")
    generate_parser.add_argument(
        "--models", help="Comma-separated candidate models (default: recommendation models)"
    )

    recommend_parser = subparsers.add_parser(
        "recommend", help="Generate recommendations for an analytics record"
    )
    recommend_parser.add_argument(
        "--analytics-id", type=int, required=True, help="Analytics record ID"
    )

    args = parser.parse_args()

    if args.command == "check-credentials":
        check_credentials()
    elif args.command == "generate":
        models = [m.strip() for m in args.models.split(",") if m.strip()] if args.models else None
        generate(args.prompt, models)
    elif args.command == "recommend":
        recommend(args.analytics_id)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
