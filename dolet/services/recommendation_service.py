"""
Health recommendation generation for analyzed reports.

Reads the diagnosis stored on an Analytics record, asks the model for
patient-friendly recommendations, and stores the text as the analytics'
single Recommendation row.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from dolet.config import settings
from dolet.models import Analytics, Recommendation
from dolet.services.ai_schemas import GenerationRequest
from dolet.services.prompts import build_health_recommendation_prompt
from dolet.services.vertex_service import VertexService


logger = logging.getLogger(__name__)


class MissingDiagnosisError(ValueError):
    """The analytics record has no diagnosis prediction to base advice on."""

    pass


class RecommendationService:
    """Service for generating and retrieving health recommendations."""

    def __init__(self, db: Session, vertex: Optional[VertexService] = None):
        self.db = db
        self.vertex = vertex

    def get_analytics(self, analytics_id: int) -> Optional[Analytics]:
        return (
            self.db.query(Analytics)
            .options(joinedload(Analytics.patient))
            .filter(Analytics.id == analytics_id)
            .first()
        )

    def get_recommendation(self, analytics_id: int) -> Optional[Recommendation]:
        return (
            self.db.query(Recommendation)
            .options(
                joinedload(Recommendation.analytics),
                joinedload(Recommendation.patient),
            )
            .filter(Recommendation.analytics_id == analytics_id)
            .first()
        )

    async def generate_for_analytics(self, analytics: Analytics) -> Recommendation:
        """
        Generate recommendations for an analytics record and upsert them.

        Args:
            analytics: Analytics record with a diagnosis prediction

        Returns:
            The created or updated Recommendation

        Raises:
            MissingDiagnosisError: No diagnosis prediction on the record
            AuthError: Upstream credentials unavailable
            AllCandidatesExhausted: Every candidate model failed
        """
        if analytics.prediction is None:
            raise MissingDiagnosisError(
                "No diagnosis found in analytics. Please analyze the report first."
            )

        logger.info(
            "Generating recommendations for analytics %s: %s (confidence %s)",
            analytics.id,
            analytics.prediction,
            analytics.confidence,
        )

        prompt = build_health_recommendation_prompt(
            analytics.prediction, analytics.confidence
        )
        result = await self.vertex.generate(
            GenerationRequest.from_prompt(prompt), settings.recommendation_models
        )

        recommendation = (
            self.db.query(Recommendation)
            .filter(Recommendation.analytics_id == analytics.id)
            .first()
        )

        if recommendation:
            recommendation.recommendations = result.text
            recommendation.status = "generated"
            recommendation.model = result.model
            recommendation.patient_id = analytics.patient_id
            recommendation.report_id = analytics.report_id
            recommendation.updated_at = datetime.utcnow()
            logger.info("Recommendation %s updated", recommendation.id)
        else:
            recommendation = Recommendation(
                analytics_id=analytics.id,
                patient_id=analytics.patient_id,
                report_id=analytics.report_id,
                recommendations=result.text,
                status="generated",
                model=result.model,
            )
            self.db.add(recommendation)

        self.db.commit()
        self.db.refresh(recommendation)

        logger.info(
            "Recommendation %s saved (%d characters, model %s)",
            recommendation.id,
            len(result.text),
            result.model,
        )
        return recommendation
