"""Health recommendation API endpoints."""
import logging

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from dolet.database import get_db
from dolet.services.dependencies import get_vertex_service
from dolet.services.recommendation_service import (
    MissingDiagnosisError,
    RecommendationService,
)
from dolet.services.vertex_service import VertexService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


class GenerateRecommendationRequest(BaseModel):
    """Request model for generating recommendations."""

    model_config = ConfigDict(populate_by_name=True)

    analytics_id: int = Field(alias="analyticsId")


def _isoformat(value):
    return value.isoformat() if value else None


@router.post("/generate")
async def generate_recommendations(
    request: GenerateRecommendationRequest = Body(...),
    db: Session = Depends(get_db),
    vertex: VertexService = Depends(get_vertex_service),
):
    """
    Generate health recommendations for an analyzed report and save them.

    Regenerating for the same analytics record overwrites the stored text.
    Generation errors are mapped to responses by the app exception handlers.
    """
    service = RecommendationService(db, vertex)

    analytics = service.get_analytics(request.analytics_id)
    if not analytics:
        raise HTTPException(
            status_code=404, detail="Analytics not found with the provided ID."
        )

    try:
        recommendation = await service.generate_for_analytics(analytics)
    except MissingDiagnosisError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "success": True,
        "message": "Health recommendations generated and saved successfully",
        "data": {
            "recommendationId": recommendation.id,
            "analyticsId": analytics.id,
            "patientId": analytics.patient_id,
            "patientName": analytics.patient.full_name if analytics.patient else None,
            "diagnosis": {
                "prediction": analytics.prediction,
                "confidence": analytics.confidence,
            },
            "recommendations": recommendation.recommendations,
            "model": recommendation.model,
            "createdAt": _isoformat(recommendation.created_at),
            "updatedAt": _isoformat(recommendation.updated_at),
        },
    }


@router.get("/{analytics_id}")
async def get_recommendation(analytics_id: int, db: Session = Depends(get_db)):
    """Get the stored recommendation for an analytics record."""
    recommendation = RecommendationService(db).get_recommendation(analytics_id)

    if not recommendation:
        raise HTTPException(
            status_code=404,
            detail="No recommendation found for this analytics. Please generate recommendations first.",
        )

    analytics = recommendation.analytics
    patient = recommendation.patient

    return {
        "success": True,
        "message": "Recommendation retrieved successfully",
        "data": {
            "id": recommendation.id,
            "analyticsId": recommendation.analytics_id,
            "patientId": recommendation.patient_id,
            "reportId": recommendation.report_id,
            "recommendations": recommendation.recommendations,
            "status": recommendation.status,
            "model": recommendation.model,
            "createdAt": _isoformat(recommendation.created_at),
            "updatedAt": _isoformat(recommendation.updated_at),
            "analytics": {
                "id": analytics.id,
                "diagnosis": analytics.diagnosis,
                "severity": analytics.severity,
                "status": analytics.status,
            } if analytics else None,
            "patient": {
                "id": patient.id,
                "fullName": patient.full_name,
                "email": patient.email,
            } if patient else None,
        },
    }
