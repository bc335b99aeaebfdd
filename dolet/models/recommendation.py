"""Recommendation model for AI-generated health advice."""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from dolet.database import Base


class Recommendation(Base):
    """One generated recommendation per analytics record (regenerating overwrites it)."""

    __tablename__ = "recommendations"

    id = Column(Integer, primary_key=True, index=True)
    analytics_id = Column(Integer, ForeignKey("analytics.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)
    report_id = Column(Integer, nullable=True)

    recommendations = Column(Text, nullable=False)
    status = Column(String, nullable=False, default="generated")
    model = Column(String, nullable=True)  # Candidate model that produced the text

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    analytics = relationship("Analytics", back_populates="recommendation")
    patient = relationship("Patient", back_populates="recommendations")

    def __repr__(self):
        return f"<Recommendation(id={self.id}, analytics_id={self.analytics_id}, status={self.status})>"
