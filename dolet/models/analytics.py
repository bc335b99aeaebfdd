"""Analytics model holding the diagnosis produced for a medical report."""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from dolet.database import Base


class Analytics(Base):
    """Stores the analysis outcome of one patient report."""

    __tablename__ = "analytics"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)
    report_id = Column(Integer, nullable=True, index=True)

    # Format: {"prediction": str, "confidence": float (0-1)}
    diagnosis = Column(JSON, nullable=True)
    severity = Column(String, nullable=True)
    status = Column(String, nullable=False, default="pending")  # pending, analyzed, failed

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    patient = relationship("Patient", back_populates="analytics")
    recommendation = relationship("Recommendation", back_populates="analytics", uselist=False)

    @property
    def prediction(self):
        if isinstance(self.diagnosis, dict):
            return self.diagnosis.get("prediction") or None
        return None

    @property
    def confidence(self):
        if isinstance(self.diagnosis, dict):
            return self.diagnosis.get("confidence")
        return None

    def __repr__(self):
        return f"<Analytics(id={self.id}, patient_id={self.patient_id}, status={self.status})>"
