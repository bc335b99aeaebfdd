"""Patient model."""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from dolet.database import Base


class Patient(Base):
    """A patient whose reports are analyzed."""

    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    analytics = relationship("Analytics", back_populates="patient")
    recommendations = relationship("Recommendation", back_populates="patient")

    def __repr__(self):
        return f"<Patient(id={self.id}, full_name={self.full_name})>"
