"""
Database models for the Dolet health assistant.

Import all models here so metadata.create_all sees every table.
"""

from dolet.database import Base
from dolet.models.patient import Patient
from dolet.models.analytics import Analytics
from dolet.models.recommendation import Recommendation

__all__ = [
    "Base",
    "Patient",
    "Analytics",
    "Recommendation",
]
