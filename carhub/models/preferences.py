"""
SQLAlchemy model for the userPreferences table.
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime

from carhub.db.session import Base

class UserPreference(Base):
    """
    One row per authenticated user, created on first read or write.
    """
    __tablename__ = "userPreferences"

    userId = Column(String, primary_key=True)  # Verified subject identifier
    email = Column(String, nullable=True)
    activeVehicleId = Column(String(32), nullable=True)
    createdAt = Column(DateTime, default=datetime.utcnow, nullable=False)
    updatedAt = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<UserPreference {self.userId}>"
