"""
SQLAlchemy model for the vehicles table.
"""

from sqlalchemy import Column, String, Integer

from carhub.db.session import Base
from carhub.db.base_model import BaseModel

class Vehicle(Base, BaseModel):
    """
    A vehicle owned by one user.
    Fueling and maintenance records reference it by id; deleting it removes them.
    """
    __tablename__ = "vehicles"

    name = Column(String, nullable=False, index=True)
    make = Column(String, nullable=True)
    model = Column(String, nullable=True)
    year = Column(Integer, nullable=True)
    licensePlate = Column(String, nullable=True)  # Stored uppercase

    def __repr__(self):
        return f"<Vehicle {self.id} {self.name!r}>"
