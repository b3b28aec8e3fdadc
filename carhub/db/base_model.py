import uuid
from datetime import datetime
from sqlalchemy import Column, DateTime, String

def new_id() -> str:
    return uuid.uuid4().hex

class BaseModel:
    """Base class for user-owned documents."""

    # Opaque string identifiers, generated by the application
    id = Column(String(32), primary_key=True, default=new_id)

    # Subject identifier of the verified owner
    ownerId = Column(String, nullable=False, index=True)

    # Timestamps
    createdAt = Column(DateTime, default=datetime.utcnow, nullable=False)
    updatedAt = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
