import uuid
from sqlalchemy import Column, Text, TIMESTAMP, JSON, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from .base import Base

class Make(Base):
    __tablename__ = "makes"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name_en = Column(Text, unique=True, nullable=False)
    name_ar = Column(Text, nullable=False)
    models = Column(JSON, nullable=False, default=list)   # [{"en": ..., "ar": ...}]
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    cars = relationship("Car", back_populates="make")
