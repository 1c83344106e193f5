import uuid
from sqlalchemy import Column, Text, TIMESTAMP, Boolean, Uuid
from sqlalchemy.sql import func
from .base import Base

class SeasonalOffer(Base):
    __tablename__ = "seasonal_offers"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title_en = Column(Text, nullable=False)
    title_ar = Column(Text, nullable=False)
    details_en = Column(Text, nullable=False)
    details_ar = Column(Text, nullable=False)
    show = Column(Boolean, nullable=False, default=True)
    image = Column(Text)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
