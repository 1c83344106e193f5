import uuid
from sqlalchemy import Column, Text, TIMESTAMP, Uuid
from sqlalchemy.sql import func
from .base import Base

class FAQ(Base):
    __tablename__ = "faqs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    question_en = Column(Text, nullable=False)
    question_ar = Column(Text, nullable=False)
    answer_en = Column(Text, nullable=False)
    answer_ar = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())
