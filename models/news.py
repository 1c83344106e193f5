import uuid
from sqlalchemy import Column, Text, TIMESTAMP, Uuid
from sqlalchemy.sql import func
from .base import Base

class News(Base):
    __tablename__ = "news"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title_en = Column(Text, nullable=False)
    title_ar = Column(Text, nullable=False)
    details_en = Column(Text, nullable=False)   # markdown
    details_ar = Column(Text, nullable=False)   # markdown
    image = Column(Text)
    date = Column(TIMESTAMP, server_default=func.now())
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
