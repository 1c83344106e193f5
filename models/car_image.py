# models/car_image.py
import uuid
from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Boolean, Integer, Index, Uuid, text
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from .base import Base

class CarImage(Base):
    __tablename__ = "car_images"
    __table_args__ = (
        # at most one main image per car
        Index(
            "ux_car_images_main_per_car",
            "car_id",
            unique=True,
            postgresql_where=text("is_main"),
            sqlite_where=text("is_main = 1"),
        ),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    car_id = Column(Uuid(as_uuid=True), ForeignKey("cars.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(Text, nullable=False)                    # '/uploads/cars/<name>' or blob URL
    position = Column(Integer, nullable=False, default=0)
    is_main = Column(Boolean, nullable=False, default=False)
    content_type = Column(Text)
    original_filename = Column(Text)
    width = Column(Integer)
    height = Column(Integer)
    bytes = Column(Integer)
    created_at = Column(TIMESTAMP, server_default=func.now())

    car = relationship("Car", back_populates="images")
