# models/car.py
import uuid
from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Integer, Boolean, Float, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from .base import Base

CAR_CONDITIONS = ("Brand New", "Elite Approved")

class Car(Base):
    __tablename__ = "cars"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    make_id = Column(Uuid(as_uuid=True), ForeignKey("makes.id", ondelete="RESTRICT"), nullable=False, index=True)
    model_en = Column(Text, nullable=False, index=True)
    model_ar = Column(Text, nullable=False, index=True)
    name_en = Column(Text, nullable=False)
    name_ar = Column(Text, nullable=False)
    year = Column(Integer, nullable=False)
    condition = Column(Text, nullable=False)
    mileage = Column(Integer, nullable=False)
    stock_number = Column(Text, unique=True, nullable=False)
    price = Column(Float, nullable=False)
    exterior_color_en = Column(Text)
    exterior_color_ar = Column(Text)
    interior_color_en = Column(Text)
    interior_color_ar = Column(Text)
    engine_en = Column(Text)
    engine_ar = Column(Text)
    bhp_en = Column(Text)
    bhp_ar = Column(Text)
    door = Column(Integer)
    warranty = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    make = relationship("Make", back_populates="cars")
    images = relationship(
        "CarImage",
        back_populates="car",
        cascade="all, delete-orphan",
        order_by="CarImage.position",
    )
