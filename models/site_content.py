# models/site_content.py
"""
Site-wide singleton documents. Each table holds exactly one row whose primary key
is pinned to SINGLETON_ID, so a concurrent first read cannot create a second row.
"""
from sqlalchemy import Column, Text, TIMESTAMP, Integer, JSON, CheckConstraint
from sqlalchemy.sql import func
from .base import Base

SINGLETON_ID = 1

HOME_IMAGE_SLOTS = ("whatWeDo", "brands", "news", "showroom", "feedback", "terms")


class HomePageImages(Base):
    __tablename__ = "home_page_images"
    __table_args__ = (CheckConstraint("id = 1", name="ck_home_page_images_singleton"),)

    id = Column(Integer, primary_key=True, default=SINGLETON_ID)
    what_we_do = Column(Text)
    brands = Column(Text)
    news = Column(Text)
    showroom = Column(Text)
    feedback = Column(Text)
    terms = Column(Text)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    # API slot name -> column attribute
    SLOT_COLUMNS = {
        "whatWeDo": "what_we_do",
        "brands": "brands",
        "news": "news",
        "showroom": "showroom",
        "feedback": "feedback",
        "terms": "terms",
    }


class SocialLinks(Base):
    __tablename__ = "social_links"
    __table_args__ = (CheckConstraint("id = 1", name="ck_social_links_singleton"),)

    id = Column(Integer, primary_key=True, default=SINGLETON_ID)
    mobile = Column(Text)
    insta = Column(Text)
    tiktok = Column(Text)
    youtube = Column(Text)
    snapchat = Column(Text)
    location = Column(Text)
    location_link = Column(Text)
    email = Column(Text)
    whatsapp = Column(Text)
    sales_numbers = Column(JSON, nullable=False, default=list)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())


class TermsAndConditions(Base):
    __tablename__ = "terms_and_conditions"
    __table_args__ = (CheckConstraint("id = 1", name="ck_terms_singleton"),)

    id = Column(Integer, primary_key=True, default=SINGLETON_ID)
    content = Column(JSON, nullable=False, default=list)   # [{title{en,ar}, details{en,ar}, order}]
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())


class WhatWeDo(Base):
    __tablename__ = "what_we_do"
    __table_args__ = (CheckConstraint("id = 1", name="ck_what_we_do_singleton"),)

    id = Column(Integer, primary_key=True, default=SINGLETON_ID)
    content_en = Column(Text, nullable=False)
    content_ar = Column(Text, nullable=False)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
