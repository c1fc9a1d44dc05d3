"""
SQLAlchemy ORM models for persistence.
"""
from datetime import datetime
from sqlalchemy import Column, DateTime, Float, Integer, String

from db import Base


class BookORM(Base):
    __tablename__ = "books"

    # seq is the store-assigned insertion order, used to break created_at ties
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, unique=True, index=True, nullable=False)
    title = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    genre = Column(String, nullable=False)
    image_key = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    created_by = Column(String, nullable=False)
    updated_by = Column(String, nullable=True)
