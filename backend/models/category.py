# backend/models/category.py
from sqlalchemy import Column, Integer, String, Text
from database import Base

# Product grouping used for catalog filtering
class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    slug = Column(String(100), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
