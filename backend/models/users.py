# backend/models/users.py
from sqlalchemy import Column, Integer, String, DateTime, func
from database import Base

# Represents a storefront account; role is either "user" or "admin"
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String, nullable=False) # Hashed, never returned
    role = Column(String(20), nullable=False, default="user", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
