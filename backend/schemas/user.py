from datetime import datetime
from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from schemas.base import ORMBase

# Shared properties for user models
class UserBase(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    email: EmailStr

# Schema for user authentication credentials
class UserLogin(BaseModel):
    username: str
    password: str

# Schema for user registration requests
class UserCreate(UserBase):
    password: str = Field(min_length=6)

# Record handed to storage; password is already hashed here
class UserInsert(UserBase):
    password: str
    role: str = "user"

# Output schema for user profile details
class UserResponse(ORMBase):
    id: int
    username: str
    email: str
    role: str
    created_at: Optional[datetime] = None

# Internal record including the password hash, used only for login checks
class UserWithPassword(UserResponse):
    password: str

# Schema for JWT authentication token response
class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

# Schema for JWT payload contents
class TokenData(BaseModel):
    username: Optional[str] = None
    role: Optional[str] = None
