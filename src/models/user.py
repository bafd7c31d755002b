"""
User-related Pydantic models
"""

from datetime import date, datetime
from pydantic import BaseModel, Field

class UserCreateRequest(BaseModel):
    firstName: str = Field(..., description="Given name")
    lastName: str = Field(..., description="Family name")
    birthday: date = Field(..., description="Date of birth (YYYY-MM-DD)")

class UserUpdateRequest(BaseModel):
    firstName: str = Field(..., description="Given name")
    lastName: str = Field(..., description="Family name")
    birthday: date = Field(..., description="Date of birth (YYYY-MM-DD)")

class User(BaseModel):
    id: int
    firstName: str
    lastName: str
    birthday: date
    createdAt: datetime
    updatedAt: datetime

class MessageResponse(BaseModel):
    message: str
