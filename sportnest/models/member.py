from pydantic import BaseModel, Field, EmailStr
from typing import Optional
from datetime import datetime

class Member(BaseModel):
    id: str = Field(alias="_id")  # Use alias to map _id in the database to id in the model
    first_name: str
    last_name: str
    email: EmailStr
    contact_number: Optional[str] = None
    hashed_password: str
    role: str = "member"
    created_at: Optional[datetime] = None

    class Config:
        populate_by_name = True  # Allow using both id and _id

class Admin(BaseModel):
    id: str = Field(alias="_id")
    email: EmailStr
    hashed_password: str
    role: str = "admin"
    created_at: Optional[datetime] = None

    class Config:
        populate_by_name = True
