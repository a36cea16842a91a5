from pydantic import BaseModel, EmailStr, Field
from typing import Optional

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    id: str
    role: str

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class MemberCreate(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    contact_number: Optional[str] = None
    password: str = Field(..., min_length=6)

class MemberResponse(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: EmailStr
    contact_number: Optional[str] = None
    role: str = "member"
