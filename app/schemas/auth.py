from typing import Optional
from pydantic import EmailStr, Field
from app.schemas.common import CamelModel

class UserCreate(CamelModel):
    email: EmailStr
    password: str = Field(min_length=8)
    name: str = Field(min_length=1)

class UserLogin(CamelModel):
    email: EmailStr
    password: str

class UserResponse(CamelModel):
    id: str
    email: EmailStr
    name: Optional[str] = None
    image: Optional[str] = None
    role: str

class Token(CamelModel):
    access_token: str
    token_type: str

class UserListItem(UserResponse):
    lead_count: int = 0
    administered_lead_count: int = 0
