from datetime import date
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator


class UserCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    name: str = Field(..., min_length=1, max_length=100)
    lastname: str = Field(..., min_length=1, max_length=100)
    birthdate: Optional[date] = None


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    lastname: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6, max_length=128)
    birthdate: Optional[date] = None

    @model_validator(mode="after")
    def require_one_field(self):
        if not any(getattr(self, name) is not None for name in self.model_fields_set):
            raise ValueError("at least one field must be provided")
        return self


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1)
    newPassword: str = Field(..., min_length=6, max_length=128)


class UserResponse(BaseModel):
    id: str
    name: Optional[str] = None
    lastname: Optional[str] = None
    email: Optional[str] = None
    birthdate: Optional[date] = None


class UserProfile(UserResponse):
    age: Optional[int] = None


class AuthResponse(BaseModel):
    message: str
    user: UserResponse
    token: Optional[str] = None
    refresh_token: Optional[str] = None
    session: Optional[Dict[str, Any]] = None
