"""
Pydantic schemas for authentication.

- Email is normalized to lowercase.
"""
from pydantic import BaseModel, EmailStr, Field, field_validator


class CredentialsPayload(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8)

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: EmailStr) -> str:
        return str(v).lower()


class LoginPayload(BaseModel):
    email: EmailStr
    password: str


class RegisterOut(BaseModel):
    message: str
    id: str


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str


class MeOut(BaseModel):
    user_id: str
