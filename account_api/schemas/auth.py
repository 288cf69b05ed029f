from pydantic import Field, EmailStr, field_validator

from .base import BaseSchema
from .common import check_password_strength


class LoginIn(BaseSchema):
    email: EmailStr
    password: str = Field(..., min_length=1)
    remember_me: bool = False


class RegistrationIn(BaseSchema):
    email: EmailStr
    password: str
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        return check_password_strength(v)


class TokenOut(BaseSchema):
    access_token: str


class RequestVerificationIn(BaseSchema):
    email: EmailStr


class VerifyEmailIn(BaseSchema):
    token: str = Field(..., min_length=1)


class ResetPasswordIn(BaseSchema):
    token: str = Field(..., min_length=1)
    password: str

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        return check_password_strength(v)
