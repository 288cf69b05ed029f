# account_api/schemas/user.py
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from .base import BaseSchema
from .common import check_password_strength


class UserProfileOut(BaseSchema):
    id: int
    email: str
    first_name: str
    last_name: str
    logo: Optional[str] = None
    is_email_verified: bool
    created_at: datetime
    updated_at: datetime


class UserUpdateIn(BaseSchema):
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)


class ChangePasswordIn(BaseSchema):
    current_password: str = Field(..., min_length=1)
    new_password: str

    @field_validator("new_password")
    @classmethod
    def _new_password(cls, v: str) -> str:
        return check_password_strength(v)
