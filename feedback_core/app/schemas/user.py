import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, field_validator
from pydantic.types import SecretStr

from feedback_core.utils.base import UserRole
from feedback_core.utils.validators import (
    validate_case_insensitive_email,
    validate_password,
)


# Shared properties
class UserBase(BaseModel):
    is_active: bool = True
    full_name: Optional[str] = None


# Properties to receive via API on creation
class UserCreate(UserBase):
    email: EmailStr
    password: SecretStr
    role: UserRole = UserRole.USER

    @field_validator("email")
    @classmethod
    def _valid_email(cls, v: str) -> str:
        return validate_case_insensitive_email(v)

    @field_validator("password")
    @classmethod
    def _valid_password(cls, v: SecretStr) -> SecretStr:
        validate_password(v)
        return v


# Properties to receive via API on update
class UserUpdate(UserBase):
    password: Optional[SecretStr] = None

    @field_validator("password")
    @classmethod
    def _valid_password(cls, v: Optional[SecretStr]) -> Optional[SecretStr]:
        if v is not None:
            validate_password(v)
        return v


class UserInDBBase(UserBase):
    id: int
    uuid: str
    email: str
    role: UserRole
    created_at: datetime.datetime

    class Config:
        from_attributes = True


# Additional properties to return via API
class User(UserInDBBase):
    pass
