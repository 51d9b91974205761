from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SignupRequest(BaseModel):
    email: str = Field(min_length=3, max_length=320)
    name: str = Field(default="", max_length=120)
    password: str = Field(min_length=6, max_length=256)

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("email must contain @")
        return v


class SigninRequest(BaseModel):
    email: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=1, max_length=256)


class ResetRequestIn(BaseModel):
    email: str = Field(min_length=3, max_length=320)


class ResetRequestOut(BaseModel):
    message: str
    expires_at: datetime
    reset_token: str | None = None


class ResetPasswordIn(BaseModel):
    reset_token: str = Field(min_length=1, max_length=128)
    password: str = Field(min_length=6, max_length=256)
    confirm_password: str = Field(min_length=1, max_length=256)


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    permissions: list[str]


class MessageOut(BaseModel):
    message: str
