"""
Authentication schemas.

Dependencies: pydantic
System role: Account API contracts
"""

import uuid

from pydantic import BaseModel, ConfigDict, Field


class SignupRequest(BaseModel):
    email: str | None = Field(default=None, max_length=255)
    password: str | None = None
    name: str | None = Field(default=None, max_length=255)


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    name: str | None = None


class LoginResponse(BaseModel):
    user: UserResponse
