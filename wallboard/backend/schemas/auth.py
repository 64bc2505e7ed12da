"""
Auth Schemas.
"""

from pydantic import BaseModel, Field


class PasswordVerify(BaseModel):
    password: str = Field(..., min_length=1, description="Wall password")


class VerifyResponse(BaseModel):
    ok: bool
