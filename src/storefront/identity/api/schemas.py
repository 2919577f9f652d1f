"""Pydantic request/response schemas for the account API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"email": "priya@example.com", "password": "s3cret-pw", "full_name": "Priya Sharma"}]
        }
    }

    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=72)
    full_name: str = Field(..., max_length=200)


class LoginRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"email": "priya@example.com", "password": "s3cret-pw"}]}}

    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=72)


class UpdateProfileRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "full_name": "Priya S. Sharma",
                    "phone": "9876543210",
                    "address": "12 MG Road",
                    "city": "Bengaluru",
                    "state": "Karnataka",
                    "zip_code": "560001",
                    "country": "India",
                }
            ]
        }
    }

    full_name: str | None = Field(None, max_length=200)
    phone: str | None = Field(None, max_length=20)
    address: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    zip_code: str | None = Field(None, max_length=20)
    country: str | None = Field(None, max_length=100)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., max_length=128)
    new_password: str = Field(..., max_length=72)


class UserIdRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"user_id": "0f8fad5b-d9cb-469f-a165-70867728950e"}]}}

    user_id: str


class MessageResponse(BaseModel):
    message: str
