"""Specialty domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from ...shared.schemas import CamelModel


class SpecialtyCreate(CamelModel):
    name: str
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name is required")
        if len(v.strip()) > 100:
            raise ValueError("Name must have at most 100 characters")
        return v.strip()


class SpecialtyResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
