"""Staff domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from ...shared.schemas import CamelModel
from ...shared.validators import normalize_br_phone, validate_email, validate_postal_code


class StaffMemberCreate(CamelModel):
    """Schema for registering a staff member"""

    name: str
    phone: str
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name is required")
        return v.strip()

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Phone is required")
        return normalize_br_phone(v)

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)

    @field_validator("postal_code")
    @classmethod
    def validate_postal_code_field(cls, v):
        return validate_postal_code(v)


class StaffMemberUpdate(CamelModel):
    """Schema for updating a staff member (active=false deactivates)"""

    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip() if v else v

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Phone cannot be empty")
        return normalize_br_phone(v) if v else v

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)

    @field_validator("postal_code")
    @classmethod
    def validate_postal_code_field(cls, v):
        return validate_postal_code(v)


class StaffMemberResponse(CamelModel):
    id: int
    user_id: int
    name: str
    phone: str
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    active: bool
    hired_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class StaffSpecialtyRequest(CamelModel):
    specialty_id: int


class StaffSpecialtyResponse(CamelModel):
    id: int
    staff_member_id: int
    specialty_id: int
    created_at: Optional[datetime] = None
