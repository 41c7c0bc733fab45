"""Shared validation utilities"""

import re
from typing import Iterable, Optional

from ..exceptions import ValidationError


def normalize_br_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a Brazilian phone number to the gateway channel format.

    Args:
        phone: Phone number string in various formats ("(67) 99958-3290",
            "+55 67 99958-3290", "5567999583290", ...)

    Returns:
        Digits only, with the 55 country code (e.g. 5567999583290)

    Raises:
        ValueError: If phone number is invalid
    """
    if not phone:
        return phone

    # Remove all non-digit characters
    digits = re.sub(r"\D", "", phone)

    # Area code + 8 or 9 digit subscriber number
    if len(digits) in (10, 11):
        digits = f"55{digits}"

    if not digits.startswith("55") or len(digits) not in (12, 13):
        raise ValueError("Phone number must have an area code and 8 or 9 digits")

    return digits


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_postal_code(postal_code: Optional[str]) -> Optional[str]:
    """Normalize a CEP to the 00000-000 format"""
    if not postal_code:
        return postal_code

    digits = re.sub(r"\D", "", postal_code)
    if len(digits) != 8:
        raise ValueError("CEP must have 8 digits")

    return f"{digits[:5]}-{digits[5:]}"


def reject_nulls(updates: dict, required: Iterable[str]) -> None:
    """
    Partial updates: an explicit null clears an optional field, but a required
    field cannot be cleared.

    Raises:
        ValidationError: If a required field is present and null
    """
    for field in required:
        if field in updates and updates[field] is None:
            raise ValidationError(f"{field} cannot be null")
