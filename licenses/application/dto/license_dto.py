"""
License DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class ValidationResultDTO:
    """DTO for the client-facing validation verdict."""

    valid: bool
    reason: Optional[str] = None


@dataclass
class CreateLicenseResultDTO:
    """DTO for a created license."""

    client_id: str
    message: str


@dataclass
class DeleteLicenseResultDTO:
    """DTO for a deleted license."""

    client_id: str
    message: str


@dataclass
class ExtendLicenseResultDTO:
    """DTO for an extended license."""

    client_id: str
    new_expiration_date: datetime


@dataclass
class SetLicenseStatusResultDTO:
    """DTO for a status change."""

    client_id: str
    new_status: str


@dataclass
class LicenseListItemDTO:
    """DTO for a license row as stored, normalized for display."""

    id: str
    status: str
    expiration_date: datetime
