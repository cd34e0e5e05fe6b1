"""
CreateLicenseCommand.

Command to issue an ACTIVE license for a new client id.
"""
from dataclasses import dataclass
from typing import Any


@dataclass
class CreateLicenseCommand:
    """Command to create a license with an explicit expiration date."""

    client_id: Any
    expiration_date: Any  # aware datetime; naive values are taken as UTC
