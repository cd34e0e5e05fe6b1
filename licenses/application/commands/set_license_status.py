"""
SetLicenseStatusCommand.

Command to assign ACTIVE/BLOCKED, or to toggle between them when no
status is requested.
"""
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class SetLicenseStatusCommand:
    """Command to set or toggle a license's status."""

    client_id: Any
    requested_status: Optional[Any] = None
