"""
DeleteLicenseCommand.
"""
from dataclasses import dataclass
from typing import Any


@dataclass
class DeleteLicenseCommand:
    """Command to delete a license permanently."""

    client_id: Any
