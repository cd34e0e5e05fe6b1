"""
ExtendLicenseCommand.

Command to push a license's expiration to a number of days from now.
"""
from dataclasses import dataclass
from typing import Any


@dataclass
class ExtendLicenseCommand:
    """Command to extend (and reactivate) a license."""

    client_id: Any
    days: Any
