"""
ValidateLicenseCommand.

Client-facing check of a license. It is a command rather than a query
because it may register the client or persist an expiry.
"""
from dataclasses import dataclass
from typing import Any


@dataclass
class ValidateLicenseCommand:
    """Command to validate the license of a client."""

    client_id: Any
