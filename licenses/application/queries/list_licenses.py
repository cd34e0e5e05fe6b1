"""
ListLicensesQuery.

Query to list every stored license for administrators.
"""
from dataclasses import dataclass


@dataclass
class ListLicensesQuery:
    """Query to list all licenses as stored."""
