"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from enum import Enum

CLIENT_ID_MAX_LENGTH = 255


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class ClientId(ValueObject):
    """Opaque client identifier, stripped of surrounding whitespace."""

    value: str

    def __post_init__(self):
        """Validate and normalize the identifier."""
        if not isinstance(self.value, str):
            raise ValueError("Client ID must be a string")
        normalized = self.value.strip()
        if not normalized:
            raise ValueError("Client ID cannot be empty")
        if len(normalized) > CLIENT_ID_MAX_LENGTH:
            raise ValueError("Client ID too long")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        """Return client id as string."""
        return self.value


class LicenseStatus(Enum):
    """
    License status value object.

    Values are the strings persisted by the store and exchanged on the wire.
    """

    PENDING = "PENDIENTE"
    ACTIVE = "ACTIVA"
    BLOCKED = "BLOQUEADA"
    EXPIRED = "EXPIRADA"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value

    @classmethod
    def parse(cls, raw) -> "LicenseStatus":
        """
        Parse a stored value or a member name into a status.

        Args:
            raw: Wire value (e.g. "BLOQUEADA") or member name (e.g. "BLOCKED")

        Returns:
            LicenseStatus member

        Raises:
            ValueError: If the value is not a known status
        """
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, str):
            candidate = raw.strip()
            try:
                return cls(candidate)
            except ValueError:
                pass
            if candidate in cls.__members__:
                return cls[candidate]
        raise ValueError(f"Unknown license status: {raw!r}")

    @property
    def admin_assignable(self) -> bool:
        """PENDING and EXPIRED are derived states and never set by an admin."""
        return self in (LicenseStatus.ACTIVE, LicenseStatus.BLOCKED)


class RejectionReason(Enum):
    """Closed set of reasons reported to unauthenticated validation callers."""

    BLOCKED = "blocked"
    PENDING_APPROVAL = "pending_approval"
    EXPIRED = "expired"
    NOT_ACTIVE = "not_active"

    def __str__(self) -> str:
        """Return reason code as string."""
        return self.value
