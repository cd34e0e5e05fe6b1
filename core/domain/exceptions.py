"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class InvalidArgumentError(DomainException):
    """Raised when caller input is missing or malformed."""

    def __init__(self, message: str = "Invalid argument", code: str = "INVALID_ARGUMENT"):
        super().__init__(message, code=code)


class UnauthorizedError(DomainException):
    """Raised when the admin guard rejects a caller."""

    def __init__(self, message: str = "Unauthorized: Invalid admin key."):
        super().__init__(message, code="UNAUTHORIZED")


class AdminSecretNotConfiguredError(DomainException):
    """Raised when no admin secret has been configured for the process."""

    def __init__(self, message: str = "Server configuration error."):
        super().__init__(message, code="ADMIN_SECRET_NOT_CONFIGURED")


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class LicenseNotFoundError(LicenseException):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class LicenseAlreadyExistsError(LicenseException):
    """Raised when a license already exists for a client id."""

    def __init__(self, message: str = "A license with this Client ID already exists"):
        super().__init__(message, code="LICENSE_ALREADY_EXISTS")


class InvalidLicenseStatusError(InvalidArgumentError):
    """Raised when a requested status cannot be assigned by an admin."""

    def __init__(self, message: str = "Invalid status provided"):
        super().__init__(message, code="INVALID_LICENSE_STATUS")


class CorruptLicenseRecordError(LicenseException):
    """Raised when a stored license cannot be read as a valid record."""

    def __init__(self, client_id: str, detail: str):
        super().__init__(
            f"License {client_id} is corrupt: {detail}",
            code="CORRUPT_LICENSE_RECORD",
        )
        self.client_id = client_id
        self.detail = detail
