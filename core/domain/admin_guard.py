"""
Admin guard.

Compares a presented bearer secret against the process-wide admin secret.
"""
import secrets
from typing import Optional

from core.domain.exceptions import AdminSecretNotConfiguredError


class AdminSecretGuard:
    """Predicate over a pre-shared admin secret."""

    def __init__(self, secret: Optional[str]):
        self._secret = secret or None

    @property
    def configured(self) -> bool:
        return self._secret is not None

    def authorized(self, presented: Optional[str]) -> bool:
        """
        Check a presented secret in constant time.

        Args:
            presented: Secret taken from the request, or None

        Returns:
            True if it matches the configured secret

        Raises:
            AdminSecretNotConfiguredError: If no secret is configured
        """
        if self._secret is None:
            raise AdminSecretNotConfiguredError()
        if not presented:
            return False
        return secrets.compare_digest(presented.encode(), self._secret.encode())
