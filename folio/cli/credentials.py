"""
Token persistence for the CLI using the OS keychain.

The library client keeps its token in memory only; the CLI saves it here
between invocations, one entry per profile.
"""

import logging

import keyring
import keyring.errors

logger = logging.getLogger(__name__)


class TokenStore:
    """Saved bearer token per profile, backed by ``keyring``."""

    SERVICE_NAME = "folio"
    DEFAULT_PROFILE = "default"

    def __init__(self, profile: str = DEFAULT_PROFILE):
        self.profile = profile

    @property
    def _username(self) -> str:
        return f"{self.profile}_token"

    def load(self) -> str | None:
        try:
            return keyring.get_password(self.SERVICE_NAME, self._username) or None
        except keyring.errors.KeyringError as e:
            logger.warning("Could not read saved token: %s", e)
            return None

    def save(self, token: str) -> bool:
        """
        Save the token to the keychain.

        Returns:
            True if saved, False if the keychain refused
        """
        try:
            keyring.set_password(self.SERVICE_NAME, self._username, token)
            return True
        except keyring.errors.KeyringError as e:
            logger.warning("Could not save token: %s", e)
            return False

    def delete(self) -> None:
        try:
            keyring.delete_password(self.SERVICE_NAME, self._username)
        except keyring.errors.PasswordDeleteError:
            # Nothing was saved
            return
