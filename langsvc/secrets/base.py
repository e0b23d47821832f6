"""SecretStore abstractions.

API keys come from the command line, the environment, or the OS credential store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class SecretStoreError(RuntimeError):
    """Raised when an API key cannot be resolved."""


class SecretStore(ABC):
    """Credential store interface."""

    @abstractmethod
    def get_secret(self, account: str) -> str:
        """Return secret value for an account or raise SecretStoreError."""
