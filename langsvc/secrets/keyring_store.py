"""OS credential store adapter (Keychain, Credential Manager, Secret Service)."""

from __future__ import annotations

import importlib
import platform

from langsvc.secrets.base import SecretStore, SecretStoreError

_BACKEND_LABELS = {
    "darwin": "Keychain",
    "windows": "Credential Manager",
    "linux": "Secret Service",
}


class KeyringSecretStore(SecretStore):
    def __init__(self, service_name: str) -> None:
        self._service_name = service_name
        self._label = _BACKEND_LABELS.get(platform.system().lower(), "credential store")
        try:
            self._keyring = importlib.import_module("keyring")
        except Exception as exc:  # pragma: no cover - import guarded at runtime
            raise SecretStoreError(f"keyring package is required for {self._label} access") from exc

    @property
    def label(self) -> str:
        return self._label

    def get_secret(self, account: str) -> str:
        try:
            value = self._keyring.get_password(self._service_name, account)
        except Exception as exc:
            raise SecretStoreError(f"failed to read {self._label} secret '{account}'") from exc
        if not value:
            raise SecretStoreError(f"missing {self._label} secret '{account}'")
        return value


def create_secret_store(service_name: str = "langsvc") -> SecretStore:
    return KeyringSecretStore(service_name=service_name)
