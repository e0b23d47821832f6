"""API key resolution.

Lookup order: explicit value, environment variable, OS credential store.

Accounts in OS store:
- questionanswering_key
- conversations_key
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from langsvc.secrets.base import SecretStoreError
from langsvc.secrets.keyring_store import create_secret_store


@dataclass(frozen=True)
class KeySource:
    env_var: str
    account: str


QUESTION_ANSWERING_KEY = KeySource(env_var="QUESTIONANSWERING_KEY", account="questionanswering_key")
CONVERSATIONS_KEY = KeySource(env_var="CONVERSATIONS_KEY", account="conversations_key")


def resolve_api_key(
    source: KeySource,
    explicit: Optional[str] = None,
    service_name: str = "langsvc",
) -> str:
    value = (explicit or "").strip()
    if value:
        return value

    value = os.getenv(source.env_var, "").strip()
    if value:
        return value

    store = create_secret_store(service_name=service_name)
    try:
        value = store.get_secret(source.account)
    except SecretStoreError as exc:
        raise SecretStoreError(
            f"API key not found: pass --key, set {source.env_var}, or store account "
            f"'{source.account}' under service '{service_name}' ({exc})"
        ) from exc
    return value.strip()


__all__ = [
    "CONVERSATIONS_KEY",
    "KeySource",
    "QUESTION_ANSWERING_KEY",
    "SecretStoreError",
    "resolve_api_key",
]
