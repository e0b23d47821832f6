"""Settings loader for the language service samples."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml


@dataclass(frozen=True)
class RouteConfig:
    route: str
    api_version: str


@dataclass(frozen=True)
class ServiceConfig:
    auth_header: str
    timeout_seconds: int
    question_answering: RouteConfig
    conversations: RouteConfig


@dataclass(frozen=True)
class DefaultsConfig:
    deployment: str
    question: str
    utterance: str
    conversation_id: str
    participant_id: str
    language: Optional[str]


@dataclass(frozen=True)
class SecretsConfig:
    service_name: str


@dataclass(frozen=True)
class LanguageSettings:
    version: str
    service: ServiceConfig
    defaults: DefaultsConfig
    secrets: SecretsConfig


class SettingsLoadError(RuntimeError):
    """Raised when settings cannot be loaded."""


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise SettingsLoadError(f"missing required settings key: {key}")
    return data[key]


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise SettingsLoadError(f"{key} must be an object")
    return value


def _non_empty(value: Any, name: str) -> str:
    text = str(value if value is not None else "").strip()
    if not text:
        raise SettingsLoadError(f"{name} must not be empty")
    return text


def _route(raw: dict[str, Any], name: str) -> RouteConfig:
    route = _non_empty(_require(raw, "route"), f"service.{name}.route")
    if not route.startswith("/"):
        raise SettingsLoadError(f"service.{name}.route must start with '/'")
    return RouteConfig(
        route=route,
        api_version=_non_empty(_require(raw, "api_version"), f"service.{name}.api_version"),
    )


def load_settings(path: Path) -> LanguageSettings:
    if not path.exists():
        raise SettingsLoadError(f"settings file not found: {path}")

    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise SettingsLoadError("settings root must be an object")

    service_raw = _section(raw, "service")
    defaults_raw = _section(raw, "defaults")
    secrets_raw = _section(raw, "secrets")

    try:
        timeout_seconds = int(service_raw.get("timeout_seconds", 30))
    except (TypeError, ValueError) as exc:
        raise SettingsLoadError("service.timeout_seconds must be an integer") from exc
    if timeout_seconds <= 0:
        raise SettingsLoadError("service.timeout_seconds must be > 0")

    language = defaults_raw.get("language")
    language = str(language).strip() if language else None

    return LanguageSettings(
        version=str(_require(raw, "version")),
        service=ServiceConfig(
            auth_header=_non_empty(service_raw.get("auth_header", "Ocp-Apim-Subscription-Key"), "service.auth_header"),
            timeout_seconds=timeout_seconds,
            question_answering=_route(_section(service_raw, "question_answering"), "question_answering"),
            conversations=_route(_section(service_raw, "conversations"), "conversations"),
        ),
        defaults=DefaultsConfig(
            deployment=_non_empty(defaults_raw.get("deployment", "test"), "defaults.deployment"),
            question=_non_empty(defaults_raw.get("question", ""), "defaults.question"),
            utterance=_non_empty(defaults_raw.get("utterance", ""), "defaults.utterance"),
            conversation_id=_non_empty(defaults_raw.get("conversation_id", "1"), "defaults.conversation_id"),
            participant_id=_non_empty(defaults_raw.get("participant_id", "1"), "defaults.participant_id"),
            language=language or None,
        ),
        secrets=SecretsConfig(
            service_name=_non_empty(secrets_raw.get("service_name", "langsvc"), "secrets.service_name"),
        ),
    )
