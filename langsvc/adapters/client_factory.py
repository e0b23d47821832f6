"""Factory for building language clients from settings."""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from langsvc.adapters.conversation_client import ConversationAnalysisClient
from langsvc.adapters.language_http import Transport
from langsvc.adapters.question_answering_client import QuestionAnsweringClient
from langsvc.config.settings import LanguageSettings
from langsvc.models.language import ProjectReference, ServiceEndpoint


class ClientFactoryError(RuntimeError):
    """Client initialization error."""


def build_endpoint(uri: Optional[str], api_key: Optional[str]) -> ServiceEndpoint:
    if not uri:
        raise ClientFactoryError("endpoint is required (argument or environment variable)")
    try:
        return ServiceEndpoint(uri=uri, api_key=api_key or "")
    except ValidationError as exc:
        reasons = "; ".join(str(err.get("msg", "")) for err in exc.errors())
        raise ClientFactoryError(f"invalid endpoint configuration: {reasons}") from exc


def build_project(project_name: Optional[str], deployment_name: Optional[str]) -> ProjectReference:
    try:
        return ProjectReference(project_name=project_name or "", deployment_name=deployment_name or "")
    except ValidationError as exc:
        raise ClientFactoryError("project and deployment names are required") from exc


def create_question_answering_client(
    settings: LanguageSettings,
    endpoint: ServiceEndpoint,
    transport: Optional[Transport] = None,
    logger: Optional[logging.Logger] = None,
) -> QuestionAnsweringClient:
    return QuestionAnsweringClient(
        endpoint,
        transport=transport,
        api_version=settings.service.question_answering.api_version,
        route=settings.service.question_answering.route,
        auth_header=settings.service.auth_header,
        timeout_seconds=settings.service.timeout_seconds,
        logger=logger,
    )


def create_conversation_client(
    settings: LanguageSettings,
    endpoint: ServiceEndpoint,
    transport: Optional[Transport] = None,
    logger: Optional[logging.Logger] = None,
) -> ConversationAnalysisClient:
    return ConversationAnalysisClient(
        endpoint,
        transport=transport,
        api_version=settings.service.conversations.api_version,
        route=settings.service.conversations.route,
        auth_header=settings.service.auth_header,
        timeout_seconds=settings.service.timeout_seconds,
        logger=logger,
    )
