"""Question answering adapter: query a deployed knowledge base."""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import urlencode

from pydantic import ValidationError

from langsvc.adapters.errors import MalformedResponseError
from langsvc.adapters.language_http import AUTH_HEADER, Transport, UrllibTransport, post_json
from langsvc.models.language import AnswersQuery, AnswersResult, ProjectReference, ServiceEndpoint

QUERY_KNOWLEDGEBASES_ROUTE = "/language/:query-knowledgebases"
QUESTION_ANSWERING_API_VERSION = "2021-10-01"

LOGGER = logging.getLogger(__name__)


class QuestionAnsweringClient:
    def __init__(
        self,
        endpoint: ServiceEndpoint,
        transport: Optional[Transport] = None,
        api_version: str = QUESTION_ANSWERING_API_VERSION,
        route: str = QUERY_KNOWLEDGEBASES_ROUTE,
        auth_header: str = AUTH_HEADER,
        timeout_seconds: int = 30,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._endpoint = endpoint
        self._transport = transport or UrllibTransport(endpoint.uri, timeout_seconds=timeout_seconds)
        self._api_version = api_version
        self._route = route
        self._auth_header = auth_header
        self._logger = logger or LOGGER

    def get_answers(
        self,
        question: str,
        project: ProjectReference,
        top: Optional[int] = None,
        confidence_threshold: Optional[float] = None,
    ) -> AnswersResult:
        query = AnswersQuery(question=question, top=top, confidence_threshold=confidence_threshold)
        path = self._route + "?" + urlencode(
            {
                "projectName": project.project_name,
                "deploymentName": project.deployment_name,
                "api-version": self._api_version,
            }
        )
        payload = post_json(
            self._transport,
            path=path,
            body=query.to_body(),
            api_key=self._endpoint.api_key,
            auth_header=self._auth_header,
            operation="query-knowledgebases",
            logger=self._logger,
        )
        return parse_answers(payload)


def parse_answers(payload: dict[str, Any]) -> AnswersResult:
    answers = payload.get("answers")
    if not isinstance(answers, list):
        raise MalformedResponseError("query-knowledgebases response missing answers array")
    try:
        return AnswersResult.model_validate({"answers": answers})
    except ValidationError as exc:
        raise MalformedResponseError(f"query-knowledgebases answer has unexpected shape: {exc}") from exc


def get_answers(
    endpoint: ServiceEndpoint,
    project: ProjectReference,
    question: str,
    transport: Optional[Transport] = None,
) -> AnswersResult:
    return QuestionAnsweringClient(endpoint, transport=transport).get_answers(question, project)
