"""Conversation analysis adapter: classify the intent of one utterance.

The service answers with a result envelope whose shape depends on the
project kind (conversation, orchestration, ...). Only the prediction fields
shared by every kind are decoded; everything else is ignored.
"""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import urlencode

from pydantic import ValidationError

from langsvc.adapters.errors import MalformedResponseError
from langsvc.adapters.language_http import AUTH_HEADER, Transport, UrllibTransport, post_json
from langsvc.models.language import (
    DEFAULT_CONVERSATION_ID,
    DEFAULT_PARTICIPANT_ID,
    ConversationQuery,
    IntentResult,
    IntentScore,
    ProjectReference,
    ServiceEndpoint,
)

ANALYZE_CONVERSATIONS_ROUTE = "/language/:analyze-conversations"
CONVERSATIONS_API_VERSION = "2022-05-01"

LOGGER = logging.getLogger(__name__)


class ConversationAnalysisClient:
    def __init__(
        self,
        endpoint: ServiceEndpoint,
        transport: Optional[Transport] = None,
        api_version: str = CONVERSATIONS_API_VERSION,
        route: str = ANALYZE_CONVERSATIONS_ROUTE,
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

    def analyze_conversation(
        self,
        utterance: str,
        project: ProjectReference,
        conversation_id: str = DEFAULT_CONVERSATION_ID,
        participant_id: str = DEFAULT_PARTICIPANT_ID,
        language: Optional[str] = None,
    ) -> IntentResult:
        query = ConversationQuery(
            utterance=utterance,
            conversation_id=conversation_id or DEFAULT_CONVERSATION_ID,
            participant_id=participant_id or DEFAULT_PARTICIPANT_ID,
            language=language,
        )
        path = self._route + "?" + urlencode({"api-version": self._api_version})
        payload = post_json(
            self._transport,
            path=path,
            body=query.to_body(project),
            api_key=self._endpoint.api_key,
            auth_header=self._auth_header,
            operation="analyze-conversations",
            logger=self._logger,
        )
        result = parse_intent(payload)
        kind = payload.get("kind")
        if kind != "ConversationResult":
            self._logger.debug("decoded prediction from unrecognized result kind=%s", kind)
        return result


def parse_intent(payload: dict[str, Any]) -> IntentResult:
    result = payload.get("result")
    prediction = result.get("prediction") if isinstance(result, dict) else None
    if not isinstance(prediction, dict):
        raise MalformedResponseError("analyze-conversations response missing result.prediction")

    top_intent = prediction.get("topIntent")
    project_kind = prediction.get("projectKind")
    if not isinstance(top_intent, str) or not top_intent:
        raise MalformedResponseError("analyze-conversations prediction missing topIntent")
    if not isinstance(project_kind, str) or not project_kind:
        raise MalformedResponseError("analyze-conversations prediction missing projectKind")

    query = result.get("query")
    return IntentResult(
        top_intent=top_intent,
        project_kind=project_kind,
        query=query if isinstance(query, str) else None,
        intents=_scored_intents(prediction.get("intents")),
    )


def _scored_intents(raw: Any) -> tuple[IntentScore, ...]:
    # Orchestration projects report intents as an object keyed by name; only the list form is scored.
    if not isinstance(raw, list):
        return ()
    scores: list[IntentScore] = []
    for idx, item in enumerate(raw):
        try:
            scores.append(IntentScore.model_validate(item))
        except ValidationError as exc:
            raise MalformedResponseError(
                f"analyze-conversations prediction.intents[{idx}] has unexpected shape: {exc}"
            ) from exc
    return tuple(scores)


def analyze_conversation(
    endpoint: ServiceEndpoint,
    project: ProjectReference,
    utterance: str,
    conversation_id: str = DEFAULT_CONVERSATION_ID,
    participant_id: str = DEFAULT_PARTICIPANT_ID,
    transport: Optional[Transport] = None,
) -> IntentResult:
    client = ConversationAnalysisClient(endpoint, transport=transport)
    return client.analyze_conversation(
        utterance,
        project,
        conversation_id=conversation_id,
        participant_id=participant_id,
    )
