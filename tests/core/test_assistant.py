import json

import pytest

from langsvc.adapters.conversation_client import ConversationAnalysisClient
from langsvc.adapters.errors import NotFoundError
from langsvc.adapters.language_http import HttpResponse
from langsvc.adapters.question_answering_client import QuestionAnsweringClient
from langsvc.core.assistant import LanguageAssistant
from langsvc.models.language import ProjectReference, ServiceEndpoint

ENDPOINT = ServiceEndpoint(uri="https://example.cognitiveservices.azure.com", api_key="k")


class _ScriptedTransport:
    def __init__(self, responses: list[HttpResponse]) -> None:
        self._responses = list(responses)
        self.paths: list[str] = []

    def send(self, path: str, body: dict, headers: dict) -> HttpResponse:
        self.paths.append(path)
        return self._responses.pop(0)


def _assistant(transport: _ScriptedTransport) -> LanguageAssistant:
    return LanguageAssistant(
        conversation_client=ConversationAnalysisClient(ENDPOINT, transport=transport),
        conversation_project=ProjectReference(project_name="clu", deployment_name="test"),
        answers_client=QuestionAnsweringClient(ENDPOINT, transport=transport),
        answers_project=ProjectReference(project_name="faq", deployment_name="test"),
    )


def test_ask_runs_analysis_then_answers() -> None:
    transport = _ScriptedTransport(
        [
            HttpResponse(200, '{"result":{"prediction":{"topIntent":"Battery","projectKind":"Conversation"}}}'),
            HttpResponse(200, json.dumps({"answers": [{"answer": "Up to 12 hours", "confidenceScore": 0.91, "source": "faq.md"}]})),
        ]
    )

    reply = _assistant(transport).ask("How long should my battery last?")

    assert reply.intent.top_intent == "Battery"
    assert reply.answers.answers[0].answer == "Up to 12 hours"
    assert transport.paths[0].startswith("/language/:analyze-conversations")
    assert transport.paths[1].startswith("/language/:query-knowledgebases")


def test_ask_stops_after_failed_analysis() -> None:
    transport = _ScriptedTransport([HttpResponse(404, "")])

    with pytest.raises(NotFoundError):
        _assistant(transport).ask("hello")
    assert len(transport.paths) == 1
