"""Request and result contracts for the language service clients.

Request-side models reject unknown fields and blank values.
Response-side models ignore unknown fields: the service adds fields across
API versions and the conversation result is an open union keyed by "kind".
"""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import urlsplit

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

DEFAULT_CONVERSATION_ID = "1"
DEFAULT_PARTICIPANT_ID = "1"
STRING_INDEX_TYPE = "Utf16CodeUnit"

_LOCAL_HOSTS = {"localhost", "127.0.0.1", "::1"}


def _not_blank(value: str, field_name: str) -> str:
    raw = (value or "").strip()
    if not raw:
        raise ValueError(f"{field_name} must not be empty")
    return raw


class ServiceEndpoint(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    uri: str
    api_key: str = Field(repr=False)

    @field_validator("uri")
    @classmethod
    def validate_uri(cls, value: str) -> str:
        raw = _not_blank(value, "endpoint uri")
        parts = urlsplit(raw)
        if not parts.scheme or not parts.netloc:
            raise ValueError("endpoint uri must be absolute")
        if parts.scheme == "http" and parts.hostname in _LOCAL_HOSTS:
            return raw.rstrip("/")
        if parts.scheme != "https":
            raise ValueError("endpoint uri must use https")
        return raw.rstrip("/")

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, value: str) -> str:
        return _not_blank(value, "api key")


class ProjectReference(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    project_name: str
    deployment_name: str

    @field_validator("project_name", "deployment_name")
    @classmethod
    def validate_names(cls, value: str) -> str:
        return _not_blank(value, "project/deployment name")


class AnswersQuery(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    question: str
    top: Optional[int] = Field(default=None, ge=1, le=50)
    confidence_threshold: Optional[float] = Field(default=None, ge=0.0, le=1.0)

    @field_validator("question")
    @classmethod
    def validate_question(cls, value: str) -> str:
        return _not_blank(value, "question")

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"question": self.question}
        if self.top is not None:
            body["top"] = self.top
        if self.confidence_threshold is not None:
            body["confidenceScoreThreshold"] = self.confidence_threshold
        return body


class ConversationQuery(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    utterance: str
    conversation_id: str = DEFAULT_CONVERSATION_ID
    participant_id: str = DEFAULT_PARTICIPANT_ID
    language: Optional[str] = None

    @field_validator("utterance")
    @classmethod
    def validate_utterance(cls, value: str) -> str:
        return _not_blank(value, "utterance")

    @field_validator("conversation_id", "participant_id")
    @classmethod
    def validate_ids(cls, value: str) -> str:
        return _not_blank(value, "conversation/participant id")

    def to_body(self, project: ProjectReference) -> dict[str, Any]:
        item: dict[str, Any] = {
            "id": self.conversation_id,
            "participantId": self.participant_id,
            "text": self.utterance,
        }
        if self.language:
            item["language"] = self.language
        return {
            "kind": "Conversation",
            "analysisInput": {"conversationItem": item},
            "parameters": {
                "projectName": project.project_name,
                "deploymentName": project.deployment_name,
                "stringIndexType": STRING_INDEX_TYPE,
            },
        }


class KnowledgeBaseAnswer(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    answer: str
    confidence: float = Field(
        ge=0.0,
        le=1.0,
        validation_alias=AliasChoices("confidenceScore", "confidence"),
    )
    source: str = ""
    id: Optional[int] = None
    questions: tuple[str, ...] = ()
    metadata: dict[str, str] = Field(default_factory=dict)


class AnswersResult(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    answers: tuple[KnowledgeBaseAnswer, ...]


class IntentScore(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    category: str
    confidence: float = Field(validation_alias=AliasChoices("confidenceScore", "confidence"))


class IntentResult(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    top_intent: str = Field(min_length=1)
    project_kind: str = Field(min_length=1)
    query: Optional[str] = None
    intents: tuple[IntentScore, ...] = ()
