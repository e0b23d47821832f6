"""Combined flow: classify the utterance, then ask the knowledge base."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from langsvc.adapters.conversation_client import ConversationAnalysisClient
from langsvc.adapters.question_answering_client import QuestionAnsweringClient
from langsvc.models.language import (
    DEFAULT_CONVERSATION_ID,
    DEFAULT_PARTICIPANT_ID,
    AnswersResult,
    IntentResult,
    ProjectReference,
)


@dataclass(frozen=True)
class AssistantReply:
    intent: IntentResult
    answers: AnswersResult


class LanguageAssistant:
    def __init__(
        self,
        conversation_client: ConversationAnalysisClient,
        conversation_project: ProjectReference,
        answers_client: QuestionAnsweringClient,
        answers_project: ProjectReference,
    ) -> None:
        self._conversations = conversation_client
        self._conversation_project = conversation_project
        self._answers = answers_client
        self._answers_project = answers_project

    def ask(
        self,
        text: str,
        conversation_id: str = DEFAULT_CONVERSATION_ID,
        participant_id: str = DEFAULT_PARTICIPANT_ID,
        language: Optional[str] = None,
    ) -> AssistantReply:
        # Calls run one after the other; a failure in the first skips the second.
        intent = self._conversations.analyze_conversation(
            text,
            self._conversation_project,
            conversation_id=conversation_id,
            participant_id=participant_id,
            language=language,
        )
        answers = self._answers.get_answers(text, self._answers_project)
        return AssistantReply(intent=intent, answers=answers)
