"""Console output templates for the sample commands."""

from __future__ import annotations

from langsvc.core.assistant import AssistantReply
from langsvc.models.language import AnswersResult, IntentResult

GREEN = "\x1b[32m"
RESET = "\x1b[m"


def _highlight(text: str, color: bool) -> str:
    return f"{GREEN}{text}{RESET}" if color else text


def asking_text(question: str, color: bool = True) -> str:
    return f"Asking: {_highlight(question, color)}"


def analyzing_text(utterance: str, color: bool = True) -> str:
    return f"Analyzing: {_highlight(utterance, color)}"


def answers_text(result: AnswersResult) -> str:
    if not result.answers:
        return "No answers returned.\n"
    lines: list[str] = []
    for answer in result.answers:
        lines.append(f"({answer.confidence:.2%}) {answer.answer}")
        lines.append(f"Source: {answer.source}")
        lines.append("")
    return "\n".join(lines) + "\n"


def intent_text(result: IntentResult, color: bool = True) -> str:
    lines = [
        f"Top intent: {_highlight(result.top_intent, color)}",
        f"Project kind: {result.project_kind}",
    ]
    for score in result.intents:
        lines.append(f"  ({score.confidence:.2%}) {score.category}")
    return "\n".join(lines) + "\n"


def reply_text(reply: AssistantReply, color: bool = True) -> str:
    return intent_text(reply.intent, color=color) + "\n" + answers_text(reply.answers)
