from langsvc.console.templates import answers_text, asking_text, intent_text
from langsvc.models.language import AnswersResult, IntentResult, IntentScore, KnowledgeBaseAnswer


def test_answers_text_formats_percent_and_source() -> None:
    result = AnswersResult(
        answers=(KnowledgeBaseAnswer(answer="Up to 12 hours", confidence=0.91, source="faq.md"),)
    )
    assert answers_text(result) == "(91.00%) Up to 12 hours\nSource: faq.md\n\n"


def test_answers_text_empty() -> None:
    assert answers_text(AnswersResult(answers=())) == "No answers returned.\n"


def test_asking_text_colors_question() -> None:
    assert asking_text("q?") == "Asking: \x1b[32mq?\x1b[m"
    assert asking_text("q?", color=False) == "Asking: q?"


def test_intent_text_lists_scores() -> None:
    result = IntentResult(
        top_intent="email",
        project_kind="Conversation",
        intents=(IntentScore(category="email", confidence=0.5),),
    )
    text = intent_text(result, color=False)
    assert "Top intent: email" in text
    assert "Project kind: Conversation" in text
    assert "(50.00%) email" in text
