"""Language service sample command-line entrypoint."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from langsvc.adapters.client_factory import (
    ClientFactoryError,
    build_endpoint,
    build_project,
    create_conversation_client,
    create_question_answering_client,
)
from langsvc.adapters.errors import LanguageServiceError
from langsvc.adapters.language_http import Transport
from langsvc.config.secrets import CONVERSATIONS_KEY, QUESTION_ANSWERING_KEY, resolve_api_key
from langsvc.config.settings import LanguageSettings, SettingsLoadError, load_settings
from langsvc.console.debug_log import debug_logging
from langsvc.console.templates import analyzing_text, answers_text, asking_text, intent_text, reply_text
from langsvc.core.assistant import LanguageAssistant
from langsvc.secrets.base import SecretStoreError

LOGGER = logging.getLogger(__name__)


BUNDLED_SETTINGS_PATH = Path(__file__).resolve().parent / "config" / "language.yaml"


def _default_settings_path() -> Path:
    raw = os.getenv("LANGSVC_CONFIG_PATH", "").strip()
    if raw:
        return Path(raw)
    return BUNDLED_SETTINGS_PATH


def _add_common(parser: argparse.ArgumentParser, endpoint_env: str, project_env: str, key_env: str) -> None:
    parser.add_argument(
        "endpoint",
        nargs="?",
        default=os.getenv(endpoint_env),
        help=f"The Cognitive Services endpoint URI. The default is the {endpoint_env} environment variable, if set.",
    )
    parser.add_argument(
        "-k",
        "--key",
        help=f"Shared API key. The default is the {key_env} environment variable or the OS credential store.",
    )
    parser.add_argument(
        "-p",
        "--project",
        default=os.getenv(project_env),
        help=f"The project to query. The default is the {project_env} environment variable, if set.",
    )
    parser.add_argument("--deployment", help="The deployment to query. The default comes from settings (\"test\").")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cognitive Service - Language sample application for testing new releases.")
    parser.add_argument("--config", help="settings file (default: LANGSVC_CONFIG_PATH or the bundled language.yaml)")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("answers", help="Ask a question against a knowledge base project")
    _add_common(p, "QUESTIONANSWERING_ENDPOINT", "QUESTIONANSWERING_PROJECT", "QUESTIONANSWERING_KEY")
    p.add_argument("--question", help="The question to ask. The default comes from settings.")
    p.add_argument("--top", type=int, help="Maximum number of answers to return.")
    p.add_argument("--threshold", type=float, help="Minimum confidence score of returned answers.")
    p.set_defaults(func=cmd_answers)

    p = sub.add_parser("conversation", help="Classify the intent of an utterance")
    _add_common(p, "CONVERSATIONS_ENDPOINT", "CONVERSATIONS_PROJECT", "CONVERSATIONS_KEY")
    p.add_argument("--utterance", help="The utterance to analyze. The default comes from settings.")
    p.add_argument("--conversation-id", help="Conversation item id (default: \"1\").")
    p.add_argument("--participant-id", help="Participant id (default: \"1\").")
    p.add_argument("--language", help="Utterance language, e.g. en.")
    p.set_defaults(func=cmd_conversation)

    p = sub.add_parser("ask", help="Classify an utterance, then ask the knowledge base the same text")
    _add_common(p, "QUESTIONANSWERING_ENDPOINT", "QUESTIONANSWERING_PROJECT", "QUESTIONANSWERING_KEY")
    p.add_argument("--text", help="The text to analyze and ask. The default is the settings question.")
    p.add_argument(
        "--conversations-endpoint",
        default=os.getenv("CONVERSATIONS_ENDPOINT"),
        help="Conversations endpoint URI (default: CONVERSATIONS_ENDPOINT, else the answers endpoint).",
    )
    p.add_argument("--conversations-key", help="Conversations API key (default: CONVERSATIONS_KEY or OS store).")
    p.add_argument(
        "--conversations-project",
        default=os.getenv("CONVERSATIONS_PROJECT"),
        help="Conversations project (default: CONVERSATIONS_PROJECT).",
    )
    p.add_argument("--conversations-deployment", help="Conversations deployment (default from settings).")
    p.set_defaults(func=cmd_ask)

    return parser


def cmd_answers(args: argparse.Namespace, settings: LanguageSettings, transport: Optional[Transport]) -> int:
    key = resolve_api_key(QUESTION_ANSWERING_KEY, explicit=args.key, service_name=settings.secrets.service_name)
    endpoint = build_endpoint(args.endpoint, key)
    project = build_project(args.project, args.deployment or settings.defaults.deployment)
    client = create_question_answering_client(settings, endpoint, transport=transport)

    question = args.question or settings.defaults.question
    print(asking_text(question))
    result = client.get_answers(question, project, top=args.top, confidence_threshold=args.threshold)
    sys.stdout.write(answers_text(result))
    return 0


def cmd_conversation(args: argparse.Namespace, settings: LanguageSettings, transport: Optional[Transport]) -> int:
    key = resolve_api_key(CONVERSATIONS_KEY, explicit=args.key, service_name=settings.secrets.service_name)
    endpoint = build_endpoint(args.endpoint, key)
    project = build_project(args.project, args.deployment or settings.defaults.deployment)
    client = create_conversation_client(settings, endpoint, transport=transport)

    utterance = args.utterance or settings.defaults.utterance
    print(analyzing_text(utterance))
    result = client.analyze_conversation(
        utterance,
        project,
        conversation_id=args.conversation_id or settings.defaults.conversation_id,
        participant_id=args.participant_id or settings.defaults.participant_id,
        language=args.language or settings.defaults.language,
    )
    sys.stdout.write(intent_text(result))
    return 0


def cmd_ask(args: argparse.Namespace, settings: LanguageSettings, transport: Optional[Transport]) -> int:
    service_name = settings.secrets.service_name
    qna_key = resolve_api_key(QUESTION_ANSWERING_KEY, explicit=args.key, service_name=service_name)
    qna_endpoint = build_endpoint(args.endpoint, qna_key)

    if args.conversations_key or args.conversations_endpoint:
        conv_key = resolve_api_key(CONVERSATIONS_KEY, explicit=args.conversations_key, service_name=service_name)
        conv_endpoint = build_endpoint(args.conversations_endpoint or args.endpoint, conv_key)
    else:
        conv_endpoint = qna_endpoint

    assistant = LanguageAssistant(
        conversation_client=create_conversation_client(settings, conv_endpoint, transport=transport),
        conversation_project=build_project(
            args.conversations_project,
            args.conversations_deployment or settings.defaults.deployment,
        ),
        answers_client=create_question_answering_client(settings, qna_endpoint, transport=transport),
        answers_project=build_project(args.project, args.deployment or settings.defaults.deployment),
    )

    text = args.text or settings.defaults.question
    print(asking_text(text))
    reply = assistant.ask(
        text,
        conversation_id=settings.defaults.conversation_id,
        participant_id=settings.defaults.participant_id,
        language=settings.defaults.language,
    )
    sys.stdout.write(reply_text(reply))
    return 0


def main(argv: Optional[list[str]] = None, transport: Optional[Transport] = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)
    settings_path = Path(args.config) if args.config else _default_settings_path()

    try:
        settings = load_settings(settings_path)
    except SettingsLoadError as exc:
        LOGGER.error("startup blocked by invalid settings: %s", exc)
        print(f"Startup failed: settings are invalid.\n- settings: {settings_path}\n- detail: {exc}", file=sys.stderr)
        return 2

    with debug_logging(args.debug):
        try:
            return args.func(args, settings, transport)
        except (SecretStoreError, ClientFactoryError, ValueError) as exc:
            LOGGER.error("invalid input: %s", exc)
            print(f"Error: {exc}", file=sys.stderr)
            return 2
        except LanguageServiceError as exc:
            LOGGER.error("%s: %s", type(exc).__name__, exc)
            print(f"Error: {exc}", file=sys.stderr)
            return 1


if __name__ == "__main__":
    raise SystemExit(main())
