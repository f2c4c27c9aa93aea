from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Callable, Dict, Optional, Sequence, TextIO

from pydantic import ValidationError

from paperchat.api import create_session
from paperchat.config import ChatConfig
from paperchat.core.events import (
    AssistantReply,
    ContextSwitched,
    CriticalContextFailure,
    DisambiguationNeeded,
    PaperListWarning,
    RequestFailed,
    SessionEvent,
    WelcomeMessage,
)
from paperchat.core.models import PERSONAL_CONTEXT_ID
from paperchat.services.conversation_service import ConversationSession

HELP_TEXT = """\
Commands:
  /new            start a new chat (history is cleared, cached papers are kept)
  /papers         list the available papers
  /use <id>       talk about a paper, or 'personal' for the profile
  /history        show this chat's exchanges
  /help           show this message
  /quit           leave
"""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paperchat",
        description="Ask questions about a personal profile or one of its research papers.",
    )
    parser.add_argument("--endpoint", help="Chat completion endpoint URL")
    parser.add_argument("--model", help="Model name sent to the endpoint")
    parser.add_argument("--feed", help="Locator of the paper list JSON feed")
    parser.add_argument("--context", help="Locator of the personal context text")
    parser.add_argument("--root", help="Directory that relative locators are read from")
    parser.add_argument("--base-url", help="Base URL that relative locators are fetched from")
    parser.add_argument("--temperature", type=float, help="Sampling temperature")
    parser.add_argument("--max-tokens", type=int, help="Maximum tokens in a reply")
    parser.add_argument(
        "--no-auto-route",
        action="store_true",
        help="Never switch to a paper automatically",
    )
    parser.add_argument(
        "-m",
        "--message",
        action="append",
        default=[],
        help="Send this message and exit (may be repeated)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _config_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    mapping = {
        "completion_url": args.endpoint,
        "model": args.model,
        "documents_feed": args.feed,
        "personal_context": args.context,
        "content_root": args.root,
        "content_base_url": args.base_url,
        "temperature": args.temperature,
        "max_tokens": args.max_tokens,
    }
    overrides = {key: value for key, value in mapping.items() if value is not None}
    if args.no_auto_route:
        overrides["auto_route"] = False
    return overrides


def make_printer(out: TextIO) -> Callable[[SessionEvent], None]:
    """Return a listener rendering session events as plain text."""

    def _print(event: SessionEvent) -> None:
        if isinstance(event, (WelcomeMessage, AssistantReply, DisambiguationNeeded)):
            text = event.content
        elif isinstance(event, ContextSwitched):
            text = f"[context] {event.message}"
        elif isinstance(event, CriticalContextFailure):
            text = f"Critical Error: {event.message}"
        elif isinstance(event, PaperListWarning):
            text = f"Warning: {event.message}"
        elif isinstance(event, RequestFailed):
            text = f"Error: {event.message}"
        else:
            text = repr(event)
        print(text, file=out)
        print(file=out)

    return _print


def _print_papers(session: ConversationSession, out: TextIO) -> None:
    marker = "*" if session.active_context_id == PERSONAL_CONTEXT_ID else " "
    print(f"{marker} {PERSONAL_CONTEXT_ID}: Personal Context", file=out)
    for document in session.documents:
        marker = "*" if session.active_context_id == document.id else " "
        print(f"{marker} {document.id}: {document.title}", file=out)


def _print_history(session: ConversationSession, out: TextIO) -> None:
    if not session.history:
        print("(no exchanges yet)", file=out)
    for turn in session.history:
        print(f"{turn.role}: {turn.content}", file=out)


def _handle_command(session: ConversationSession, line: str, out: TextIO) -> bool:
    """Run a slash command; return ``False`` when the REPL should stop."""

    command, _, argument = line.partition(" ")
    argument = argument.strip()
    if command in {"/quit", "/exit"}:
        return False
    if command == "/new":
        session.start()
    elif command == "/papers":
        _print_papers(session, out)
    elif command == "/use":
        if not argument:
            print("Usage: /use <paper id | personal>", file=out)
        else:
            session.select_context(argument)
    elif command == "/history":
        _print_history(session, out)
    else:
        print(HELP_TEXT, file=out)
    return True


def run_repl(
    session: ConversationSession,
    *,
    input_fn: Callable[[str], str] = input,
    out: TextIO = sys.stdout,
) -> None:
    while True:
        try:
            line = input_fn(f"[{session.context_label()}] > ").strip()
        except (EOFError, KeyboardInterrupt):
            print(file=out)
            return
        if not line:
            continue
        if line.startswith("/"):
            if not _handle_command(session, line, out):
                return
            continue
        session.send(line)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ChatConfig(**_config_overrides(args))
    except ValidationError as exc:
        parser.error(str(exc))

    out = sys.stdout
    session = create_session(config, listeners=[make_printer(out)])
    session.start()
    session.load_documents()

    if args.message:
        failed = False
        for message in args.message:
            result = session.send(message)
            failed = failed or result.error is not None
        return 1 if failed else 0

    print(HELP_TEXT, file=out)
    run_repl(session, out=out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
