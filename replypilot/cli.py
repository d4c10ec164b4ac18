"""
Command-line entry points.

Examples:
  replypilot scan saved_feed.html --click 1 --out annotated.html
  replypilot comments --tone analytical
  replypilot post "Remote onboarding" --tone friendly
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from replypilot.generate import SuggestionGenerator, build_model_client
from replypilot.log import configure_logging
from replypilot.popup import PopupSession
from replypilot.render import RenderedView
from replypilot.settings import settings
from replypilot.storage import SharedStore
from replypilot.watch import FeedWatcher, HostDocument, extract_post_text


def _print_view(view: RenderedView) -> int:
    if view.status:
        prefix = "!" if view.status.is_error else "i"
        print(f"[{prefix}] {view.status.message}")
    if view.alert:
        print(view.alert)
        return 1
    for i, card in enumerate(view.cards, start=1):
        print(f"{i:>2}. {card.text}")
    return 0 if view.cards else 1


def cmd_scan(args: argparse.Namespace, store: SharedStore) -> int:
    doc = HostDocument.from_file(args.page)
    watcher = FeedWatcher(doc, store, min_text_chars=settings.MIN_EXTRACTED_CHARS)
    controls = watcher.start()
    print(f"Injected {len(controls)} trigger(s) into {args.page}")
    for i, control in enumerate(controls, start=1):
        preview = extract_post_text(control.container)[:100].replace("\n", " ")
        print(f"{i:>2}. {preview}")

    if args.click is not None:
        if not 1 <= args.click <= len(controls):
            print(f"--click must be between 1 and {len(controls)}", file=sys.stderr)
            return 2
        text = watcher.activate(controls[args.click - 1].button)
        print(f"Stored post text ({len(text)} chars)")

    if args.out:
        Path(args.out).write_text(str(doc.soup), encoding="utf-8")
        print(f"Wrote {args.out}")
    watcher.stop()
    return 0


def _session(args: argparse.Namespace, store: SharedStore) -> PopupSession:
    session = PopupSession(store, SuggestionGenerator(model_client=build_model_client(settings)))
    session.load()
    if args.tone:
        session.set_tone(args.tone)
    return session


def cmd_comments(args: argparse.Namespace, store: SharedStore) -> int:
    session = _session(args, store)
    if args.text:
        session.post_text = args.text
    return _print_view(session.generate_comments())


def cmd_post(args: argparse.Namespace, store: SharedStore) -> int:
    session = _session(args, store)
    state = session.topic_state(args.topic)
    if state.over_limit:
        print(f"Topic is {state.length} chars, limit is {settings.MAX_POST_CHARS}", file=sys.stderr)
        return 2
    return _print_view(session.generate_post(args.topic))


def _parse_args(argv: List[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="replypilot", description="Feed watcher and reply generator.")
    p.add_argument("--store", default=settings.STORE_PATH, help="Shared store (SQLite file)")
    p.add_argument("--log-level", default=settings.LOG_LEVEL)
    sub = p.add_subparsers(dest="command", required=True)

    s = sub.add_parser("scan", help="Inject triggers into a saved feed page")
    s.add_argument("page", help="HTML file of the feed")
    s.add_argument("--click", type=int, help="Activate the Nth injected trigger (1-based)")
    s.add_argument("--out", help="Write the page with injected triggers here")
    s.set_defaults(func=cmd_scan)

    c = sub.add_parser("comments", help="Comment suggestions for the stored post")
    c.add_argument("--text", help="Use this text instead of the stored post")
    c.add_argument("--tone")
    c.set_defaults(func=cmd_comments)

    d = sub.add_parser("post", help="Draft a post on a topic")
    d.add_argument("topic")
    d.add_argument("--tone")
    d.set_defaults(func=cmd_post)
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(args.log_level)
    store = SharedStore(args.store)
    try:
        return args.func(args, store)
    finally:
        store.close()


if __name__ == "__main__":
    sys.exit(main())
