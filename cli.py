from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Sequence

from advisory_board import (
    ConfigError,
    ToolDispatcher,
    configure_logging,
    default_registry,
    load_config,
)
from advisory_board.personas import persona_roster


def _read_background(background: str | None, background_path: str | None) -> str | None:
    if background_path:
        return Path(background_path).read_text(encoding="utf-8")
    return background


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="advisory-board",
        description="Consult the virtual advisory board from the command line",
        epilog=f"Advisors:\n{persona_roster()}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", action="store_true", help="Print progress to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List every advisor")
    sub.add_parser("tools", help="Print the tool catalog as JSON")

    info = sub.add_parser("info", help="Show one advisor's profile")
    info.add_argument("advisor")

    advise = sub.add_parser("advise", help="Ask a single advisor")
    advise.add_argument("advisor")
    advise.add_argument("--situation", required=True)
    advise.add_argument("--question", default=None)

    meeting = sub.add_parser("meeting", help="Hold a board meeting")
    meeting.add_argument("--topic", required=True)
    background = meeting.add_mutually_exclusive_group(required=True)
    background.add_argument("--background")
    background.add_argument("--background-file", help="Path to a background text file")
    meeting.add_argument(
        "--advisor",
        dest="advisors",
        action="append",
        required=True,
        help="Advisor id; repeat to add more (speaking order is kept)",
    )
    meeting.add_argument("--out", help="Output markdown path", default=None)

    crisis = sub.add_parser("crisis", help="Convene the full board on a crisis")
    crisis.add_argument("--description", required=True)
    crisis.add_argument("--concerns", required=True)

    serve = sub.add_parser("serve", help="Run a transport")
    serve.add_argument("--transport", choices=["stdio", "http"], default="stdio")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    return parser


def _tool_call(args: argparse.Namespace) -> tuple[str, dict[str, Any]]:
    if args.command == "list":
        return "list_advisors", {}
    if args.command == "info":
        return "get_advisor_info", {"advisor": args.advisor}
    if args.command == "advise":
        call: dict[str, Any] = {"advisor": args.advisor, "situation": args.situation}
        if args.question:
            call["specific_question"] = args.question
        return "get_advisor_advice", call
    if args.command == "meeting":
        return "hold_board_meeting", {
            "topic": args.topic,
            "background": _read_background(args.background, args.background_file),
            "advisors": args.advisors,
        }
    if args.command == "crisis":
        return "crisis_response", {
            "crisis_description": args.description,
            "immediate_concerns": args.concerns,
        }
    raise ValueError(f"Not a tool command: {args.command}")


def _serve(args: argparse.Namespace, dispatcher: ToolDispatcher) -> int:
    config = load_config()
    configure_logging(config.log_level)

    if args.transport == "stdio":
        from advisory_board.mcp_server import run_stdio

        run_stdio(dispatcher, config)
        return 0

    import uvicorn

    from advisory_board.http_service import create_app

    uvicorn.run(
        create_app(dispatcher, config),
        host=args.host or config.host,
        port=args.port or config.port,
        log_level=config.log_level.lower(),
    )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    dispatcher = ToolDispatcher(default_registry())

    if args.command == "serve":
        return _serve(args, dispatcher)

    if args.command == "tools":
        print(json.dumps([d.to_dict() for d in dispatcher.catalog()], indent=2))
        return 0

    def progress(stage: str, message: str) -> None:
        print(f"[{stage}] {message}", file=sys.stderr)

    name, arguments = _tool_call(args)
    response = dispatcher.invoke(name, arguments, progress=progress if args.verbose else None)

    if response.is_error:
        print(response.text, file=sys.stderr)
        return 1

    out = getattr(args, "out", None)
    if out:
        out_path = Path(out)
        out_path.write_text(response.text, encoding="utf-8")
        print(f"Saved: {out_path}")
    else:
        print(response.text)
    return 0


def run() -> None:
    try:
        raise SystemExit(main())
    except (ConfigError, OSError) as exc:
        raise SystemExit(str(exc))


if __name__ == "__main__":
    run()
