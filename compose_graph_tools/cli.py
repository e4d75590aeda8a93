from __future__ import annotations

import argparse
from functools import wraps
import json
import os
from pathlib import Path
import sys
from typing import Any, Optional, Sequence

from .graph import parse_document
from .graph.annotate import annotate
from .layout import Direction, LayoutSettings, layout_graph
from .misc.logging import configure_logging
from .misc.serialize import annotations_to_dict, graph_to_dict
from .misc.share import decode_document, encode_document
from .validator import validate


STDIN_PATH = Path("-")


# === helpers


@wraps(print)
def error(*args, **kwargs):
    ret = print(*args, file=sys.stderr, **kwargs)
    sys.stderr.flush()
    return ret


def emit(data: Any) -> None:
    # YAML may hold dates and other non-JSON scalars
    print(json.dumps(data, indent=2, default=str))


def read_document(path: Path) -> str:
    if path == STDIN_PATH:
        return sys.stdin.read()
    with open(path, "r") as fh:
        return fh.read()


# === commands


def cmd_graph(args: argparse.Namespace) -> int:
    outcome = parse_document(read_document(args.file))
    if outcome.error is not None:
        error(f"Document could not be parsed: {outcome.error}")
    graph = layout_graph(outcome.graph, args.direction, args.settings)
    emit({"status": outcome.status.value} | graph_to_dict(graph))
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    report = validate(read_document(args.file))
    emit(report.to_dict())
    if args.strict and not report.is_valid:
        return 1
    return 0


def cmd_inspect(args: argparse.Namespace) -> int:
    text = read_document(args.file)
    outcome = parse_document(text)
    report = validate(text)
    graph = layout_graph(outcome.graph, args.direction, args.settings)
    emit(
        {
            "status": outcome.status.value,
            "graph": graph_to_dict(graph),
            "report": report.to_dict(),
            "annotations": annotations_to_dict(annotate(graph, report)),
        }
    )
    return 0


def cmd_share(args: argparse.Namespace) -> int:
    print(encode_document(read_document(args.file)))
    return 0


def cmd_unshare(args: argparse.Namespace) -> int:
    text = decode_document(args.payload)
    if text is None:
        error("Payload is not a valid share payload")
        return 1
    sys.stdout.write(text)
    return 0


# === parsing


def _add_file(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "file",
        type=Path,
        nargs="?",
        default=Path("./docker-compose.yml"),
        help="Compose file to read, - for stdin (default: docker-compose.yml)",
    )


def _add_direction(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-d",
        "--direction",
        choices=[direction.value for direction in Direction],
        default=Direction.LR.value,
        help="Flow of the layout, LR for horizontal or TB for vertical (default: LR)",
    )


def parse_args(args: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="compose-graph",
        description="Turns compose files into laid out graphs and validation reports",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Log JSON lines instead of human readable output",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    graph = commands.add_parser("graph", help="Print the laid out graph as JSON")
    _add_file(graph)
    _add_direction(graph)
    graph.set_defaults(func=cmd_graph)

    validate_cmd = commands.add_parser("validate", help="Print the validation report as JSON")
    _add_file(validate_cmd)
    validate_cmd.add_argument(
        "--strict",
        action="store_true",
        help="Exit with 1 if the document is not valid",
    )
    validate_cmd.set_defaults(func=cmd_validate)

    inspect = commands.add_parser("inspect", help="Print graph, report and node annotations")
    _add_file(inspect)
    _add_direction(inspect)
    inspect.set_defaults(func=cmd_inspect)

    share = commands.add_parser("share", help="Print the share payload of a compose file")
    _add_file(share)
    share.set_defaults(func=cmd_share)

    unshare = commands.add_parser("unshare", help="Print the compose file of a share payload")
    unshare.add_argument("payload", help="Payload of a share link")
    unshare.set_defaults(func=cmd_unshare)

    return parser.parse_args(args=args)


def exec(given_args: Sequence[str]) -> int:
    args = parse_args(args=given_args)
    configure_logging(verbose=args.verbose, log_json=args.log_json)
    try:
        args.settings = LayoutSettings.from_environ(os.environ)
    except ValueError as e:
        error(f"Invalid layout settings: {e}")
        return 2
    return args.func(args)


def cli(args: Sequence[str]) -> int:
    try:
        return exec(given_args=args)
    except (FileNotFoundError, IsADirectoryError, NotADirectoryError, PermissionError) as e:
        error(f"{e.strerror}: {e.filename}")
        return 2


def main(argv: Optional[Sequence[str]] = None) -> None:
    sys.exit(cli(sys.argv[1:] if argv is None else argv))


if __name__ == "__main__":
    main()
