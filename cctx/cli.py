"""Command-line entry point."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Sequence

from cctx.completions import Shell, print_enhanced_completions
from cctx.context import ContextError, ContextManager, SettingsLevel
from cctx.interactive import (
    interactive_create_context,
    interactive_delete,
    interactive_rename,
    interactive_select,
    prompt_text,
)

_VERSION = "0.1.4"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``cctx`` command."""
    parser = argparse.ArgumentParser(prog="cctx", description="Claude Code context switcher")
    parser.add_argument(
        "context",
        nargs="?",
        help="Context name to switch to, or '-' to switch to previous context",
    )
    parser.add_argument("-d", "--delete", action="store_true", help="Delete context mode")
    parser.add_argument("-c", "--current", action="store_true", help="Current context mode")
    parser.add_argument("-r", "--rename", action="store_true", help="Rename context mode")
    parser.add_argument(
        "-n", "--new", action="store_true", help="Create new context from current settings"
    )
    parser.add_argument("-e", "--edit", action="store_true", help="Edit context with $EDITOR")
    parser.add_argument("-s", "--show", action="store_true", help="Show context content")
    parser.add_argument("--export", action="store_true", help="Export context to stdout")
    parser.add_argument("--import", dest="import_", action="store_true", help="Import context from stdin")
    parser.add_argument(
        "-u", "--unset", action="store_true", help="Unset current context (removes settings file)"
    )
    parser.add_argument(
        "--completions",
        type=Shell,
        choices=list(Shell),
        metavar="{" + ",".join(s.value for s in Shell) + "}",
        help="Generate shell completions",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Show only current context (no highlighting when listing)",
    )
    parser.add_argument(
        "--in-project",
        action="store_true",
        help="Manage project-level contexts (./.claude/settings.json)",
    )
    parser.add_argument(
        "--local",
        action="store_true",
        help="Manage local project contexts (./.claude/settings.local.json)",
    )
    parser.add_argument("-V", "--version", action="version", version=f"cctx {_VERSION}")
    return parser


def _target(args: argparse.Namespace, manager: ContextManager) -> str:
    if args.context is not None:
        return args.context
    current = manager.get_current_context()
    if current is None:
        raise ContextError("error: no current context set")
    return current


def _run(args: argparse.Namespace) -> None:
    if args.completions is not None:
        print_enhanced_completions(args.completions)
        return

    if args.local:
        level = SettingsLevel.LOCAL
    elif args.in_project:
        level = SettingsLevel.PROJECT
    else:
        level = SettingsLevel.USER
    manager = ContextManager(level)

    if args.current:
        current = manager.get_current_context()
        if current is not None:
            print(current)
    elif args.unset:
        manager.unset_context()
    elif args.delete:
        if args.context is not None:
            manager.delete_context(args.context)
        else:
            interactive_delete(manager)
    elif args.rename:
        if args.context is not None:
            manager.rename_context(args.context, prompt_text("New name"))
        else:
            interactive_rename(manager)
    elif args.new:
        if args.context is not None:
            manager.create_context(args.context)
        else:
            interactive_create_context(manager)
    elif args.edit:
        manager.edit_context(_target(args, manager))
    elif args.show:
        manager.show_context(_target(args, manager))
    elif args.export:
        manager.export_context(_target(args, manager))
    elif args.import_:
        if args.context is None:
            raise ContextError("error: context name required for import")
        manager.import_context(args.context)
    elif args.context == "-":
        manager.switch_to_previous()
    elif args.context is not None:
        manager.switch_context(args.context)
    elif os.environ.get("CCTX_INTERACTIVE", "") == "1":
        interactive_select(manager)
    else:
        manager.list_contexts_with_current(args.quiet)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command and return its exit status."""
    args = build_parser().parse_args(argv)
    try:
        _run(args)
    except ContextError as exc:
        print(exc, file=sys.stderr)
        return 1
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())