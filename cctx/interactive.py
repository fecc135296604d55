"""Prompt-driven selection, deletion, renaming and creation of contexts."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from typing import Sequence

from cctx.context import ContextError, ContextManager

_NO_CONTEXTS_HINT = "No contexts found. Create one with: cctx -n <name>"


def _paint(text: str, *codes: str) -> str:
    if os.environ.get("NO_COLOR") or not sys.stdout.isatty():
        return text
    return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"


def _read(prompt: str) -> str:
    try:
        return input(prompt)
    except EOFError as exc:
        raise ContextError("error: input aborted") from exc


def _fuzzy_match(pattern: str, text: str) -> bool:
    """True when the letters of ``pattern`` appear in ``text`` in order."""
    remaining = iter(text.lower())
    return all(ch in remaining for ch in pattern.lower())


def fuzzy_select(prompt: str, items: Sequence[str]) -> int:
    """Ask the user to pick one of ``items`` and return its index.

    The answer may be a number from the list, an exact item, or a pattern whose
    letters appear in order in the wanted item; an ambiguous pattern narrows the
    list and asks again. An empty answer picks the first listed item.
    """
    if not items:
        raise ValueError("nothing to select from")
    candidates = list(enumerate(items))
    while True:
        for number, (_, item) in enumerate(candidates, start=1):
            print(f"  {number}) {item}")
        answer = _read(f"{prompt}: ").strip()
        if not answer:
            return candidates[0][0]
        if answer.isdigit():
            number = int(answer)
            if 1 <= number <= len(candidates):
                return candidates[number - 1][0]
            print("Invalid selection")
            continue
        exact = [index for index, item in candidates if item == answer]
        if exact:
            return exact[0]
        matches = [(index, item) for index, item in candidates if _fuzzy_match(answer, item)]
        if len(matches) == 1:
            return matches[0][0]
        if not matches:
            print("No match")
            continue
        candidates = matches


def confirm(prompt: str, default: bool = False) -> bool:
    """Ask a yes/no question; an empty answer gives ``default``."""
    hint = "[Y/n]" if default else "[y/N]"
    while True:
        answer = _read(f"{prompt} {hint} ").strip().lower()
        if not answer:
            return default
        if answer in ("y", "yes"):
            return True
        if answer in ("n", "no"):
            return False


def prompt_text(prompt: str) -> str:
    """Ask for a non-empty line of text."""
    while True:
        answer = _read(f"{prompt}: ").strip()
        if answer:
            return answer


def _select_with_fzf(manager: ContextManager, contexts: list[str], current: str | None) -> None:
    cmd = ["fzf", "--ansi", "--no-multi"]
    if current is not None:
        cmd += ["--header", f"Current: {current}"]
    lines = [
        f"{_paint(ctx, '1', '32')} {_paint('(current)', '2')}" if ctx == current else ctx
        for ctx in contexts
    ]
    result = subprocess.run(
        cmd,
        input="".join(f"{line}\n" for line in lines),
        stdout=subprocess.PIPE,
        text=True,
        check=False,
    )
    if result.returncode == 0:
        words = result.stdout.split()
        if words:
            manager.switch_context(words[0])


def _select_builtin(manager: ContextManager, contexts: list[str], current: str | None) -> None:
    items = [f"{ctx} (current)" if ctx == current else ctx for ctx in contexts]
    selected = contexts[fuzzy_select("Select context", items)]
    if selected != current:
        manager.switch_context(selected)


def interactive_select(manager: ContextManager) -> None:
    """Let the user pick a context to switch to, with fzf when available."""
    contexts = manager.list_contexts()
    if not contexts:
        print(_NO_CONTEXTS_HINT)
        return
    current = manager.get_current_context()
    if shutil.which("fzf") is not None and "TERM" in os.environ:
        _select_with_fzf(manager, contexts, current)
    else:
        _select_builtin(manager, contexts, current)


def interactive_delete(manager: ContextManager) -> None:
    """Let the user pick a context and delete it after confirmation."""
    contexts = manager.list_contexts()
    if not contexts:
        print("No contexts found")
        return
    selected = contexts[fuzzy_select("Select context to delete", contexts)]
    if confirm(f'Delete context "{selected}"?', default=False):
        manager.delete_context(selected)


def interactive_rename(manager: ContextManager) -> None:
    """Let the user pick a context and give it a new name."""
    contexts = manager.list_contexts()
    if not contexts:
        print("No contexts found")
        return
    old_name = contexts[fuzzy_select("Select context to rename", contexts)]
    new_name = prompt_text("New name")
    manager.rename_context(old_name, new_name)


def interactive_create_context(manager: ContextManager) -> None:
    """Ask for a name and create a context from the current settings."""
    manager.create_context(prompt_text("Context name"))