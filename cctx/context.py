"""Management of named Claude Code settings contexts."""

from __future__ import annotations

import json
import os
import shutil
import subprocess
import sys
from enum import Enum
from pathlib import Path
from typing import TextIO

from cctx.state import State, load_state

_BOLD = "1"
_DIM = "2"
_RED = "31"
_GREEN = "32"
_YELLOW = "33"
_CYAN = "36"


def _paint(text: str, *codes: str) -> str:
    """Wrap text in ANSI styling when writing to a colour terminal."""
    if os.environ.get("NO_COLOR") or not sys.stdout.isatty():
        return text
    return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"


class ContextError(Exception):
    """Raised when a context operation cannot be carried out."""


class SettingsLevel(Enum):
    """Where the active settings file lives."""

    USER = "User"
    PROJECT = "Project"
    LOCAL = "Local"

    @property
    def emoji(self) -> str:
        return {"User": "👤", "Project": "📁", "Local": "💻"}[self.value]


def _check_name(name: str) -> None:
    if name in ("", "-", ".", "..") or "/" in name:
        raise ContextError(f'error: invalid context name "{name}"')


class ContextManager:
    """Stores contexts as JSON files and switches the active settings between them."""

    def __init__(
        self,
        level: SettingsLevel = SettingsLevel.USER,
        home_dir: str | os.PathLike[str] | None = None,
        current_dir: str | os.PathLike[str] | None = None,
    ) -> None:
        if home_dir is None:
            try:
                home_dir = Path.home()
            except RuntimeError as exc:
                raise ContextError("Failed to get home directory") from exc
        if current_dir is None:
            try:
                current_dir = Path.cwd()
            except OSError:
                current_dir = Path(".")
        self.home_dir = Path(home_dir)
        self.current_dir = Path(current_dir)
        self.settings_level = level

        base = self.home_dir if level is SettingsLevel.USER else self.current_dir
        claude_dir = base / ".claude"
        self.contexts_dir = claude_dir / "settings"
        if level is SettingsLevel.LOCAL:
            self.claude_settings_path = claude_dir / "settings.local.json"
            self.state_path = self.contexts_dir / ".cctx-state.local.json"
        else:
            self.claude_settings_path = claude_dir / "settings.json"
            self.state_path = self.contexts_dir / ".cctx-state.json"

        self.contexts_dir.mkdir(parents=True, exist_ok=True)

    def has_project_contexts(self) -> bool:
        """Whether the working directory holds project-level contexts."""
        project_dir = self.current_dir / ".claude" / "settings"
        try:
            entries = list(project_dir.iterdir())
        except OSError:
            return False
        return any(p.suffix == ".json" and not p.name.startswith(".") for p in entries)

    def has_local_contexts(self) -> bool:
        """Whether the working directory holds a local settings file."""
        return (self.current_dir / ".claude" / "settings.local.json").exists()

    def context_path(self, name: str) -> Path:
        return self.contexts_dir / f"{name}.json"

    def _load_state(self) -> State:
        return load_state(self.state_path)

    def _save_state(self, state: State) -> None:
        state.save(self.state_path)

    def _require_existing(self, name: str) -> Path:
        path = self.context_path(name)
        if not path.exists():
            raise ContextError(f'error: no context exists with the name "{name}"')
        return path

    def list_contexts(self) -> list[str]:
        """Names of all stored contexts, sorted."""
        try:
            entries = list(self.contexts_dir.iterdir())
        except OSError:
            return []
        return sorted(
            p.stem for p in entries if not p.name.startswith(".") and p.suffix == ".json"
        )

    def get_current_context(self) -> str | None:
        return self._load_state().current

    def switch_context(self, name: str) -> None:
        """Copy the named context over the active settings file."""
        if name not in self.list_contexts():
            raise ContextError(f'error: no context exists with the name "{name}"')
        state = self._load_state()
        state.set_current(name)
        content = self.context_path(name).read_text(encoding="utf-8")
        self.claude_settings_path.parent.mkdir(parents=True, exist_ok=True)
        self.claude_settings_path.write_text(content, encoding="utf-8")
        self._save_state(state)
        print(f'Switched to context "{_paint(name, _BOLD, _GREEN)}"')

    def switch_to_previous(self) -> None:
        previous = self._load_state().previous
        if previous is None:
            raise ContextError("error: no previous context")
        self.switch_context(previous)

    def create_context(self, name: str) -> None:
        """Create a context from the active settings, or empty if there are none."""
        _check_name(name)
        if name in self.list_contexts():
            raise ContextError(f'error: context "{name}" already exists')
        path = self.context_path(name)
        if self.claude_settings_path.exists():
            shutil.copyfile(self.claude_settings_path, path)
            print(f'Context "{_paint(name, _BOLD, _GREEN)}" created from current settings')
        else:
            path.write_text(json.dumps({}, indent=2), encoding="utf-8")
            print(f'Context "{_paint(name, _BOLD, _GREEN)}" created (empty)')

    def delete_context(self, name: str) -> None:
        state = self._load_state()
        if state.current == name:
            raise ContextError(f'error: cannot delete the active context "{name}"')
        self._require_existing(name).unlink()
        if state.previous == name:
            state.previous = None
            self._save_state(state)
        print(f'Context "{_paint(name, _RED)}" deleted')

    def rename_context(self, old_name: str, new_name: str) -> None:
        _check_name(new_name)
        contexts = self.list_contexts()
        if old_name not in contexts:
            raise ContextError(f'error: no context exists with the name "{old_name}"')
        if new_name in contexts:
            raise ContextError(f'error: context "{new_name}" already exists')
        self.context_path(old_name).rename(self.context_path(new_name))

        state = self._load_state()
        updated = False
        if state.current == old_name:
            state.current = new_name
            updated = True
        if state.previous == old_name:
            state.previous = new_name
            updated = True
        if updated:
            self._save_state(state)
        print(f'Context "{old_name}" renamed to "{_paint(new_name, _BOLD, _GREEN)}"')

    def show_context(self, name: str) -> None:
        """Print the context's JSON, pretty-printed."""
        content = self._require_existing(name).read_text(encoding="utf-8")
        value = json.loads(content)
        print(json.dumps(value, indent=2, sort_keys=True, ensure_ascii=False))

    def edit_context(self, name: str) -> None:
        """Open the context in $EDITOR, then $VISUAL, then vi."""
        path = self._require_existing(name)
        editor = os.environ.get("EDITOR", os.environ.get("VISUAL", "vi"))
        result = subprocess.run([editor, str(path)], check=False)
        if result.returncode != 0:
            raise ContextError("error: editor exited with non-zero status")

    def export_context(self, name: str) -> None:
        content = self._require_existing(name).read_text(encoding="utf-8")
        sys.stdout.write(content)

    def import_context(self, name: str, stream: TextIO | None = None) -> None:
        """Create a context from JSON read from ``stream`` (stdin by default)."""
        _check_name(name)
        if name in self.list_contexts():
            raise ContextError(f'error: context "{name}" already exists')
        buffer = (stream if stream is not None else sys.stdin).read()
        try:
            json.loads(buffer)
        except json.JSONDecodeError as exc:
            raise ContextError("error: invalid JSON input") from exc
        self.context_path(name).write_text(buffer, encoding="utf-8")
        print(f'Context "{_paint(name, _BOLD, _GREEN)}" imported')

    def unset_context(self) -> None:
        """Remove the active settings file and clear the current context."""
        if self.claude_settings_path.exists():
            self.claude_settings_path.unlink()
        state = self._load_state()
        if state.unset_current() is not None:
            self._save_state(state)
        print("Unset current context")

    def list_contexts_with_current(self, quiet: bool = False) -> None:
        """Print the contexts, marking the current one."""
        contexts = self.list_contexts()
        current = self.get_current_context()

        if quiet:
            if current is not None:
                print(current)
            return

        if self.settings_level is SettingsLevel.USER:
            if self.has_project_contexts():
                print(
                    f"{_paint('💡', _YELLOW)} Project contexts available: "
                    "run 'cctx --in-project' to manage"
                )
            if self.has_local_contexts():
                print(
                    f"{_paint('💡', _YELLOW)} Local contexts available: "
                    "run 'cctx --local' to manage"
                )

        emoji = self.settings_level.emoji
        level_name = self.settings_level.value
        if not contexts:
            print(
                f"{emoji} {_paint(level_name, _CYAN)} contexts: "
                "No contexts found. Create one with: cctx -n <name>"
            )
            return

        print(f"{emoji} {_paint(level_name, _BOLD, _CYAN)} contexts:")
        for ctx in contexts:
            if ctx == current:
                print(f"  {_paint(ctx, _BOLD, _GREEN)} {_paint('(current)', _DIM)}")
            else:
                print(f"  {ctx}")