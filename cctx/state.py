"""Persistent record of the current and previous context."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from os import PathLike
from pathlib import Path
from typing import Union

StrPath = Union[str, "PathLike[str]"]


@dataclass
class State:
    """Which context is active now and which one was active before it."""

    current: str | None = None
    previous: str | None = None

    def save(self, path: StrPath) -> None:
        """Write the state as pretty-printed JSON."""
        Path(path).write_text(json.dumps(asdict(self), indent=2), encoding="utf-8")

    def set_current(self, context: str) -> None:
        """Make ``context`` current, remembering the old one as previous."""
        if self.current is not None and self.current != context:
            self.previous = self.current
        self.current = context

    def unset_current(self) -> str | None:
        """Clear the current context and return what it was."""
        current, self.current = self.current, None
        if current is not None:
            self.previous = current
        return current


def _optional_str(data: dict, key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"invalid state: {key!r} must be a string or null")
    return value


def load_state(path: StrPath) -> State:
    """Read the state file, or return an empty state if it does not exist."""
    state_path = Path(path)
    if not state_path.exists():
        return State()
    data = json.loads(state_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("invalid state: expected a JSON object")
    return State(current=_optional_str(data, "current"), previous=_optional_str(data, "previous"))