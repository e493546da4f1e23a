# bsg_helpdesk/forms/value_store.py
"""
Per-form field value store.

Keeps two views of every field: the *displayed* value, updated on each
keystroke, and the *committed* value seen by the rest of the form. Input is
committed after a debounce window; a burst of keystrokes inside the window
commits once, with the last value. Blur and flush commit immediately.
"""
from __future__ import annotations

import asyncio
from typing import Any, Callable

from bsg_helpdesk.core.logging import get_logger

logger = get_logger(__name__)

CommitCallback = Callable[[str, Any], None]

DEFAULT_DEBOUNCE = 0.3


class FieldValueStore:
    def __init__(self, on_commit: CommitCallback | None = None, debounce: float = DEFAULT_DEBOUNCE) -> None:
        self.debounce = debounce
        self._on_commit = on_commit
        self._displayed: dict[str, Any] = {}
        self._committed: dict[str, Any] = {}
        self._pending: dict[str, asyncio.TimerHandle] = {}

    def displayed(self, name: str, default: Any = "") -> Any:
        return self._displayed.get(name, default)

    def committed(self, name: str, default: Any = "") -> Any:
        return self._committed.get(name, default)

    def values(self) -> dict[str, Any]:
        """Committed values, as the parent form sees them."""
        return dict(self._committed)

    def is_pending(self, name: str | None = None) -> bool:
        if name is None:
            return bool(self._pending)
        return name in self._pending

    def input(self, name: str, value: Any) -> None:
        """User typed into ``name``; commit after the debounce window."""
        self._displayed[name] = value
        self._cancel(name)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # no loop to schedule on: behave as an undebounced input
            self._commit(name)
            return
        if self.debounce <= 0:
            self._commit(name)
            return
        self._pending[name] = loop.call_later(self.debounce, self._commit, name)

    def set(self, name: str, value: Any) -> None:
        """External write (defaults, auto-fill); committed at once."""
        self._cancel(name)
        self._displayed[name] = value
        self._commit(name)

    def blur(self, name: str) -> None:
        if name in self._pending:
            self._cancel(name)
            self._commit(name)

    def flush(self) -> None:
        for name in list(self._pending):
            self.blur(name)

    def clear(self) -> None:
        self.close()
        self._displayed.clear()
        self._committed.clear()

    def close(self) -> None:
        for name in list(self._pending):
            self._cancel(name)

    def _cancel(self, name: str) -> None:
        handle = self._pending.pop(name, None)
        if handle is not None:
            handle.cancel()

    def _commit(self, name: str) -> None:
        self._pending.pop(name, None)
        value = self._displayed.get(name, "")
        if name in self._committed and self._committed[name] == value:
            return
        self._committed[name] = value
        if self._on_commit is not None:
            self._on_commit(name, value)
