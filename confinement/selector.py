"""Interactive choice of one allowed root, or of an existing subdirectory under one.

The protocol is a small state machine so it can be driven line by line in
tests; :func:`select` is the console driver around it.
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from .confiner import confine
from .errors import ConfinementError, SelectionError
from .sanitizer import DEFAULT_MAX_NAME_BYTES, sanitize

__all__ = ["ScopeSelection", "SelectionState", "select"]

logger = logging.getLogger("logistics.selector")

OTHER_LABEL = "Other (specify subdirectory under allowed directories)"
OTHER_ROOT_TITLE = "Select the base directory under which the subdirectory is located:"
CHOICE_PROMPT = "Enter your choice: "
SUBDIR_PROMPT = "Enter the subdirectory name under the selected base directory: "


class SelectionState(str, Enum):
    AWAITING_ROOT_CHOICE = "awaiting_root_choice"
    AWAITING_OTHER_ROOT_CHOICE = "awaiting_other_root_choice"
    AWAITING_SUBDIR_NAME = "awaiting_subdir_name"
    RESOLVED = "resolved"


def _parse_choice(raw: str, upper: int) -> int:
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise SelectionError("Invalid choice.") from exc
    if value < 1 or value > upper:
        raise SelectionError("Invalid choice.")
    return value


class ScopeSelection:
    """One run of the root/subdirectory selection protocol.

    ``AWAITING_ROOT_CHOICE`` offers the roots plus a synthetic "Other" entry
    numbered ``len(roots) + 1``. Picking a root resolves immediately. Picking
    "Other" asks which root is the parent, then for a single sanitized
    subdirectory name; the composed directory must pass confinement against
    the same roots and must already exist. Any bad answer raises
    :class:`SelectionError` and the selection is abandoned.
    """

    def __init__(
        self,
        roots: Iterable[os.PathLike[str] | str],
        title: str,
        *,
        max_name_bytes: int = DEFAULT_MAX_NAME_BYTES,
    ) -> None:
        self.roots: Tuple[Path, ...] = tuple(Path(root) for root in roots)
        self.title = title
        self.max_name_bytes = max_name_bytes
        self.state = SelectionState.AWAITING_ROOT_CHOICE
        self.parent: Optional[Path] = None
        self.result: Optional[Path] = None

    @property
    def other_index(self) -> int:
        return len(self.roots) + 1

    def _numbered_roots(self) -> List[str]:
        return [f"{index}. {root}" for index, root in enumerate(self.roots, start=1)]

    def prompt_lines(self) -> List[str]:
        """Lines to show before asking for the next answer."""
        if self.state is SelectionState.AWAITING_ROOT_CHOICE:
            return [self.title, *self._numbered_roots(), f"{self.other_index}. {OTHER_LABEL}"]
        if self.state is SelectionState.AWAITING_OTHER_ROOT_CHOICE:
            return [OTHER_ROOT_TITLE, *self._numbered_roots()]
        return []

    def prompt(self) -> str:
        if self.state is SelectionState.AWAITING_SUBDIR_NAME:
            return SUBDIR_PROMPT
        return CHOICE_PROMPT

    def feed(self, line: str) -> Optional[Path]:
        """Consume one answer; return the chosen directory once resolved."""
        if self.state is SelectionState.AWAITING_ROOT_CHOICE:
            choice = _parse_choice(line, self.other_index)
            if choice == self.other_index:
                self.state = SelectionState.AWAITING_OTHER_ROOT_CHOICE
                return None
            return self._resolve(self.roots[choice - 1])

        if self.state is SelectionState.AWAITING_OTHER_ROOT_CHOICE:
            choice = _parse_choice(line, len(self.roots))
            self.parent = self.roots[choice - 1]
            self.state = SelectionState.AWAITING_SUBDIR_NAME
            return None

        if self.state is SelectionState.AWAITING_SUBDIR_NAME:
            if self.parent is None:
                raise SelectionError("No base directory selected.")
            try:
                name = sanitize(line, self.max_name_bytes)
            except ConfinementError as exc:
                raise SelectionError("Invalid subdirectory name.") from exc
            composed = os.path.join(self.parent, name)
            try:
                confine(self.roots, composed)
            except ConfinementError as exc:
                raise SelectionError("Invalid or forbidden path.") from exc
            if not os.path.isdir(composed):
                raise SelectionError("Directory does not exist.")
            return self._resolve(Path(composed))

        raise SelectionError("Selection is already resolved.")

    def _resolve(self, directory: Path) -> Path:
        self.state = SelectionState.RESOLVED
        self.result = directory
        logger.debug("selected directory %s", directory)
        return directory


def select(
    roots: Iterable[os.PathLike[str] | str],
    prompt: str,
    *,
    ask: Callable[[str], str] = input,
    say: Callable[[str], None] = print,
    max_name_bytes: int = DEFAULT_MAX_NAME_BYTES,
) -> Path:
    """Run a :class:`ScopeSelection` over ``ask``/``say`` and return the directory."""
    selection = ScopeSelection(roots, prompt, max_name_bytes=max_name_bytes)
    while True:
        for line in selection.prompt_lines():
            say(line)
        try:
            answer = ask(selection.prompt())
        except EOFError as exc:
            raise SelectionError("Error reading input.") from exc
        result = selection.feed(answer)
        if result is not None:
            return result
