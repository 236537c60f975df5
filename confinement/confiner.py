"""Canonicalize candidate paths and prove they sit inside an allowed root."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, model_validator

from .errors import PathEscape, UnresolvableParent

__all__ = ["ConfinedPath", "confine", "resolve_roots"]

logger = logging.getLogger("logistics.confinement")

PathInput = Union[str, "os.PathLike[str]"]


class ConfinedPath(BaseModel):
    """A path that was verified to live under one of the caller's roots.

    ``path`` is what the caller asked for (absolute, symlinks untouched),
    ``resolved`` is the canonical location that was checked (the target, or
    its parent when the target does not exist yet) and ``root`` is the
    canonical root that matched.
    """

    model_config = ConfigDict(frozen=True)

    path: Path
    resolved: Path
    root: Path

    @model_validator(mode="after")
    def _check_containment(self) -> "ConfinedPath":
        root = str(self.root)
        if not os.path.isabs(root) or os.path.realpath(root) != root:
            raise ValueError(f"root must be a canonical absolute path: {root}")
        if not self.path.is_absolute():
            raise ValueError(f"path must be absolute: {self.path}")
        if not _within(str(self.resolved), root):
            raise ValueError(f"resolved path {self.resolved} is outside root {root}")
        return self

    def __fspath__(self) -> str:
        return str(self.path)

    def __str__(self) -> str:
        return str(self.path)


def _resolve_strict(path: str) -> Optional[str]:
    try:
        return str(Path(path).resolve(strict=True))
    except (OSError, RuntimeError, ValueError):
        # RuntimeError covers symlink loops on older interpreters, ValueError
        # embedded NUL bytes.
        return None


def _absolute(candidate: PathInput) -> str:
    text = os.fspath(candidate)
    if not os.path.isabs(text):
        text = os.path.join(os.getcwd(), text)
    return text


def _within(target: str, root: str) -> bool:
    if target == root:
        return True
    prefix = root if root.endswith(os.sep) else root + os.sep
    return target.startswith(prefix)


def resolve_roots(roots: Iterable[PathInput]) -> List[str]:
    """Canonical forms of ``roots``; unresolvable roots are logged and skipped."""
    resolved: List[str] = []
    for root in roots:
        real = _resolve_strict(os.fspath(root))
        if real is None:
            logger.warning("allowed root cannot be resolved: %s", root)
            continue
        resolved.append(real)
    return resolved


def _resolve_candidate(raw: str) -> str:
    real = _resolve_strict(raw)
    if real is not None:
        return real
    if os.path.islink(raw):
        # Dangling link: check where it points, not where it sits.
        return os.path.realpath(raw)
    head, sep, _ = raw.rpartition(os.sep)
    if not sep or not head:
        raise UnresolvableParent(f"Cannot resolve parent directory of {raw}")
    parent = _resolve_strict(head)
    if parent is None:
        raise UnresolvableParent(f"Cannot resolve parent directory of {raw}")
    return parent


def confine(roots: Iterable[PathInput], candidate: PathInput) -> ConfinedPath:
    """Return ``candidate`` as a :class:`ConfinedPath` or raise.

    Existing targets are checked by their canonical form; targets that do not
    exist yet are checked through their canonical parent. The comparison is a
    boundary-prefix match, so root ``/a/base`` never admits ``/a/basefoo``.

    Raises:
        UnresolvableParent: neither the candidate nor its parent resolves.
        PathEscape: the resolved location is outside every root.
    """
    raw = os.fspath(candidate)
    if "\x00" in raw:
        logger.warning("rejected path with NUL byte: %r", raw)
        raise UnresolvableParent(f"Path contains a NUL byte: {raw!r}")
    text = _absolute(raw)
    try:
        target = _resolve_candidate(raw)
    except UnresolvableParent:
        logger.warning("rejected unresolvable path: %s", text)
        raise
    for root in resolve_roots(roots):
        if _within(target, root):
            return ConfinedPath(path=Path(text), resolved=Path(target), root=Path(root))
    logger.warning("rejected path outside allowed roots: %s -> %s", text, target)
    raise PathEscape(f"Path is outside the allowed directories: {text}")
