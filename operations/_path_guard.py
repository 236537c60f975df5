"""Shared helpers for re-checking confinement right before a filesystem call."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from confinement import ConfinedPath, confine

__all__ = ["ensure_still_confined"]


def ensure_still_confined(target: ConfinedPath, roots: Sequence[Path]) -> ConfinedPath:
    """Re-resolve ``target`` against the session's allowed ``roots``.

    The console approves a path some prompts before the executor runs, so the
    tree may have changed in between (for example the file was swapped for a
    symlink). This narrows that window; it cannot close it. The ``root``
    carried by ``target`` is never trusted here.
    """
    return confine(roots, target.path)
