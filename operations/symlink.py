"""Drop-in operation for creating symbolic links."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from confinement import ConfinedPath
from op_registry import OpSpec
from ._path_guard import ensure_still_confined


class SymlinkParams(BaseModel):
    roots: List[Path] = Field(min_length=1, description="Allowed roots of the session")
    target: ConfinedPath
    link: ConfinedPath


def run(roots: List[Path], target: ConfinedPath, link: ConfinedPath) -> Dict[str, Any]:
    """Create ``link`` pointing at the absolute path of ``target``."""
    ensure_still_confined(target, roots)
    ensure_still_confined(link, roots)
    os.symlink(target.path, link.path)
    return {"path": str(link), "target": str(target), "status": "linked"}


OPERATION = OpSpec(
    name="symlink",
    model=SymlinkParams,
    handler=run,
)
