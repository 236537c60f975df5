"""Drop-in operation for creating a directory."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from confinement import ConfinedPath
from op_registry import OpSpec
from ._path_guard import ensure_still_confined


class CreateDirParams(BaseModel):
    roots: List[Path] = Field(min_length=1, description="Allowed roots of the session")
    target: ConfinedPath


def run(roots: List[Path], target: ConfinedPath) -> Dict[str, Any]:
    """Create a single new directory; the parent must already exist."""
    ensure_still_confined(target, roots)
    os.mkdir(target.path)
    return {"path": str(target), "status": "created"}


OPERATION = OpSpec(
    name="create_dir",
    model=CreateDirParams,
    handler=run,
)
