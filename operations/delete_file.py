"""Drop-in operation for deleting files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from confinement import ConfinedPath
from op_registry import OpSpec
from ._path_guard import ensure_still_confined


class DeleteFileParams(BaseModel):
    roots: List[Path] = Field(min_length=1, description="Allowed roots of the session")
    target: ConfinedPath


def run(roots: List[Path], target: ConfinedPath) -> Dict[str, Any]:
    """Delete the specified file."""
    ensure_still_confined(target, roots)
    os.remove(target.path)
    return {"path": str(target), "status": "deleted"}


OPERATION = OpSpec(
    name="delete_file",
    model=DeleteFileParams,
    handler=run,
)
