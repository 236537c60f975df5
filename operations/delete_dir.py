"""Drop-in operation for removing a directory tree."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from confinement import ConfinedPath
from op_registry import OperationError, OpSpec
from ._path_guard import ensure_still_confined


class DeleteDirParams(BaseModel):
    roots: List[Path] = Field(min_length=1, description="Allowed roots of the session")
    target: ConfinedPath


def run(roots: List[Path], target: ConfinedPath) -> Dict[str, Any]:
    """Delete a directory and everything below it.

    A symlink to a directory is unlinked, not followed. An allowed root is
    never deleted.
    """
    checked = ensure_still_confined(target, roots)
    if os.path.islink(checked.path):
        os.unlink(checked.path)
        return {"path": str(target), "status": "unlinked"}
    if Path(os.path.realpath(checked.path)) == checked.root:
        raise OperationError(f"Refusing to delete allowed root {checked.root}")
    shutil.rmtree(checked.path)
    return {"path": str(target), "status": "deleted"}


OPERATION = OpSpec(
    name="delete_dir",
    model=DeleteDirParams,
    handler=run,
)
