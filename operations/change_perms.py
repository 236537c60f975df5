"""Drop-in operation for changing permission bits."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from confinement import ConfinedPath
from op_registry import OpSpec
from ._path_guard import ensure_still_confined


class ChangePermsParams(BaseModel):
    roots: List[Path] = Field(min_length=1, description="Allowed roots of the session")
    target: ConfinedPath
    mode: str = Field(pattern=r"^[0-7]{1,4}$", description="Octal mode, e.g. 755")


def run(roots: List[Path], target: ConfinedPath, mode: str) -> Dict[str, Any]:
    """Apply an octal ``mode`` to an existing file or directory."""
    ensure_still_confined(target, roots)
    os.chmod(target.path, int(mode, 8))
    return {"path": str(target), "mode": mode, "status": "changed"}


OPERATION = OpSpec(
    name="change_perms",
    model=ChangePermsParams,
    handler=run,
)
