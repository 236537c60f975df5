"""Drop-in operation for creating (touching) a file."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from confinement import ConfinedPath
from op_registry import OpSpec
from ._path_guard import ensure_still_confined


class CreateFileParams(BaseModel):
    roots: List[Path] = Field(min_length=1, description="Allowed roots of the session")
    target: ConfinedPath


def run(roots: List[Path], target: ConfinedPath) -> Dict[str, Any]:
    """Create an empty file, or refresh the timestamp of an existing one."""
    ensure_still_confined(target, roots)
    target.path.touch(exist_ok=True)
    return {"path": str(target), "status": "created"}


OPERATION = OpSpec(
    name="create_file",
    model=CreateFileParams,
    handler=run,
)
