"""Drop-in operation for copying files."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from confinement import ConfinedPath
from op_registry import OpSpec
from ._path_guard import ensure_still_confined


class CopyFileParams(BaseModel):
    roots: List[Path] = Field(min_length=1, description="Allowed roots of the session")
    source: ConfinedPath
    destination: ConfinedPath


def run(roots: List[Path], source: ConfinedPath, destination: ConfinedPath) -> Dict[str, Any]:
    """Copy file contents and permission bits to ``destination``."""
    ensure_still_confined(source, roots)
    ensure_still_confined(destination, roots)
    copied = shutil.copy(source.path, destination.path)
    return {"source": str(source), "destination": str(copied), "status": "copied"}


OPERATION = OpSpec(
    name="copy",
    model=CopyFileParams,
    handler=run,
)
