"""Drop-in operation for appending a line of text to a file."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from confinement import ConfinedPath
from op_registry import OpSpec
from ._path_guard import ensure_still_confined


class AppendParams(BaseModel):
    roots: List[Path] = Field(min_length=1, description="Allowed roots of the session")
    target: ConfinedPath
    text: str


def run(roots: List[Path], target: ConfinedPath, text: str) -> Dict[str, Any]:
    """Append ``text`` and a newline, creating the file when missing."""
    ensure_still_confined(target, roots)
    with open(target.path, "a", encoding="utf-8") as handle:
        handle.write(text + "\n")
    return {"path": str(target), "status": "appended"}


OPERATION = OpSpec(
    name="append",
    model=AppendParams,
    handler=run,
)
