"""Drop-in operation for reading a whole file or its first/last lines."""

from __future__ import annotations

from collections import deque
from itertools import islice
from pathlib import Path
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field

from confinement import ConfinedPath
from op_registry import OpSpec
from ._path_guard import ensure_still_confined


class ViewParams(BaseModel):
    roots: List[Path] = Field(min_length=1, description="Allowed roots of the session")
    target: ConfinedPath
    mode: Literal["whole", "head", "tail"] = "whole"
    lines: int = Field(10, ge=1, description="Line count for head/tail")


def run(roots: List[Path], target: ConfinedPath, mode: str = "whole", lines: int = 10) -> Dict[str, Any]:
    """Return the file text, or only its first or last ``lines`` lines."""
    ensure_still_confined(target, roots)
    with open(target.path, "r", encoding="utf-8", errors="replace") as handle:
        if mode == "head":
            content = "".join(islice(handle, lines))
        elif mode == "tail":
            content = "".join(deque(handle, maxlen=lines))
        else:
            content = handle.read()
    return {"path": str(target), "mode": mode, "content": content}


OPERATION = OpSpec(
    name="view",
    model=ViewParams,
    handler=run,
)
