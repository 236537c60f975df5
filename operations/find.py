"""Drop-in operation for finding entries by name pattern."""

from __future__ import annotations

import fnmatch
import os
from pathlib import Path
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from op_registry import OpSpec


class FindParams(BaseModel):
    roots: List[Path] = Field(min_length=1)
    pattern: str = Field(min_length=1, description="Shell-style name pattern")


def run(roots: List[Path], pattern: str) -> Dict[str, Any]:
    """Match ``pattern`` against entry names below each root without following links."""
    matches: List[str] = []
    for root in roots:
        if fnmatch.fnmatchcase(root.name, pattern):
            matches.append(str(root))
        for dirpath, dirnames, filenames in os.walk(root):
            for name in sorted(dirnames + filenames):
                if fnmatch.fnmatchcase(name, pattern):
                    matches.append(os.path.join(dirpath, name))
    return {"pattern": pattern, "matches": matches}


OPERATION = OpSpec(
    name="find",
    model=FindParams,
    handler=run,
)
