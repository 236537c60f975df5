"""Drop-in operation for listing regular files under the allowed roots."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from op_registry import OpSpec


class ListFilesParams(BaseModel):
    roots: List[Path] = Field(min_length=1, description="Allowed roots to walk")


def _regular_files(root: Path) -> List[str]:
    found: List[str] = []
    for dirpath, _dirnames, filenames in os.walk(root):
        for name in filenames:
            path = os.path.join(dirpath, name)
            if os.path.isfile(path) and not os.path.islink(path):
                found.append(path)
    return sorted(found)


def run(roots: List[Path]) -> Dict[str, Any]:
    """Return every regular file per root, with per-root and total counts."""
    listing: List[Dict[str, Any]] = []
    total = 0
    for root in roots:
        files = _regular_files(root)
        listing.append({"root": str(root), "files": files, "count": len(files)})
        total += len(files)
    return {"roots": listing, "total": total}


OPERATION = OpSpec(
    name="list",
    model=ListFilesParams,
    handler=run,
)
