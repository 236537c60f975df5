"""Drop-in operation for searching file contents for a keyword."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from op_registry import OpSpec

logger = logging.getLogger("logistics.operations")


class SearchParams(BaseModel):
    roots: List[Path] = Field(min_length=1)
    keyword: str = Field(min_length=1)


def _search_file(path: str, keyword: str) -> List[str]:
    hits: List[str] = []
    with open(path, "r", encoding="utf-8", errors="ignore") as handle:
        for number, line in enumerate(handle, start=1):
            if keyword in line:
                hits.append(f"{path}:{number}:{line.rstrip()}")
    return hits


def run(roots: List[Path], keyword: str) -> Dict[str, Any]:
    """Return ``path:line:text`` hits for regular files containing ``keyword``."""
    hits: List[str] = []
    skipped: List[str] = []
    for root in roots:
        for dirpath, _dirnames, filenames in os.walk(root):
            for name in sorted(filenames):
                path = os.path.join(dirpath, name)
                if os.path.islink(path) or not os.path.isfile(path):
                    continue
                try:
                    hits.extend(_search_file(path, keyword))
                except OSError as exc:
                    logger.warning("cannot read %s: %s", path, exc)
                    skipped.append(path)
    return {"keyword": keyword, "hits": hits, "skipped": skipped}


OPERATION = OpSpec(
    name="search",
    model=SearchParams,
    handler=run,
)
