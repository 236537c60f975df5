from __future__ import annotations

import time
from pathlib import Path
from typing import Optional, Tuple

from pydantic import BaseModel, Field

from models.aliases import AliasBook
from models.roles import Role


class Session(BaseModel):
    role: Role
    roots: Tuple[Path, ...]
    aliases: Optional[AliasBook] = None
    started: float = Field(default_factory=time.time)
