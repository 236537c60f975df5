from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

DEFAULT_ALIAS_CAPACITY = 10


class AliasLimitReached(ValueError): ...


class Alias(BaseModel):
    name: str = Field(min_length=1)
    command: str = Field(min_length=1)


class AliasBook(BaseModel):
    """Per-role shortcut table mapping an alias name to a menu command.

    Books live for the whole process, so aliases survive logout the way the
    role's menu does. Redefining a name replaces its command in place.
    """

    capacity: int = Field(default=DEFAULT_ALIAS_CAPACITY, ge=1)
    entries: List[Alias] = Field(default_factory=list)

    def set(self, name: str, command: str) -> Alias:
        alias = Alias(name=name, command=command)
        for index, entry in enumerate(self.entries):
            if entry.name == alias.name:
                self.entries[index] = alias
                return alias
        if len(self.entries) >= self.capacity:
            raise AliasLimitReached(f"Alias limit reached ({self.capacity}).")
        self.entries.append(alias)
        return alias

    def lookup(self, name: str) -> Optional[str]:
        for entry in self.entries:
            if entry.name == name:
                return entry.command
        return None

    def __len__(self) -> int:
        return len(self.entries)
