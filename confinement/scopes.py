"""Process-wide table of the directory trees each role may touch."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Tuple, Union

from models.roles import Role

from .errors import ProvisioningError

__all__ = ["LOGISTICS_DIRNAME", "ROOT_DIRNAMES", "ScopeRegistry"]

logger = logging.getLogger("logistics.scopes")

LOGISTICS_DIRNAME = "logistics"

ROOT_DIRNAMES: Dict[Role, str] = {
    Role.ADMIN: "admin",
    Role.WAREHOUSE: "warehouse",
    Role.CUSTOMER: "customers",
}

# Each role sees its own tree plus every tree of the roles below it.
ROLE_SCOPES: Dict[Role, Tuple[Role, ...]] = {
    Role.ADMIN: (Role.ADMIN, Role.WAREHOUSE, Role.CUSTOMER),
    Role.WAREHOUSE: (Role.WAREHOUSE, Role.CUSTOMER),
    Role.CUSTOMER: (Role.CUSTOMER,),
}


def _ensure_directory(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ProvisioningError(f"Cannot create directory {path}: {exc}") from exc
    if not path.is_dir():
        raise ProvisioningError(f"Not a directory: {path}")


@dataclass(frozen=True, slots=True)
class ScopeRegistry:
    """Immutable ``Role -> roots`` table built once by :meth:`provision`."""

    base: Path
    table: Mapping[Role, Tuple[Path, ...]]

    @classmethod
    def provision(cls, home: Union[str, "os.PathLike[str]"]) -> "ScopeRegistry":
        """Create ``<home>/logistics`` and the role roots, then build the table.

        Raises:
            ProvisioningError: a directory cannot be created or is not a directory.
        """
        base = Path(home).expanduser().absolute() / LOGISTICS_DIRNAME
        _ensure_directory(base)
        dirs = {role: base / name for role, name in ROOT_DIRNAMES.items()}
        for path in dirs.values():
            _ensure_directory(path)
        table = {
            role: tuple(dirs[scope] for scope in scopes)
            for role, scopes in ROLE_SCOPES.items()
        }
        registry = cls(base=base, table=MappingProxyType(table))
        registry.verify()
        logger.info("provisioned logistics roots under %s", base)
        return registry

    def verify(self) -> None:
        for role in Role:
            roots = self.table.get(role, ())
            if not roots:
                raise ProvisioningError(f"No allowed roots for role {role.value}")
            for root in roots:
                if not root.is_dir():
                    raise ProvisioningError(f"Allowed root is not a directory: {root}")

    def roots_for(self, role: Role) -> Tuple[Path, ...]:
        return self.table[Role(role)]

    def roles(self) -> Tuple[Role, ...]:
        return tuple(Role)
