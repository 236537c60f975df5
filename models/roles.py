from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """The closed set of user roles, in role-selection menu order."""

    ADMIN = "admin"
    WAREHOUSE = "warehouse"
    CUSTOMER = "customer"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    Role.ADMIN: "Admin",
    Role.WAREHOUSE: "Warehouse Staff",
    Role.CUSTOMER: "Customer",
}
