"""Path confinement core: sanitize names, confine paths, select scopes."""

from .confiner import ConfinedPath, confine
from .errors import (
    ConfinementError,
    InvalidName,
    PathEscape,
    ProvisioningError,
    SelectionError,
    UnresolvableParent,
)
from .sanitizer import DEFAULT_MAX_NAME_BYTES, SanitizedName, sanitize
from .scopes import ScopeRegistry
from .selector import ScopeSelection, SelectionState, select

__all__ = [
    "ConfinedPath",
    "ConfinementError",
    "DEFAULT_MAX_NAME_BYTES",
    "InvalidName",
    "PathEscape",
    "ProvisioningError",
    "SanitizedName",
    "ScopeRegistry",
    "ScopeSelection",
    "SelectionError",
    "SelectionState",
    "UnresolvableParent",
    "confine",
    "sanitize",
    "select",
]
