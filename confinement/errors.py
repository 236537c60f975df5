"""Error taxonomy for name sanitizing, path confinement and scope selection."""

from __future__ import annotations


class ConfinementError(PermissionError):
    """Base class for every rejection raised by the confinement core."""


class InvalidName(ConfinementError, ValueError):
    """Raw filename or subdirectory input failed the sanitizer."""


class PathEscape(ConfinementError):
    """Candidate resolves outside every allowed root."""


class UnresolvableParent(ConfinementError):
    """Neither the candidate nor its parent directory could be resolved."""


class SelectionError(ConfinementError):
    """Scope selection was aborted by bad input or a missing directory."""


class ProvisioningError(RuntimeError):
    """Root directories could not be created; no session can be served."""
