# logistics/menu_registry.py
# Purpose: Canonical per-role menus and the commands an alias may run.

from __future__ import annotations

from typing import Dict, List, Tuple

from models.roles import Role

COMMAND_LABELS: Dict[str, str] = {
    "list": "List files",
    "change_perms": "Change permissions",
    "create_dir": "Create directory",
    "delete_dir": "Delete directory",
    "create_file": "Create file",
    "delete_file": "Delete file",
    "symlink": "Create symbolic link",
    "copy": "Copy file",
    "move": "Move file",
    "append": "Append to file",
    "view": "View file content",
    "find": "Find file",
    "search": "Search file content",
    "set_alias": "Set alias",
    "use_alias": "Use alias",
    "logout": "Logout",
}

ROLE_MENUS: Dict[Role, List[str]] = {
    Role.ADMIN: [
        "list",
        "change_perms",
        "create_dir",
        "delete_dir",
        "create_file",
        "delete_file",
        "symlink",
        "copy",
        "move",
        "append",
        "view",
        "find",
        "search",
        "set_alias",
        "use_alias",
        "logout",
    ],
    Role.WAREHOUSE: [
        "list",
        "move",
        "view",
        "create_dir",
        "delete_dir",
        "create_file",
        "delete_file",
        "append",
        "set_alias",
        "use_alias",
        "logout",
    ],
    Role.CUSTOMER: ["list", "copy", "append", "view", "logout"],
}

# Menu entries that drive the session rather than the filesystem.
SESSION_COMMANDS = frozenset({"set_alias", "use_alias", "logout"})


def get_menu_for(role: Role) -> List[Tuple[str, str]]:
    """Return ``(label, command)`` pairs in display order."""
    return [(COMMAND_LABELS[name], name) for name in ROLE_MENUS[Role(role)]]


def is_known_command(command: str) -> bool:
    return command in COMMAND_LABELS and command not in SESSION_COMMANDS


def alias_allowed(role: Role, command: str) -> bool:
    """An alias may only run a filesystem command from the role's own menu."""
    return is_known_command(command) and command in ROLE_MENUS[Role(role)]
