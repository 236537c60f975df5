# logistics/console.py
# Purpose: Interactive role selection, login stub and per-role menus driving the executors.

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Dict, Optional

from pydantic import ValidationError

from config import AppConfig
from confinement import (
    ConfinedPath,
    ConfinementError,
    SanitizedName,
    ScopeRegistry,
    confine,
    sanitize,
    select,
)
from menu_registry import alias_allowed, get_menu_for, is_known_command
from models.aliases import AliasBook, AliasLimitReached
from models.roles import Role
from models.session import Session
from op_registry import OperationError, OperationRegistry, autodiscover_operations

logger = logging.getLogger("logistics.console")

ROLES_WITH_ALIASES = (Role.ADMIN, Role.WAREHOUSE)


def _parse_int(raw: str) -> Optional[int]:
    try:
        return int(raw.strip())
    except ValueError:
        return None


class Console:
    """Blocking console front end for one process.

    Every filesystem command gathers single-segment names through
    :func:`sanitize`, a directory through :func:`select` and checks the
    joined path with :func:`confine` before the executor runs. Errors end
    the command with a one-line message and return to the menu.
    """

    def __init__(
        self,
        scopes: ScopeRegistry,
        config: AppConfig,
        *,
        operations: Optional[OperationRegistry] = None,
        ask: Callable[[str], str] = input,
        say: Callable[[str], None] = print,
    ) -> None:
        self.scopes = scopes
        self.config = config
        self.ops = operations if operations is not None else autodiscover_operations()
        self.ask = ask
        self.say = say
        self.alias_books: Dict[Role, AliasBook] = {
            role: AliasBook(capacity=config.max_aliases) for role in ROLES_WITH_ALIASES
        }

    # -- session lifecycle -------------------------------------------------

    def run(self) -> None:
        roles = list(Role)
        while True:
            self.say("\nSelect user type:")
            for index, role in enumerate(roles, start=1):
                self.say(f"{index}. {role.label}")
            self.say(f"{len(roles) + 1}. Exit")
            try:
                raw = self.ask("Enter your choice: ")
            except EOFError:
                self.say("Exiting.")
                return
            choice = _parse_int(raw)
            if choice == len(roles) + 1:
                self.say("Exiting.")
                return
            if choice is None or not 1 <= choice <= len(roles):
                self.say("Invalid choice.")
                continue
            role = roles[choice - 1]
            if self.login():
                self.main_menu(self.open_session(role))
            else:
                self.say("Login failed. Returning to user type selection.")

    def login(self) -> bool:
        try:
            username = self.ask("Enter username: ")
            password = self.ask("Enter password: ")
        except EOFError:
            self.say("Error reading input.")
            return False
        if username == self.config.username and password == self.config.password:
            self.say("Login successful.")
            return True
        logger.warning("failed login for user %r", username)
        self.say("Invalid username or password.")
        return False

    def open_session(self, role: Role) -> Session:
        session = Session(
            role=role,
            roots=self.scopes.roots_for(role),
            aliases=self.alias_books.get(role),
        )
        logger.info("session opened for role %s", role.value)
        return session

    def main_menu(self, session: Session) -> None:
        menu = get_menu_for(session.role)
        while True:
            self.say(f"\n{session.role.value} Menu:")
            for index, (label, _command) in enumerate(menu, start=1):
                self.say(f"{index}. {label}")
            try:
                raw = self.ask("Choose an option: ")
            except EOFError:
                self.say("Logging out.")
                return
            choice = _parse_int(raw)
            if choice is None or not 1 <= choice <= len(menu):
                self.say("Invalid choice.")
                continue
            command = menu[choice - 1][1]
            if command == "logout":
                self.say("Logging out.")
                logger.info("session closed for role %s", session.role.value)
                return
            self.dispatch(session, command)

    def dispatch(self, session: Session, command: str) -> None:
        """Run one menu command; every failure ends it with a message."""
        handler = getattr(self, f"do_{command}")
        try:
            handler(session)
        except ConfinementError as exc:
            logger.info("%s rejected: %s", command, exc)
            self.say(str(exc))
        except OperationError as exc:
            logger.warning("%s failed: %s", command, exc)
            self.say(f"Error: {exc}")
        except OSError as exc:
            logger.warning("%s failed: %s", command, exc)
            self.say(f"Error: {exc.strerror or exc}")
        except UnicodeError as exc:
            logger.warning("%s failed: %s", command, exc)
            self.say("Error: input is not valid UTF-8.")
        except EOFError:
            self.say("Error reading input.")

    # -- building blocks ---------------------------------------------------

    def _name(self, prompt: str) -> SanitizedName:
        return sanitize(self.ask(prompt), self.config.max_name_bytes)

    def _directory(self, session: Session, title: str) -> Path:
        return select(
            session.roots,
            title,
            ask=self.ask,
            say=self.say,
            max_name_bytes=self.config.max_name_bytes,
        )

    def _target(self, session: Session, directory: Path, name: str) -> ConfinedPath:
        # TOCTOU: executors re-check right before the filesystem call, the
        # tree may still change in between.
        return confine(session.roots, os.path.join(directory, name))

    # -- commands ----------------------------------------------------------

    def do_list(self, session: Session) -> None:
        result = self.ops.call("list", roots=list(session.roots))
        self.say("Listing files in allowed directories:")
        for entry in result["roots"]:
            self.say(f"\nDirectory: {entry['root']}")
            for path in entry["files"]:
                self.say(path)
            self.say(f"Number of files in {entry['root']}: {entry['count']}")
        self.say(f"\nTotal number of files: {result['total']}")

    def do_change_perms(self, session: Session) -> None:
        name = self._name("Enter file name to change permissions: ")
        directory = self._directory(session, "Select the directory of the file:")
        target = self._target(session, directory, name)
        if not target.path.exists():
            self.say("File does not exist.")
            return
        mode = self.ask("Enter new permissions (e.g., 755): ").strip()
        self.ops.call("change_perms", roots=list(session.roots), target=target, mode=mode)
        self.say(f"Permissions changed for {target}")

    def do_create_dir(self, session: Session) -> None:
        name = self._name("Enter directory name to create: ")
        directory = self._directory(
            session, "Select the directory to create the new directory in:"
        )
        target = self._target(session, directory, name)
        if target.path.is_dir():
            self.say("Directory already exists.")
            return
        self.ops.call("create_dir", roots=list(session.roots), target=target)
        self.say(f"Directory created: {target}")

    def do_delete_dir(self, session: Session) -> None:
        name = self._name("Enter directory name to delete: ")
        directory = self._directory(
            session, "Select the directory where the directory to delete is located:"
        )
        target = self._target(session, directory, name)
        if not target.path.is_dir():
            self.say("Directory does not exist.")
            return
        self.ops.call("delete_dir", roots=list(session.roots), target=target)
        self.say(f"Directory deleted: {target}")

    def do_create_file(self, session: Session) -> None:
        name = self._name("Enter file name to create: ")
        directory = self._directory(session, "Select the directory to create the new file in:")
        target = self._target(session, directory, name)
        self.ops.call("create_file", roots=list(session.roots), target=target)
        self.say(f"File created: {target}")

    def do_delete_file(self, session: Session) -> None:
        name = self._name("Enter file name to delete: ")
        directory = self._directory(session, "Select the directory where the file is located:")
        target = self._target(session, directory, name)
        if not target.path.is_file():
            self.say("File does not exist.")
            return
        self.ops.call("delete_file", roots=list(session.roots), target=target)
        self.say(f"File deleted: {target}")

    def do_symlink(self, session: Session) -> None:
        target_raw = self.ask("Enter target file for symbolic link: ")
        link_raw = self.ask("Enter symbolic link name: ")
        target_name = sanitize(target_raw, self.config.max_name_bytes)
        link_name = sanitize(link_raw, self.config.max_name_bytes)
        target_dir = self._directory(
            session, "Select the directory where the target file is located:"
        )
        link_dir = self._directory(
            session, "Select the directory where the symbolic link will be created:"
        )
        target = self._target(session, target_dir, target_name)
        link = self._target(session, link_dir, link_name)
        if not target.path.exists():
            self.say("Target file does not exist.")
            return
        self.ops.call("symlink", roots=list(session.roots), target=target, link=link)
        self.say(f"Symbolic link created: {link}")

    def do_copy(self, session: Session) -> None:
        source_raw = self.ask("Enter source file to copy: ")
        destination_raw = self.ask("Enter destination file name: ")
        source_name = sanitize(source_raw, self.config.max_name_bytes)
        destination_name = sanitize(destination_raw, self.config.max_name_bytes)
        source_dir = self._directory(
            session, "Select the directory where the source file is located:"
        )
        destination_dir = self._directory(
            session, "Select the directory where the destination file will be created:"
        )
        source = self._target(session, source_dir, source_name)
        destination = self._target(session, destination_dir, destination_name)
        if not source.path.exists():
            self.say("Source file does not exist.")
            return
        self.ops.call("copy", roots=list(session.roots), source=source, destination=destination)
        self.say(f"File copied from {source} to {destination}")

    def do_move(self, session: Session) -> None:
        name = self._name("Enter source file to move: ")
        source_dir = self._directory(
            session, "Select the directory where the source file is located:"
        )
        destination_dir = self._directory(
            session, "Select the directory where the file will be moved to:"
        )
        source = self._target(session, source_dir, name)
        destination = self._target(session, destination_dir, name)
        if not source.path.exists():
            self.say("Source file does not exist.")
            return
        self.ops.call("move", roots=list(session.roots), source=source, destination=destination)
        self.say(f"File moved from {source} to {destination}")

    def do_append(self, session: Session) -> None:
        name = self._name("Enter file name to append text: ")
        directory = self._directory(
            session, "Select the directory where the file is located or will be created:"
        )
        target = self._target(session, directory, name)
        text = self.ask("Enter text to append: ")
        self.ops.call("append", roots=list(session.roots), target=target, text=text)
        self.say(f"Text appended to {target}")

    def do_view(self, session: Session) -> None:
        name = self._name("Enter file name to view content: ")
        directory = self._directory(session, "Select the directory where the file is located:")
        target = self._target(session, directory, name)
        if not target.path.is_file():
            self.say("File does not exist.")
            return
        option = self.ask("View whole file or (h)ead/(t)ail? (w/h/t): ").strip().lower()[:1]
        modes = {"w": "whole", "h": "head", "t": "tail"}
        if option not in modes:
            self.say("Invalid option.")
            return
        params = {"roots": list(session.roots), "target": target, "mode": modes[option]}
        if option in ("h", "t"):
            lines = _parse_int(self.ask("Enter number of lines to display: "))
            if lines is None or lines <= 0:
                self.say("Invalid number of lines.")
                return
            params["lines"] = lines
        result = self.ops.call("view", **params)
        content = result["content"]
        if content:
            self.say(content.rstrip("\n"))

    def do_find(self, session: Session) -> None:
        pattern = self.ask("Enter file name pattern to search (use '*' for wildcards): ")
        if not pattern:
            self.say("Pattern must not be empty.")
            return
        self.say(f"Searching for files matching {pattern} in allowed directories.")
        result = self.ops.call("find", roots=list(session.roots), pattern=pattern)
        for path in result["matches"]:
            self.say(path)

    def do_search(self, session: Session) -> None:
        keyword = self.ask("Enter keyword to search in files: ")
        if not keyword:
            self.say("Keyword must not be empty.")
            return
        self.say(f"Searching for keyword '{keyword}' in files under allowed directories.")
        result = self.ops.call("search", roots=list(session.roots), keyword=keyword)
        for hit in result["hits"]:
            self.say(hit)

    def do_set_alias(self, session: Session) -> None:
        book = session.aliases
        if book is None:
            self.say("Aliases not available for this user.")
            return
        name = self.ask("Enter alias name: ")
        command = self.ask("Enter command to associate with the alias: ")
        try:
            book.set(name, command)
        except AliasLimitReached as exc:
            self.say(str(exc))
            return
        except ValidationError:
            self.say("Alias name and command must not be empty.")
            return
        self.say(f"Alias '{name}' set for command '{command}'.")

    def do_use_alias(self, session: Session) -> None:
        book = session.aliases
        if book is None:
            self.say("Aliases not available for this user.")
            return
        name = self.ask("Enter alias to use: ")
        command = book.lookup(name)
        if command is None:
            self.say("Alias not found.")
            return
        if not is_known_command(command):
            self.say(f"Command associated with alias '{command}' is not recognized.")
            return
        if not alias_allowed(session.role, command):
            logger.warning(
                "alias %r for role %s points at %s outside its menu",
                name,
                session.role.value,
                command,
            )
            self.say(f"Command '{command}' is not available for this user.")
            return
        getattr(self, f"do_{command}")(session)
