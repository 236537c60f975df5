import os
import sys
from pathlib import Path

import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from confinement import (
    InvalidName,
    PathEscape,
    ScopeSelection,
    SelectionError,
    SelectionState,
    select,
)
from models.roles import Role


@pytest.fixture
def roots(scopes):
    return scopes.roots_for(Role.ADMIN)


def test_direct_root_choice(roots):
    selection = ScopeSelection(roots, "Pick one:")
    assert selection.state is SelectionState.AWAITING_ROOT_CHOICE
    assert selection.feed("1") == roots[0]
    assert selection.state is SelectionState.RESOLVED


def test_other_into_existing_subdirectory(roots):
    warehouse = roots[1]
    (warehouse / "incoming").mkdir()
    selection = ScopeSelection(roots, "Pick one:")
    assert selection.feed("4") is None
    assert selection.state is SelectionState.AWAITING_OTHER_ROOT_CHOICE
    assert selection.feed("2") is None
    assert selection.state is SelectionState.AWAITING_SUBDIR_NAME
    assert selection.parent == warehouse
    assert selection.feed("incoming") == warehouse / "incoming"
    assert selection.result == warehouse / "incoming"


def test_other_into_missing_subdirectory_fails(roots):
    selection = ScopeSelection(roots, "Pick one:")
    selection.feed("4")
    selection.feed("2")
    with pytest.raises(SelectionError, match="does not exist"):
        selection.feed("incoming")


def test_other_rejects_a_file(roots):
    (roots[1] / "notes.txt").write_text("", encoding="utf-8")
    selection = ScopeSelection(roots, "Pick one:")
    selection.feed("4")
    selection.feed("2")
    with pytest.raises(SelectionError):
        selection.feed("notes.txt")


@pytest.mark.parametrize("answer", ["0", "5", "-1", "abc", ""])
def test_bad_root_choice(roots, answer):
    with pytest.raises(SelectionError, match="Invalid choice"):
        ScopeSelection(roots, "Pick one:").feed(answer)


def test_other_root_choice_excludes_other_option(roots):
    selection = ScopeSelection(roots, "Pick one:")
    selection.feed("4")
    with pytest.raises(SelectionError):
        selection.feed("4")


@pytest.mark.parametrize("name", ["../admin", "a/b", "/etc", ""])
def test_other_rejects_unsanitary_names(roots, name):
    selection = ScopeSelection(roots, "Pick one:")
    selection.feed("4")
    selection.feed("1")
    with pytest.raises(SelectionError) as info:
        selection.feed(name)
    assert isinstance(info.value.__cause__, InvalidName)


def test_other_rejects_symlink_out_of_scope(tmp_path, roots):
    outside = tmp_path / "elsewhere"
    outside.mkdir()
    (roots[2] / "shortcut").symlink_to(outside, target_is_directory=True)
    selection = ScopeSelection(roots, "Pick one:")
    selection.feed("4")
    selection.feed("3")
    with pytest.raises(SelectionError) as info:
        selection.feed("shortcut")
    assert isinstance(info.value.__cause__, PathEscape)


def test_feed_after_resolution_fails(roots):
    selection = ScopeSelection(roots, "Pick one:")
    selection.feed("2")
    with pytest.raises(SelectionError):
        selection.feed("1")


def test_subdirectory_name_without_parent_fails(roots):
    selection = ScopeSelection(roots, "Pick one:")
    selection.state = SelectionState.AWAITING_SUBDIR_NAME
    with pytest.raises(SelectionError, match="No base directory"):
        selection.feed("bins")


def test_prompt_lines_follow_state(roots):
    selection = ScopeSelection(roots, "Select the directory:")
    lines = selection.prompt_lines()
    assert lines[0] == "Select the directory:"
    assert lines[1] == f"1. {roots[0]}"
    assert lines[-1].startswith("4. Other")
    selection.feed("4")
    assert len(selection.prompt_lines()) == 1 + len(roots)
    selection.feed("1")
    assert selection.prompt_lines() == []
    assert "subdirectory" in selection.prompt()


def test_select_drives_console_io(roots, script):
    (roots[0] / "inbound").mkdir()
    io = script(["4", "1", "inbound"])
    result = select(roots, "Select the directory:", ask=io.ask, say=io.say)
    assert result == Path(roots[0]) / "inbound"
    assert io.output[0] == "Select the directory:"
    assert io.prompts == [
        "Enter your choice: ",
        "Enter your choice: ",
        "Enter the subdirectory name under the selected base directory: ",
    ]


def test_select_end_of_input_is_selection_error(roots, script):
    io = script([])
    with pytest.raises(SelectionError, match="Error reading input"):
        select(roots, "Select:", ask=io.ask, say=io.say)


def test_customer_sees_single_root(scopes):
    roots = scopes.roots_for(Role.CUSTOMER)
    selection = ScopeSelection(roots, "Select:")
    assert selection.other_index == 2
    assert selection.feed("1") == roots[0]
