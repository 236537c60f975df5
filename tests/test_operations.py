import importlib
import os
import pkgutil
import stat
import sys

import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import operations
from confinement import PathEscape, confine
from models.roles import Role
from op_registry import OperationError, OpSpec, autodiscover_operations, registry


autodiscover_operations("operations")


@pytest.fixture
def warehouse(scopes):
    return scopes.roots_for(Role.WAREHOUSE)


def test_every_operation_module_exports_spec():
    modules = pkgutil.iter_modules(operations.__path__, operations.__name__ + ".")
    for modinfo in modules:
        short_name = modinfo.name.rsplit(".", 1)[-1]
        if short_name.startswith("_"):
            continue
        module = importlib.import_module(modinfo.name)
        assert isinstance(getattr(module, "OPERATION", None), OpSpec)


def test_registry_lists_all_menu_operations():
    assert set(registry.list()) >= {
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
    }


def test_unknown_operation():
    with pytest.raises(OperationError):
        registry.call("format_disk")


def test_create_append_view_delete_file(warehouse):
    target = confine(warehouse, warehouse[0] / "manifest.txt")
    registry.call("create_file", roots=list(warehouse), target=target)
    assert target.path.is_file()
    registry.call("append", roots=list(warehouse), target=target, text="pallet 1")
    registry.call("append", roots=list(warehouse), target=target, text="pallet 2")
    registry.call("append", roots=list(warehouse), target=target, text="pallet 3")
    whole = registry.call("view", roots=list(warehouse), target=target)
    assert whole["content"] == "pallet 1\npallet 2\npallet 3\n"
    head = registry.call("view", roots=list(warehouse), target=target, mode="head", lines=1)
    assert head["content"] == "pallet 1\n"
    tail = registry.call("view", roots=list(warehouse), target=target, mode="tail", lines=2)
    assert tail["content"] == "pallet 2\npallet 3\n"
    registry.call("delete_file", roots=list(warehouse), target=target)
    assert not target.path.exists()


def test_view_rejects_non_positive_line_count(warehouse):
    target = confine(warehouse, warehouse[0] / "a.txt")
    target.path.write_text("x\n", encoding="utf-8")
    with pytest.raises(OperationError):
        registry.call("view", roots=list(warehouse), target=target, mode="head", lines=0)


def test_directories(warehouse):
    target = confine(warehouse, warehouse[0] / "incoming")
    registry.call("create_dir", roots=list(warehouse), target=target)
    assert target.path.is_dir()
    (target.path / "box.txt").write_text("", encoding="utf-8")
    with pytest.raises(FileExistsError):
        registry.call("create_dir", roots=list(warehouse), target=target)
    registry.call("delete_dir", roots=list(warehouse), target=target)
    assert not target.path.exists()


def test_delete_dir_refuses_a_root(warehouse):
    target = confine(warehouse, os.path.join(warehouse[0], "."))
    with pytest.raises(OperationError):
        registry.call("delete_dir", roots=list(warehouse), target=target)
    assert warehouse[0].is_dir()


def test_change_perms(warehouse):
    target = confine(warehouse, warehouse[0] / "perm.txt")
    target.path.write_text("", encoding="utf-8")
    registry.call("change_perms", roots=list(warehouse), target=target, mode="640")
    assert stat.S_IMODE(target.path.stat().st_mode) == 0o640
    with pytest.raises(OperationError):
        registry.call("change_perms", roots=list(warehouse), target=target, mode="9z")


def test_copy_move_and_symlink(warehouse):
    source = confine(warehouse, warehouse[0] / "order.txt")
    source.path.write_text("42 crates", encoding="utf-8")
    copy = confine(warehouse, warehouse[1] / "order-copy.txt")
    registry.call("copy", roots=list(warehouse), source=source, destination=copy)
    assert copy.path.read_text(encoding="utf-8") == "42 crates"

    moved = confine(warehouse, warehouse[1] / "order.txt")
    registry.call("move", roots=list(warehouse), source=source, destination=moved)
    assert not source.path.exists()
    assert moved.path.read_text(encoding="utf-8") == "42 crates"

    link = confine(warehouse, warehouse[0] / "latest")
    registry.call("symlink", roots=list(warehouse), target=moved, link=link)
    assert link.path.is_symlink()
    assert os.readlink(link.path) == str(moved.path)


def test_executor_rechecks_before_acting(tmp_path, warehouse):
    target = confine(warehouse, warehouse[0] / "swap.txt")
    target.path.write_text("", encoding="utf-8")
    outside = tmp_path / "victim.txt"
    outside.write_text("keep me", encoding="utf-8")
    target.path.unlink()
    target.path.symlink_to(outside)
    with pytest.raises(PathEscape):
        registry.call("append", roots=list(warehouse), target=target, text="gotcha")
    assert outside.read_text(encoding="utf-8") == "keep me"


def test_list_find_and_search(warehouse):
    (warehouse[0] / "a.txt").write_text("fragile goods\n", encoding="utf-8")
    (warehouse[0] / "bins").mkdir()
    (warehouse[0] / "bins" / "b.log").write_text("routine\nfragile lid\n", encoding="utf-8")
    (warehouse[1] / "c.txt").write_text("nothing here\n", encoding="utf-8")
    (warehouse[1] / "alias.txt").symlink_to(warehouse[0] / "a.txt")

    listing = registry.call("list", roots=list(warehouse))
    assert listing["total"] == 3
    assert [entry["count"] for entry in listing["roots"]] == [2, 1]

    found = registry.call("find", roots=list(warehouse), pattern="*.txt")
    names = sorted(os.path.basename(path) for path in found["matches"])
    assert names == ["a.txt", "alias.txt", "c.txt"]

    hits = registry.call("search", roots=list(warehouse), keyword="fragile")["hits"]
    assert len(hits) == 2
    assert any(hit.endswith("b.log:2:fragile lid") for hit in hits)


def test_list_requires_roots():
    with pytest.raises(OperationError):
        registry.call("list", roots=[])


def test_executor_ignores_forged_root(tmp_path, warehouse):
    victim = tmp_path / "victim.txt"
    victim.write_text("keep me", encoding="utf-8")
    forged = {"path": str(victim), "resolved": str(victim), "root": "/"}
    with pytest.raises(PathEscape):
        registry.call("delete_file", roots=list(warehouse), target=forged)
    assert victim.read_text(encoding="utf-8") == "keep me"


def test_executor_rejects_target_outside_its_own_root(tmp_path, warehouse):
    victim = tmp_path / "victim.txt"
    victim.write_text("keep me", encoding="utf-8")
    forged = {"path": str(victim), "resolved": str(victim), "root": str(warehouse[0])}
    with pytest.raises(OperationError):
        registry.call("delete_file", roots=list(warehouse), target=forged)
    assert victim.exists()
