from repo_status.git_ops.records import FileStatus
from repo_status.ui.registry import StatusRegistry


def test_apply_updates_every_consumer_once():
    registry = StatusRegistry(["a.txt", "b.txt", "c.txt"])

    changed = registry.apply({"a.txt": FileStatus.MODIFIED, "b.txt": FileStatus.UPTODATE})

    assert changed == ["a.txt", "b.txt"]
    assert registry.get("a.txt") is FileStatus.MODIFIED
    assert registry.get("c.txt") is None


def test_missing_entries_clear_previous_status():
    registry = StatusRegistry(["a.txt"])
    registry.apply({"a.txt": FileStatus.STAGED})

    assert registry.apply({}) == ["a.txt"]
    assert registry.get("a.txt") is None


def test_apply_limited_to_refreshed_consumers():
    registry = StatusRegistry(["a.txt", "b.txt"])
    registry.apply({"a.txt": FileStatus.ADDED, "b.txt": FileStatus.ADDED})

    changed = registry.apply({}, refreshed=["a.txt"])

    assert changed == ["a.txt"]
    assert registry.get("b.txt") is FileStatus.ADDED


def test_unregistered_names_are_ignored():
    registry = StatusRegistry()
    registry.register("x")

    assert registry.apply({"y": FileStatus.UNKNOWN}, refreshed=["x", "y"]) == []
    assert registry.consumers == ["x"]

    registry.unregister("x")
    assert registry.consumers == []


def test_reapplying_same_mapping_changes_nothing():
    registry = StatusRegistry(["a.txt"])
    mapping = {"a.txt": FileStatus.DELETED}

    registry.apply(mapping)
    assert registry.apply(mapping) == []
