import itertools

from repo_status.git_ops.ordering import compare_records, directory_key, order_for_display, tree_lessp
from repo_status.git_ops.records import EntryType, FileRecord


def blob(name):
    return FileRecord(name=name, entry_type=EntryType.BLOB)


def tree(name):
    return FileRecord(name=name, entry_type=EntryType.TREE)


SAMPLE = [
    tree("a/"),
    blob("a/b.txt"),
    tree("a/c/"),
    blob("a/c/d.txt"),
    blob("a/c/e/f.txt"),
    blob("a.txt"),
    blob("a-b/x"),
    blob("b.txt"),
    tree("lib"),
    blob("lib/z.py"),
    FileRecord(name="vendor/mod", entry_type=EntryType.COMMIT),
    blob("vendor/readme"),
]


def test_directory_key():
    assert directory_key(blob("b.txt")) == ""
    assert directory_key(blob("a/b.txt")) == "a/"
    assert directory_key(tree("a/c/")) == "a/c/"
    assert directory_key(tree("a/c")) == "a/c/"


def test_directory_follows_its_contents_and_precedes_next_sibling():
    records = [tree("a/"), blob("a/b.txt"), tree("a/c/"), blob("b.txt")]

    names = [r.name for r in order_for_display(reversed(records))]
    position = {name: names.index(name) for name in names}

    assert position["a/b.txt"] < position["a/"]
    assert position["a/c/"] < position["a/"]
    assert position["a/"] < position["b.txt"]


def test_same_directory_sorts_by_name():
    ordered = order_for_display([blob("z.py"), blob("m.py"), blob("a.py")])
    assert [r.name for r in ordered] == ["a.py", "m.py", "z.py"]


def test_root_files_follow_subdirectories():
    ordered = order_for_display([blob("README"), blob("src/x.py"), blob("src/pkg/y.py")])
    assert [r.name for r in ordered] == ["src/pkg/y.py", "src/x.py", "README"]


def test_descendants_are_contiguous():
    ordered = [r.name for r in order_for_display(SAMPLE)]
    under_a = [i for i, name in enumerate(ordered) if name.startswith("a/")]

    assert under_a == list(range(under_a[0], under_a[0] + len(under_a)))
    assert ordered[under_a[-1]] == "a/"


def test_comparator_is_antisymmetric():
    for first, second in itertools.permutations(SAMPLE, 2):
        assert compare_records(first, second) == -compare_records(second, first)


def test_comparator_is_transitive():
    for x, y, z in itertools.permutations(SAMPLE, 3):
        if tree_lessp(x, y) and tree_lessp(y, z):
            assert tree_lessp(x, z), (x.name, y.name, z.name)


def test_order_does_not_depend_on_input_order():
    expected = order_for_display(SAMPLE)
    assert order_for_display(reversed(SAMPLE)) == expected
    assert order_for_display(sorted(SAMPLE, key=lambda r: r.name)) == expected


def test_record_equal_to_itself():
    assert compare_records(blob("a/b"), blob("a/b")) == 0
    assert not tree_lessp(blob("a/b"), blob("a/b"))
