import asyncio
import os
from pathlib import Path

import pytest

import sphido.tree
from sphido.pages import Directory, Page
from sphido.tree import NotFoundError, build_tree, walk


def create_content(tmp_path: Path) -> Path:
    root = tmp_path / "content"
    (root / "dir" / "empty_subdir").mkdir(parents=True)
    (root / "a.md").write_text("# A", encoding="utf-8")
    (root / "dir" / "b.md").write_text("# B", encoding="utf-8")
    return root


def build(root, extenders=(), **kwargs):
    return asyncio.run(build_tree(root, extenders, **kwargs))


def test_build_tree_shape(tmp_path):
    root = create_content(tmp_path)
    tree = build(root)

    assert len(tree) == 2
    page, directory = tree
    assert isinstance(page, Page)
    assert page.name == "a"
    assert page.path == root / "a.md"
    assert isinstance(directory, Directory)
    assert directory.name == "dir"
    assert directory.path == root / "dir"
    assert [child.name for child in directory.children] == ["b"]
    assert [p.name for p in walk(tree)] == ["a", "b"]


def test_non_matching_files_are_skipped(tmp_path):
    root = tmp_path / "content"
    (root / "nested" / "deeper").mkdir(parents=True)
    matching = ["one.md", "two.html", "nested/three.MD", "nested/deeper/four.md"]
    other = ["notes.txt", "nested/image.png", "nested/deeper/data.json"]
    for name in matching + other:
        (root / name).write_text("x", encoding="utf-8")

    pages = list(walk(build(root)))
    assert len(pages) == len(matching)
    assert {p.path.suffix for p in pages} == {".md", ".html", ".MD"}


def test_empty_directories_are_pruned(tmp_path):
    root = tmp_path / "content"
    (root / "empty" / "still-empty").mkdir(parents=True)
    (root / "assets").mkdir()
    (root / "assets" / "logo.png").write_bytes(b"")
    (root / "index.md").write_text("home", encoding="utf-8")

    tree = build(root)
    assert [node.name for node in tree] == ["index"]


def test_children_are_sorted_by_name(tmp_path):
    root = tmp_path / "content"
    root.mkdir()
    for name in ["c.md", "a.md", "b.md"]:
        (root / name).write_text("x", encoding="utf-8")
    assert [p.name for p in build(root)] == ["a", "b", "c"]


def test_custom_extensions(tmp_path):
    root = create_content(tmp_path)
    (root / "page.txt").write_text("plain", encoding="utf-8")
    tree = build(root, extensions=[".TXT"])
    assert [p.name for p in walk(tree)] == ["page"]


def test_extenders_run_in_order(tmp_path):
    root = create_content(tmp_path)

    def first(page, path, entry):
        page.counter = 1

    async def second(page, path, entry):
        await asyncio.sleep(0)
        page.counter += 1

    pages = list(walk(build(root, [first, second])))
    assert [p.counter for p in pages] == [2, 2]


def test_extenders_receive_path_and_entry(tmp_path):
    root = create_content(tmp_path)
    seen = []

    def record(page, path, entry):
        seen.append((path, entry.name, entry.is_file()))

    build(root, [record])
    assert seen == [
        (root / "a.md", "a.md", True),
        (root / "dir" / "b.md", "b.md", True),
    ]


def test_mapping_extenders_last_write_wins(tmp_path):
    root = create_content(tmp_path)
    pages = list(walk(build(root, [{"a": 1, "b": 1}, {"a": 2}])))
    assert all(p.a == 2 and p.b == 1 for p in pages)


def test_extender_failure_fails_the_build(tmp_path):
    root = tmp_path / "content"
    root.mkdir()
    for index in range(5):
        (root / f"page{index}.md").write_text("x", encoding="utf-8")
    calls = []

    def flaky(page, path, entry):
        calls.append(page.name)
        if len(calls) == 3:
            raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        build(root, [flaky])
    assert calls == ["page0", "page1", "page2"]


def test_malformed_extender_raises_type_error(tmp_path):
    root = create_content(tmp_path)
    with pytest.raises(TypeError):
        build(root, [42])


def test_missing_root_raises_not_found(tmp_path):
    with pytest.raises(NotFoundError) as excinfo:
        build(tmp_path / "missing")
    assert isinstance(excinfo.value, FileNotFoundError)
    assert excinfo.value.path == tmp_path / "missing"


def test_file_root_raises_not_found(tmp_path):
    target = tmp_path / "file.md"
    target.write_text("x", encoding="utf-8")
    with pytest.raises(NotFoundError):
        build(target)


def test_walk_is_restartable(tmp_path):
    tree = build(create_content(tmp_path))
    first = walk(tree)
    assert next(first).name == "a"
    assert [p.name for p in walk(tree)] == ["a", "b"]
    assert [p.name for p in first] == ["b"]
    assert list(walk(tree)) == list(walk(tree))


def test_walk_skips_directories_depth_first():
    inner = Directory("y", Path("x/y"), [Page("y1", Path("x/y/y1.md"))])
    tree = [
        Directory("x", Path("x"), [Page("x1", Path("x/x1.md")), inner]),
        Page("z", Path("z.md")),
    ]
    assert [p.name for p in walk(tree)] == ["x1", "y1", "z"]
    assert list(walk([])) == []


def test_concurrent_builds_are_independent(tmp_path):
    root = create_content(tmp_path)

    async def both():
        return await asyncio.gather(
            build_tree(root, [{"build": 1}]),
            build_tree(root, [{"build": 2}]),
        )

    one, two = asyncio.run(both())
    assert [p.build for p in walk(one)] == [1, 1]
    assert [p.build for p in walk(two)] == [2, 2]
    assert next(walk(one)) is not next(walk(two))


def test_symlink_to_enclosing_directory_is_not_followed(tmp_path):
    root = create_content(tmp_path)
    os.symlink(root, root / "loop")
    os.symlink(root, root / "dir" / "back")

    tree = build(root)
    assert [node.name for node in tree] == ["a", "dir"]
    assert [p.path for p in walk(tree)] == [root / "a.md", root / "dir" / "b.md"]


def test_symlink_to_sibling_directory_is_followed(tmp_path):
    root = create_content(tmp_path)
    os.symlink(root / "dir", root / "alias")
    assert [p.path for p in walk(build(root))] == [
        root / "a.md",
        root / "alias" / "b.md",
        root / "dir" / "b.md",
    ]


def test_vanished_subdirectory_raises_not_found(monkeypatch, tmp_path):
    root = create_content(tmp_path)
    real_scan = sphido.tree._scan

    def scan(directory):
        if directory == root / "dir":
            raise FileNotFoundError(directory)
        return real_scan(directory)

    monkeypatch.setattr(sphido.tree, "_scan", scan)
    with pytest.raises(NotFoundError) as excinfo:
        build(root)
    assert excinfo.value.path == root / "dir"
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)
    assert not isinstance(excinfo.value.__cause__, NotFoundError)


def test_single_extension_string(tmp_path):
    root = create_content(tmp_path)
    (root / "page.html").write_text("x", encoding="utf-8")
    assert [p.name for p in walk(build(root, extensions=".md"))] == ["a", "b"]
