import pytest

from mygit.errors import MygitError, NotStagedError, StorageError
from mygit.file_helpers import get_objects_dir
from mygit.staging_helpers import (
    clear_staging,
    get_staging_info,
    get_staging_path,
    list_staged,
    remove_file,
    stage,
    unstage,
)
from main import main

A = "a" * 40
B = "b" * 40


def test_missing_index_is_empty(repo):
    get_staging_path(repo).unlink()
    assert get_staging_info(repo) == {}


def test_staging_keeps_other_paths(repo):
    stage(repo, "a.txt", A)
    stage(repo, "b.txt", B)
    assert get_staging_info(repo) == {"a.txt": A, "b.txt": B}


def test_restaging_replaces_entry_in_place(repo):
    stage(repo, "a.txt", A)
    stage(repo, "b.txt", B)
    stage(repo, "a.txt", B)
    assert [(e.path, e.hash) for e in list_staged(repo)] == [("a.txt", B), ("b.txt", B)]


def test_index_file_format(repo):
    stage(repo, "a.txt", A)
    stage(repo, "with space.txt", B)
    assert get_staging_path(repo).read_text() == f"a.txt {A}\nwith space.txt {B}\n"
    assert get_staging_info(repo)["with space.txt"] == B


def test_add_same_file_twice(repo):
    (repo / "a.txt").write_text("hello")
    assert main(["add", "a.txt"]) == 0
    objects = sorted(get_objects_dir(repo).iterdir())
    assert main(["add", "a.txt"]) == 0
    assert sorted(get_objects_dir(repo).iterdir()) == objects
    assert list(get_staging_info(repo)) == ["a.txt"]


def test_unstage(repo):
    stage(repo, "a.txt", A)
    stage(repo, "b.txt", B)
    unstage(repo, "a.txt")
    assert get_staging_info(repo) == {"b.txt": B}


def test_unstage_missing_path(repo):
    with pytest.raises(NotStagedError):
        unstage(repo, "nope.txt")


def test_clear(repo):
    stage(repo, "a.txt", A)
    clear_staging(repo)
    assert get_staging_info(repo) == {}
    assert get_staging_path(repo).read_text() == ""


def test_corrupt_index(repo):
    get_staging_path(repo).write_text("garbage\n")
    with pytest.raises(StorageError):
        get_staging_info(repo)


def test_remove_staged_file(repo):
    (repo / "a.txt").write_text("a")
    stage(repo, "a.txt", A)
    stage(repo, "b.txt", B)
    assert remove_file(repo, "a.txt") is True
    assert not (repo / "a.txt").exists()
    assert get_staging_info(repo) == {"b.txt": B}


def test_remove_unstaged_missing_file(repo):
    assert remove_file(repo, "ghost.txt") is False


def test_stage_rejects_line_breaks(repo):
    with pytest.raises(MygitError):
        stage(repo, "a\rb.txt", A)
    with pytest.raises(MygitError):
        stage(repo, "a\nb.txt", A)
    assert get_staging_info(repo) == {}


def test_remove_file_with_corrupt_index_keeps_file(repo):
    (repo / "a.txt").write_text("a")
    get_staging_path(repo).write_text("garbage\n")
    with pytest.raises(StorageError):
        remove_file(repo, "a.txt")
    assert (repo / "a.txt").exists()
