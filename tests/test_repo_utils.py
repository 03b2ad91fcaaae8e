import pytest

from mygit.errors import MygitError, RefNotFoundError, StorageError
from mygit.repo_utils import (
    get_head_info,
    get_head_path,
    get_ref_path,
    read_branch_head,
    to_repo_path,
    update_branch_head,
)

C = "c" * 40


def test_head_names_main(repo):
    assert get_head_info(repo).ref == "refs/heads/main"


def test_missing_head(repo):
    get_head_path(repo).unlink()
    with pytest.raises(RefNotFoundError):
        get_head_info(repo)


def test_malformed_head(repo):
    get_head_path(repo).write_text("refs/heads/main\n")
    with pytest.raises(StorageError):
        get_head_info(repo)


def test_no_commits_yet_when_ref_empty(repo):
    assert read_branch_head(repo) is None


def test_no_commits_yet_when_ref_absent(repo):
    get_ref_path(repo, "refs/heads/main").unlink()
    assert read_branch_head(repo) is None


def test_ref_read_failure_is_not_no_commits(repo):
    ref_path = get_ref_path(repo, "refs/heads/main")
    ref_path.unlink()
    ref_path.mkdir()
    with pytest.raises(StorageError):
        read_branch_head(repo)


def test_ref_with_invalid_hash(repo):
    get_ref_path(repo, "refs/heads/main").write_text("not-a-hash")
    with pytest.raises(StorageError):
        read_branch_head(repo)


def test_ref_round_trip(repo):
    update_branch_head(repo, C)
    assert read_branch_head(repo) == C
    assert get_ref_path(repo, "refs/heads/main").read_text() == C


def test_repo_path_from_subdirectory(repo, monkeypatch):
    (repo / "sub").mkdir()
    monkeypatch.chdir(repo / "sub")
    assert to_repo_path(repo, "x.txt") == "sub/x.txt"


@pytest.mark.parametrize("raw_path", ["a\nb.txt", "a\rb.txt", ".mygit/index", "../outside.txt", "."])
def test_rejected_repo_paths(repo, raw_path):
    with pytest.raises(MygitError):
        to_repo_path(repo, raw_path)
