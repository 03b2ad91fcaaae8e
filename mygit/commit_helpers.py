from collections.abc import Iterator
from datetime import datetime
from pathlib import Path
from pydantic import ValidationError
from .errors import MygitError, NothingStagedError, StorageError
from .file_helpers import (
    REPO_DIR_NAME,
    atomic_write_bytes,
    delete_object,
    get_hash_from_content,
    object_exists,
    read_object,
    write_object,
)
from .models import CommitInfo, IndexEntry, PendingCommit
from .repo_utils import DEFAULT_AUTHOR, read_branch_head, update_branch_head
from .staging_helpers import clear_staging, list_staged

def get_pending_commit_path(repo_root: Path) -> Path:
    return repo_root / REPO_DIR_NAME / "COMMIT_PENDING"

def current_commit_hash(repo_root: Path) -> str | None:
    return read_branch_head(repo_root)

def get_commit_info(repo_root: Path, commit_hash: str) -> CommitInfo:
    record = read_object(repo_root, commit_hash)
    try:
        return CommitInfo.from_record(record)
    except ValueError as e:
        raise StorageError(f"object {commit_hash} is not a valid commit: {e}") from e

def get_committed_files(repo_root: Path) -> dict[str, str]:
    commit_hash = current_commit_hash(repo_root)
    if commit_hash is None:
        return {}
    return {entry.path: entry.hash for entry in get_commit_info(repo_root, commit_hash).blobs}

def iter_history(repo_root: Path) -> Iterator[tuple[str, CommitInfo]]:
    commit_hash = current_commit_hash(repo_root)
    while commit_hash:
        commit_info = get_commit_info(repo_root, commit_hash)
        yield commit_hash, commit_info
        commit_hash = commit_info.parent

def build_commit_info(parent: str, blobs: list[IndexEntry], author: str, message: str, now: datetime | None = None) -> CommitInfo:
    if "\n" in message or "\r" in message:
        raise MygitError("commit message must be a single line")
    if now is None:
        now = datetime.now().astimezone()
    try:
        return CommitInfo(
            parent=parent,
            blobs=blobs,
            author=author,
            message=message,
            date=now.replace(microsecond=0),
        )
    except ValidationError as e:
        raise MygitError(f"invalid commit: {e}") from e

def _rollback(repo_root: Path, pending: PendingCommit) -> None:
    update_branch_head(repo_root, pending.parent)
    if pending.created_object:
        delete_object(repo_root, pending.commit)
    get_pending_commit_path(repo_root).unlink(missing_ok=True)

def recover_interrupted_commit(repo_root: Path) -> None:
    """Finish or undo a commit that was journaled but never completed.

    If the ref already points at the journaled commit only the index clear is
    missing, so the commit is finished. Otherwise the ref is restored and the
    orphaned commit object is removed.
    """
    pending_path = get_pending_commit_path(repo_root)
    if not pending_path.exists():
        return
    try:
        pending = PendingCommit.model_validate_json(pending_path.read_text())
    except (OSError, ValidationError) as e:
        raise StorageError(f"could not read commit journal: {e}") from e
    if read_branch_head(repo_root) == pending.commit:
        clear_staging(repo_root)
        pending_path.unlink()
    else:
        _rollback(repo_root, pending)

def create_commit(repo_root: Path, message: str, author: str = DEFAULT_AUTHOR, now: datetime | None = None) -> str:
    staged = list_staged(repo_root)
    if not staged:
        raise NothingStagedError("nothing staged for commit")

    parent = current_commit_hash(repo_root) or ""
    commit_info = build_commit_info(parent, staged, author, message, now)
    record = commit_info.to_record()
    commit_hash = get_hash_from_content(record)

    pending = PendingCommit(
        commit=commit_hash,
        parent=parent,
        created_object=not object_exists(repo_root, commit_hash),
    )
    pending_path = get_pending_commit_path(repo_root)
    atomic_write_bytes(pending_path, pending.model_dump_json().encode())
    try:
        write_object(repo_root, record)
        update_branch_head(repo_root, commit_hash)
        clear_staging(repo_root)
    except (OSError, MygitError) as e:
        _rollback(repo_root, pending)
        raise StorageError(f"commit failed, repository left unchanged: {e}") from e
    pending_path.unlink()
    return commit_hash
