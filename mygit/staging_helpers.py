from pathlib import Path
from typing import TypeAlias
from pydantic import ValidationError
from .errors import MygitError, NotStagedError, StorageError
from .file_helpers import REPO_DIR_NAME, atomic_write_bytes
from .models import IndexEntry

StagingInfo: TypeAlias = dict[str, str]   # path -> blob hash, in staging order

def get_staging_path(repo_root: Path) -> Path:
    return repo_root / REPO_DIR_NAME / "index"

def get_staging_info(repo_root: Path) -> StagingInfo:
    staging_path = get_staging_path(repo_root)
    try:
        content = staging_path.read_bytes().decode()
    except FileNotFoundError:
        return {}
    except (OSError, UnicodeDecodeError) as e:
        raise StorageError(f"could not read index: {e}") from e
    info: StagingInfo = {}
    for line in content.split("\n"):
        if not line:
            continue
        # paths may contain spaces, the hash never does
        path, _, file_hash = line.rpartition(" ")
        try:
            entry = IndexEntry(path=path, hash=file_hash)
        except ValidationError as e:
            raise StorageError(f"corrupt index entry: {line!r}") from e
        info[entry.path] = entry.hash
    return info

def update_staging_info(repo_root: Path, info: StagingInfo) -> None:
    content = "".join(f"{path} {file_hash}\n" for path, file_hash in info.items())
    atomic_write_bytes(get_staging_path(repo_root), content.encode())

def list_staged(repo_root: Path) -> list[IndexEntry]:
    return [IndexEntry(path=path, hash=file_hash) for path, file_hash in get_staging_info(repo_root).items()]

def stage(repo_root: Path, path: str, file_hash: str) -> None:
    try:
        entry = IndexEntry(path=path, hash=file_hash)
    except ValidationError as e:
        raise MygitError(f"cannot stage '{path}': {e.errors()[0]['msg']}") from e
    staging_info = get_staging_info(repo_root)
    staging_info[entry.path] = entry.hash
    update_staging_info(repo_root, staging_info)

def unstage(repo_root: Path, path: str) -> None:
    staging_info = get_staging_info(repo_root)
    if path not in staging_info:
        raise NotStagedError(f"'{path}' is not staged")
    del staging_info[path]
    update_staging_info(repo_root, staging_info)

def clear_staging(repo_root: Path) -> None:
    update_staging_info(repo_root, {})

def remove_file(repo_root: Path, path: str) -> bool:
    """Delete path from the working tree and the index. Returns whether it was staged."""
    staging_info = get_staging_info(repo_root)
    try:
        (repo_root / path).unlink(missing_ok=True)
    except OSError as e:
        raise StorageError(f"could not remove '{path}': {e}") from e
    if path not in staging_info:
        return False
    del staging_info[path]
    update_staging_info(repo_root, staging_info)
    return True
