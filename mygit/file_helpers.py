from pathlib import Path
import hashlib
import os
import tempfile
from .errors import NoSuchPathError, ObjectNotFoundError, StorageError

REPO_DIR_NAME = ".mygit"

def get_objects_dir(repo_root: Path) -> Path:
    return repo_root / REPO_DIR_NAME / "objects"

def get_object_path(repo_root: Path, file_hash: str) -> Path:
    return get_objects_dir(repo_root) / file_hash

def atomic_write_bytes(dest_path: Path, content: bytes) -> None:
    """Write content to a temporary file beside dest_path and rename it into place."""
    try:
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=dest_path.parent, prefix=".tmp-")
    except OSError as e:
        raise StorageError(f"could not write {dest_path}: {e}") from e
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, dest_path)
    except OSError as e:
        Path(tmp_name).unlink(missing_ok=True)
        raise StorageError(f"could not write {dest_path}: {e}") from e

def get_hash_from_content(content: bytes) -> str:
    return hashlib.sha1(content).hexdigest()

def get_file_hash(filepath: Path) -> str:
    hasher = hashlib.sha1()
    with open(filepath, "rb") as f:
        while chunk := f.read(8192):
            hasher.update(chunk)
    return hasher.hexdigest()

def object_exists(repo_root: Path, file_hash: str) -> bool:
    return get_object_path(repo_root, file_hash).is_file()

def write_object(repo_root: Path, content: bytes) -> str:
    file_hash = get_hash_from_content(content)
    if object_exists(repo_root, file_hash):
        return file_hash    # same hash, same bytes
    atomic_write_bytes(get_object_path(repo_root, file_hash), content)
    return file_hash

def write_object_from_file(repo_root: Path, filepath: Path) -> str:
    try:
        content = filepath.read_bytes()
    except FileNotFoundError as e:
        raise NoSuchPathError(f"cannot read '{filepath}': file does not exist") from e
    except OSError as e:
        raise StorageError(f"cannot read '{filepath}': {e}") from e
    return write_object(repo_root, content)

def read_object(repo_root: Path, file_hash: str) -> bytes:
    object_path = get_object_path(repo_root, file_hash)
    try:
        return object_path.read_bytes()
    except FileNotFoundError as e:
        raise ObjectNotFoundError(f"object {file_hash} does not exist") from e
    except OSError as e:
        raise StorageError(f"could not read object {file_hash}: {e}") from e

def delete_object(repo_root: Path, file_hash: str) -> None:
    # only used to roll back an object created by an unfinished commit
    get_object_path(repo_root, file_hash).unlink(missing_ok=True)
