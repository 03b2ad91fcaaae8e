from pathlib import Path
import os
import re
from .errors import MygitError, RefNotFoundError, StorageError
from .file_helpers import REPO_DIR_NAME, atomic_write_bytes
from .models import HeadInfo

DEFAULT_BRANCH = "main"
DEFAULT_AUTHOR = "me"   # placeholder until authors are configurable

_FINGERPRINT_RE = re.compile(r"^[0-9a-f]{40}$")

def find_repo_root(start: Path | None = None) -> Path | None:
    start = (start or Path.cwd()).resolve()
    for directory in [start] + list(start.parents):
        if (directory / REPO_DIR_NAME).is_dir():
            return directory
        if directory == Path.home():    # won't look past home directory
            return None
    return None

def require_repo_root(start: Path | None = None) -> Path:
    repo_root = find_repo_root(start)
    if repo_root is None:
        raise MygitError(f"not in a repository (no {REPO_DIR_NAME} directory found)")
    return repo_root

def get_head_path(repo_root: Path) -> Path:
    return repo_root / REPO_DIR_NAME / "HEAD"

def get_head_info(repo_root: Path) -> HeadInfo:
    head_path = get_head_path(repo_root)
    try:
        content = head_path.read_text().strip()
    except FileNotFoundError as e:
        raise RefNotFoundError("HEAD file does not exist") from e
    except OSError as e:
        raise StorageError(f"could not read HEAD: {e}") from e
    if not content.startswith("ref: "):
        raise StorageError("invalid HEAD file format")
    return HeadInfo(ref=content[5:].strip())

def update_head(repo_root: Path, head_info: HeadInfo) -> None:
    atomic_write_bytes(get_head_path(repo_root), f"ref: {head_info.ref}\n".encode())

def get_ref_path(repo_root: Path, ref: str) -> Path:
    return repo_root / REPO_DIR_NAME / ref

def get_branch_ref(branch_name: str = DEFAULT_BRANCH) -> str:
    return f"refs/heads/{branch_name}"

def read_branch_head(repo_root: Path) -> str | None:
    """Return the commit HEAD's branch points at, or None before the first commit."""
    ref_path = get_ref_path(repo_root, get_head_info(repo_root).ref)
    try:
        content = ref_path.read_text().strip()
    except FileNotFoundError:
        return None
    except OSError as e:
        raise StorageError(f"could not read {ref_path.name} ref: {e}") from e
    if not content:
        return None
    if not _FINGERPRINT_RE.match(content):
        raise StorageError(f"ref {ref_path.name} holds an invalid commit hash")
    return content

def update_branch_head(repo_root: Path, commit_hash: str) -> None:
    ref_path = get_ref_path(repo_root, get_head_info(repo_root).ref)
    atomic_write_bytes(ref_path, commit_hash.encode())

def to_repo_path(repo_root: Path, raw_path: str) -> str:
    """Map a path given on the command line to its key in the index (POSIX, relative to the repository root)."""
    if "\n" in raw_path or "\r" in raw_path:
        raise MygitError(f"{raw_path!r} contains a line break")
    absolute = Path(os.path.abspath(raw_path))
    try:
        relative = absolute.relative_to(repo_root)
    except ValueError as e:
        raise MygitError(f"'{raw_path}' is outside the repository") from e
    if not relative.parts:
        raise MygitError(f"'{raw_path}' is not a file")
    if relative.parts[0] == REPO_DIR_NAME:
        raise MygitError(f"'{raw_path}' is inside the {REPO_DIR_NAME} directory")
    return relative.as_posix()
