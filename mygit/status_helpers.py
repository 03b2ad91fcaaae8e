from pathlib import Path
from .errors import StorageError
from .commit_helpers import get_committed_files
from .file_helpers import REPO_DIR_NAME, get_file_hash
from .models import StatusInfo
from .staging_helpers import get_staging_info

def iter_working_files(repo_root: Path):
    """Yield the regular files at the top of the working tree. Subdirectories are not descended into."""
    try:
        entries = sorted(repo_root.iterdir())
    except OSError as e:
        raise StorageError(f"could not read working directory: {e}") from e
    for item in entries:
        if item.name == REPO_DIR_NAME or not item.is_file():
            continue
        yield item

def compute_status(repo_root: Path) -> StatusInfo:
    staging_info = get_staging_info(repo_root)
    committed_files = get_committed_files(repo_root)
    status_info = StatusInfo(staged=set(staging_info))

    for filepath in iter_working_files(repo_root):
        name = filepath.name
        if name in staging_info:
            continue    # staged content wins over any drift from the last commit
        if name not in committed_files:
            status_info.untracked.add(name)
            continue
        try:
            current_hash = get_file_hash(filepath)
        except OSError:
            continue    # unreadable files are not reported
        if current_hash != committed_files[name]:
            status_info.modified.add(name)
    return status_info
