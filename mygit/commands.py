from .errors import MygitError, NoSuchPathError, StorageError
from pathlib import Path
from typing import Callable
from .repo_utils import (
    REPO_DIR_NAME,
    find_repo_root,
    get_branch_ref,
    require_repo_root,
    to_repo_path,
    update_branch_head,
    update_head,
)
from .file_helpers import write_object_from_file
from .staging_helpers import (
    remove_file,
    stage,
    unstage,
    update_staging_info,
)
from .commit_helpers import (
    create_commit,
    iter_history,
    recover_interrupted_commit,
)
from .status_helpers import compute_status
from .models import HeadInfo

def map_command(command: str) -> Callable:
    commandsMap = {
        "init": init,
        "add": add,
        "status": status,
        "commit": commit,
        "rm": rm,
        "reset": reset,
        "log": log,
    }
    if command not in commandsMap:
        raise MygitError(f"Unknown command: {command}")
    return commandsMap[command]

def open_repo() -> Path:
    repo_root = require_repo_root()
    recover_interrupted_commit(repo_root)
    return repo_root

def init(args):
    if find_repo_root() is not None:
        raise MygitError("already in a repository")
    repo_root = Path.cwd()
    repo_dir = repo_root / REPO_DIR_NAME
    try:
        (repo_dir / "objects").mkdir(parents=True)
        (repo_dir / "refs" / "heads").mkdir(parents=True)
    except OSError as e:
        raise StorageError(f"failed to create {REPO_DIR_NAME} directory: {e}") from e
    update_staging_info(repo_root, {})
    update_head(repo_root, HeadInfo(ref=get_branch_ref()))
    update_branch_head(repo_root, "")
    print(f"Initialized empty repository in {repo_dir}")

def add(args):
    repo_root = open_repo()
    relative_path = to_repo_path(repo_root, args.path)
    filepath = repo_root / relative_path
    if not filepath.exists():
        raise NoSuchPathError(f"'{args.path}' does not exist")
    if not filepath.is_file():
        raise MygitError(f"'{args.path}' is not a file")
    file_hash = write_object_from_file(repo_root, filepath)
    stage(repo_root, relative_path, file_hash)
    print(f"Added {relative_path} to staging.")

def commit(args):
    message = args.message_flag if args.message_flag is not None else args.message
    if message is None:
        raise MygitError("no message provided with commit")
    repo_root = open_repo()
    commit_hash = create_commit(repo_root, message)
    print(f"Committed with hash {commit_hash}")

def rm(args):
    repo_root = open_repo()
    relative_path = to_repo_path(repo_root, args.path)
    existed = (repo_root / relative_path).exists()
    was_staged = remove_file(repo_root, relative_path)
    if not existed:
        print(f"File {relative_path} does not exist in working directory")
    if was_staged:
        print(f"Removed {relative_path} from staging.")
    elif existed:
        print(f"Removed {relative_path}")
    else:
        print(f"File {relative_path} was not staged")

def reset(args):
    repo_root = open_repo()
    relative_path = to_repo_path(repo_root, args.path)
    unstage(repo_root, relative_path)
    print(f"Unstaged {relative_path}.")

def status(args):
    repo_root = open_repo()
    status_info = compute_status(repo_root)
    if status_info.clean:
        print("Nothing to commit, working tree clean")
        return
    sections = [
        ("Staged for commit:", status_info.staged),
        ("Modified:", status_info.modified),
        ("Untracked:", status_info.untracked),
    ]
    for title, paths in sections:
        if not paths:
            continue
        print(title)
        for path in sorted(paths):
            print(f"  {path}")

def log(args):
    repo_root = open_repo()
    lines = []
    for commit_hash, commit_info in iter_history(repo_root):
        lines.append(f"Commit: {commit_hash}")
        lines.append(f"Author: {commit_info.author}")
        lines.append(f"Date: {commit_info.date.isoformat()}")
        lines.append(f"\n    {commit_info.message}\n")
    if not lines:
        print("No commits yet.")
        return
    print("\n".join(lines))
