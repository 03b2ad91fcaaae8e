import sys

import argparse
from mygit.commands import map_command
from mygit.errors import MygitError

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mygit", description="mygit CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # init command
    subparsers.add_parser("init", help="Initialize a new repository")

    # add command
    add_parser = subparsers.add_parser("add", help="Stage a file")
    add_parser.add_argument("path", help="File to stage")

    # status command
    subparsers.add_parser("status", help="Show staged, modified and untracked files")

    # commit command
    commit_parser = subparsers.add_parser("commit", help="Commit staged changes")
    commit_parser.add_argument("message", nargs="?", help="Commit message")
    commit_parser.add_argument("-m", "--message", dest="message_flag", help="Commit message")

    # rm command
    rm_parser = subparsers.add_parser("rm", help="Remove a file from the working tree and staging")
    rm_parser.add_argument("path", help="File to remove")

    # reset command
    reset_parser = subparsers.add_parser("reset", help="Unstage a file, keeping it in the working tree")
    reset_parser.add_argument("path", help="File to unstage")

    # log command
    subparsers.add_parser("log", help="Show commit logs")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        map_command(args.command)(args)
    except MygitError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
