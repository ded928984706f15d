"""Command line entry point: clone several GitHub repositories at once."""

import argparse
import os
import sys
from collections.abc import Mapping, Sequence
from typing import Any

from ghclone.args import parse_root_args
from ghclone.clone import clone_repositories
from ghclone.config import parse_config
from ghclone.github import get_user_repos
from ghclone.output import FatalError, print_error, red
from ghclone.prompts import input_yes_no, select_from_list
from ghclone.repository import get_latest_repository
from ghclone.selection import filter_by_indexes

Repo = Mapping[str, Any]


def filter_latest_repo(repos: Sequence[Repo]) -> list[Repo]:
    """Keep only the most recently created repository."""
    latest = get_latest_repository(repos)
    return [latest] if latest is not None else []


def filter_choose_repos(repos: Sequence[Repo]) -> list[Repo]:
    """List the repositories and keep the ones the user picks."""
    private_repos = False
    for index, repo in enumerate(repos):
        name = repo["name"]
        if repo.get("visibility") == "private":
            private_repos = True
            print(f"({index}) {red(name)}")
        else:
            print(f"({index}) {name}")
    if private_repos:
        print(f"Private repositories marked as {red('red')}.")
    print(
        "\nChoose one or multiple repos from list (0, 1, 1 2 3, 1-10 for example): ",
        end="",
        flush=True,
    )
    chosen = select_from_list(len(repos))
    return filter_by_indexes(repos, chosen)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ghclone",
        description=(
            "ghclone can clone multiple repositories from your github account "
            "or other. Repositories can be filtered."
        ),
    )
    parser.add_argument("names", nargs="*", metavar="username")
    parser.add_argument(
        "-a", "--all", action="store_true", default=True,
        help="Clones all user's repositories.",
    )
    parser.add_argument(
        "-d", "--dir", default="",
        help="Specify a directory to clone (defaults to current working directory)",
    )
    parser.add_argument(
        "-l", "--latest", action="store_true", help="Clone 1 latest repository."
    )
    parser.add_argument("-s", "--ssh", action="store_true", help="Clone via ssh")
    parser.add_argument(
        "-c", "--choose", action="store_true",
        help="Choose multiple repos to clone from list",
    )
    return parser


def _run(options: argparse.Namespace) -> None:
    config = parse_config()
    root_args = parse_root_args(
        options.names,
        config,
        directory=options.dir,
        latest=options.latest,
        ssh=options.ssh,
        choose=options.choose,
    )
    root_args.validate()

    repos = get_user_repos(root_args.name, config)
    if root_args.latest:
        repos = filter_latest_repo(repos)
    if root_args.choose:
        repos = filter_choose_repos(repos)

    if not input_yes_no(f"Found {len(repos)} repositories. Continue (Y/n)? ", True):
        return
    directory = root_args.directory or os.getcwd()
    clone_repositories(repos, directory, root_args.ssh)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command and return its exit status."""
    options = _build_parser().parse_args(argv)
    try:
        _run(options)
    except FatalError as exc:
        print_error(exc.message)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())