"""Interactive console prompts."""

import getpass
import sys

from ghclone.output import FatalError
from ghclone.selection import parse_indexes


def get_password_input(prompt: str) -> str:
    """Read a secret from the console without echoing it."""
    try:
        return getpass.getpass(prompt)
    except (EOFError, OSError) as exc:
        raise FatalError(
            f"An error occured while reading password input. Please try again {exc}"
        ) from exc


def input_yes_no(label: str, default_yes: bool) -> bool:
    """Ask a yes/no question; an empty answer gives ``default_yes``."""
    try:
        line = input(label)
    except EOFError:
        line = ""
    words = line.split()
    answer = words[0].lower() if words else ""
    if not answer:
        return default_yes
    return answer in ("y", "yes")


def select_from_list(length: int) -> list[int]:
    """Read a selection of indexes for a list of ``length`` items from stdin."""
    line = sys.stdin.readline()
    if not line.endswith("\n"):
        raise FatalError("EOF")
    return parse_indexes(line, length)