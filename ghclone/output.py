"""Coloured console messages and the error raised for fatal conditions."""

RED = "\x1b[31;1m"
GREEN = "\x1b[32;1m"
YELLOW = "\x1b[33;1m"
CLEAR = "\x1b[0m"


class FatalError(Exception):
    """A condition that ends the program with an error message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def colored(color: str, message: str) -> str:
    """Wrap ``message`` in the given ANSI colour sequence."""
    return f"{color}{message}{CLEAR}"


def red(text: str) -> str:
    """Wrap ``text`` in a red foreground."""
    return colored(RED, text)


def print_error(message: str) -> None:
    """Print ``message`` in the error style (red)."""
    print(colored(RED, message))


def print_success(message: str) -> None:
    """Print ``message`` in the success style (green)."""
    print(colored(GREEN, message))


def print_warning(message: str) -> None:
    """Print ``message`` in the warning style (yellow)."""
    print(colored(YELLOW, message))