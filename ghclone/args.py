"""Arguments of the root command."""

from collections.abc import Sequence
from dataclasses import dataclass

from ghclone.config import Config
from ghclone.output import FatalError


@dataclass
class RootArgs:
    """Resolved arguments: the account name and the command's flags."""

    name: str
    directory: str = ""
    latest: bool = False
    ssh: bool = False
    choose: bool = False

    def validate(self) -> None:
        """Reject combinations of flags that cannot be used together."""
        if self.latest and self.choose:
            raise FatalError("Pass --latest or --choose flag, not both!")


def parse_root_args(
    names: Sequence[str],
    config: Config,
    directory: str = "",
    latest: bool = False,
    ssh: bool = False,
    choose: bool = False,
) -> RootArgs:
    """Resolve the username from the positional arguments or the config."""
    if not names and not config.default_username:
        raise FatalError("Pass username or specify default username in config!")
    if len(names) > 1:
        raise FatalError("You can pass only 0 or 1 arguments!")
    name = names[0] if names else config.default_username
    return RootArgs(
        name=name, directory=directory, latest=latest, ssh=ssh, choose=choose
    )