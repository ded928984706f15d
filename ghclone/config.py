"""Loading and saving the TOML configuration file."""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

import tomli_w

from ghclone.output import FatalError

CONFIG_DIR = ".config"
CONFIG_FILE = "ghclone.toml"

_TOKEN_KEY = "GithubAccessToken"
_USERNAME_KEY = "DefaultUsername"


def default_config_path() -> Path:
    """Return ``$HOME/.config/ghclone.toml``."""
    return Path(os.environ.get("HOME", "")) / CONFIG_DIR / CONFIG_FILE


@dataclass
class Config:
    """User settings: an optional access token and a default username."""

    github_access_token: str = ""
    default_username: str = ""

    def write(self, path: Path | str | None = None) -> None:
        """Write the configuration to ``path`` (the default location if omitted)."""
        target = Path(path) if path is not None else default_config_path()
        data = tomli_w.dumps(
            {_TOKEN_KEY: self.github_access_token, _USERNAME_KEY: self.default_username}
        )
        try:
            target.parent.mkdir(mode=0o755, parents=True, exist_ok=True)
        except OSError as exc:
            raise FatalError(f"Can't create config dir: {exc}") from exc
        try:
            target.write_text(data, encoding="utf-8")
            target.chmod(0o644)
        except OSError as exc:
            raise FatalError(f"Error writing to config file: {exc}") from exc


def parse_config(path: Path | str | None = None) -> Config:
    """Read the configuration; any error yields the default configuration."""
    source = Path(path) if path is not None else default_config_path()
    try:
        with source.open("rb") as handle:
            document = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError):
        return Config()

    values = {key.lower(): value for key, value in document.items()}
    token = values.get(_TOKEN_KEY.lower(), "")
    username = values.get(_USERNAME_KEY.lower(), "")
    if not isinstance(token, str) or not isinstance(username, str):
        return Config()
    return Config(github_access_token=token, default_username=username)