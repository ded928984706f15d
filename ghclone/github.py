"""Access to the GitHub REST API."""

from typing import Any

import requests

from ghclone.config import Config
from ghclone.output import FatalError

GITHUB_API_URL = "https://api.github.com/"


class UserNotFoundError(FatalError):
    """The requested GitHub account does not exist."""


def api_url(api_method: str) -> str:
    """Return the full URL of an API method such as ``user/repos``."""
    return f"{GITHUB_API_URL}{api_method}"


def make_api_request(
    api_method: str, config: Config, session: requests.Session | None = None
) -> requests.Response:
    """Send a GET request to the API, authorised when a token is configured."""
    headers = {}
    if config.github_access_token:
        headers["Authorization"] = f"Bearer {config.github_access_token}"
    get = session.get if session is not None else requests.get
    try:
        return get(api_url(api_method), headers=headers)
    except requests.RequestException as exc:
        raise FatalError(f"Error sending request: {exc}") from exc


def _decode_repos(response: requests.Response) -> list[Any]:
    try:
        result = response.json()
    except ValueError:
        return []
    return result if isinstance(result, list) else []


def get_user_repos(
    username: str, config: Config, session: requests.Session | None = None
) -> list[Any]:
    """Return the repositories of ``username``.

    With an access token and the configured (or no) username, the
    authenticated user's own repositories are listed, private ones included.
    """
    if config.github_access_token and username in ("", config.default_username):
        method = "user/repos?per_page=100&sort=name"
    else:
        method = f"users/{username}/repos?per_page=100&sort=name"
    response = make_api_request(method, config, session)
    if response.status_code == 404:
        raise UserNotFoundError("User not found!")
    return _decode_repos(response)


def check_access_token(
    config: Config, session: requests.Session | None = None
) -> bool:
    """Return True if the configured access token is accepted by the API."""
    return make_api_request("user/repos", config, session).status_code == 200