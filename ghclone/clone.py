"""Cloning repositories over the smart HTTP and SSH git protocols."""

import io
import os
import sys
from collections.abc import Callable, Iterable, Iterator, Mapping
from contextlib import contextmanager, suppress
from pathlib import Path
from typing import IO, Any, BinaryIO
from urllib.parse import urlsplit

import paramiko
import requests

from ghclone.gitobjects import parse_pack, write_repository
from ghclone.output import FatalError
from ghclone.selection import remove_duplicates

FLUSH = b"0000"
_CAPABILITIES = "side-band-64k ofs-delta agent=ghclone"


class CloneError(FatalError):
    """A repository could not be cloned."""


def pkt_line(payload: bytes) -> bytes:
    """Frame ``payload`` as a pkt-line."""
    return f"{len(payload) + 4:04x}".encode() + payload


def _iter_pkt(stream: BinaryIO) -> Iterator[bytes | None]:
    while head := stream.read(4):
        if len(head) < 4:
            raise CloneError("truncated pkt-line")
        try:
            length = int(head, 16)
        except ValueError as exc:
            raise CloneError("invalid pkt-line length") from exc
        if length == 0:
            yield None
            continue
        if length < 4:
            raise CloneError("invalid pkt-line length")
        payload = stream.read(length - 4)
        if len(payload) < length - 4:
            raise CloneError("truncated pkt-line")
        yield payload


def read_pkt_lines(data: bytes) -> list[bytes | None]:
    """Split pkt-line framed data; flush packets come out as None."""
    return list(_iter_pkt(io.BytesIO(data)))


def parse_ref_advertisement(
    lines: Iterable[bytes | None],
) -> tuple[dict[str, str], set[str]]:
    """Return the advertised references and the server's capabilities."""
    pending = list(lines)
    if pending and pending[0] is not None and pending[0].startswith(b"# service="):
        pending = pending[2:] if len(pending) > 1 and pending[1] is None else pending[1:]
    refs: dict[str, str] = {}
    capabilities: set[str] = set()
    for line in pending:
        if line is None:
            break
        line, _, caps = line.rstrip(b"\n").partition(b"\0")
        capabilities.update(caps.decode().split())
        sha, _, name = line.decode().partition(" ")
        if not name.endswith("^{}"):
            refs[name] = sha
    return refs, capabilities


def build_upload_request(wants: Iterable[str]) -> bytes:
    """Build an upload-pack request for the given object names."""
    lines = [
        pkt_line(f"want {sha} {_CAPABILITIES}\n".encode() if n == 0 else f"want {sha}\n".encode())
        for n, sha in enumerate(remove_duplicates(wants))
    ]
    return b"".join(lines) + FLUSH + pkt_line(b"done\n")


def _read_pack_response(stream: BinaryIO, progress: IO[str] | None) -> bytes:
    pack = bytearray()
    for payload in _iter_pkt(stream):
        if payload is None:
            break
        if payload.startswith((b"NAK", b"ACK")):
            continue
        band, body = payload[0], payload[1:]
        if band == 1:
            pack += body
        elif band == 2:
            if progress is not None:
                progress.write(body.decode(errors="replace"))
                progress.flush()
        elif band == 3:
            raise CloneError(body.decode(errors="replace").strip())
        else:
            raise CloneError("unexpected side-band data")
    return bytes(pack)


_Fetch = Callable[[bytes, "IO[str] | None"], bytes]


@contextmanager
def _http_session(url: str) -> Iterator[tuple[tuple[dict[str, str], set[str]], _Fetch]]:
    base = url.rstrip("/")
    with requests.Session() as session:

        def request(method: str, suffix: str, **kwargs: Any) -> bytes:
            try:
                response = session.request(method, f"{base}/{suffix}", **kwargs)
            except requests.RequestException as exc:
                raise CloneError(str(exc)) from exc
            if response.status_code in (401, 403):
                raise CloneError("authentication required")
            if response.status_code == 404:
                raise CloneError("repository not found")
            if response.status_code != 200:
                raise CloneError(f"unexpected HTTP status {response.status_code}")
            return response.content

        def fetch(body: bytes, progress: IO[str] | None) -> bytes:
            content = request(
                "POST",
                "git-upload-pack",
                data=body,
                headers={
                    "Content-Type": "application/x-git-upload-pack-request",
                    "Accept": "application/x-git-upload-pack-result",
                },
            )
            return _read_pack_response(io.BytesIO(content), progress)

        advert = request("GET", "info/refs?service=git-upload-pack")
        yield parse_ref_advertisement(read_pkt_lines(advert)), fetch


def _parse_ssh_url(url: str) -> tuple[str, str, int, str]:
    if url.startswith("ssh://"):
        parts = urlsplit(url)
        return parts.username or "git", parts.hostname or "", parts.port or 22, parts.path
    user_host, _, path = url.partition(":")
    user, _, host = user_host.rpartition("@")
    return user or "git", host, 22, path


@contextmanager
def _ssh_session(
    url: str, key_file: str | None
) -> Iterator[tuple[tuple[dict[str, str], set[str]], _Fetch]]:
    user, host, port, path = _parse_ssh_url(url)
    client = paramiko.SSHClient()
    try:
        client.load_system_host_keys()
        client.set_missing_host_key_policy(paramiko.RejectPolicy())
        try:
            client.connect(
                host, port=port, username=user, key_filename=key_file,
                look_for_keys=False, allow_agent=False,
            )
            stdin, stdout, _ = client.exec_command(f"git-upload-pack '{path}'")
        except (paramiko.SSHException, OSError) as exc:
            raise CloneError(str(exc)) from exc

        lines = []
        for line in _iter_pkt(stdout):
            lines.append(line)
            if line is None:
                break
        fetched = False

        def fetch(body: bytes, progress: IO[str] | None) -> bytes:
            nonlocal fetched
            fetched = True
            stdin.write(body)
            stdin.flush()
            return _read_pack_response(stdout, progress)

        try:
            yield parse_ref_advertisement(lines), fetch
        finally:
            if not fetched:
                # End the negotiation cleanly when nothing was requested.
                with suppress(paramiko.SSHException, OSError):
                    stdin.write(FLUSH)
                    stdin.flush()
    finally:
        client.close()


def _head_ref(refs: Mapping[str, str], capabilities: set[str]) -> str | None:
    for capability in capabilities:
        if capability.startswith("symref=HEAD:"):
            return capability.split(":", 1)[1]
    head = refs.get("HEAD")
    return next(
        (name for name in sorted(refs) if name.startswith("refs/heads/") and refs[name] == head),
        None,
    )


def find_files(root: Path | str, predicate: Callable[[str], bool]) -> list[str]:
    """Walk ``root`` in lexical order and return every path matching ``predicate``."""
    found = []

    def visit(path: str) -> None:
        if predicate(path):
            found.append(path)
        try:
            children = sorted(os.scandir(path), key=lambda entry: entry.name)
        except OSError:
            return
        for child in children:
            if child.is_dir(follow_symlinks=False):
                visit(child.path)
            elif predicate(child.path):
                found.append(child.path)

    visit(os.fspath(root))
    return found


def find_ssh_key_file(home: Path | str | None = None) -> str:
    """Return the single ``~/.ssh/id_*`` private key file."""
    ssh_dir = Path(home if home is not None else Path.home()) / ".ssh"
    files = find_files(
        ssh_dir,
        lambda path: os.path.basename(path).startswith("id_")
        and "." not in os.path.basename(path),
    )
    if len(files) != 1:
        raise CloneError("Can't choose ssh private key file!")
    if not os.path.exists(files[0]):
        raise CloneError("Ssh private key file is not found!")
    return files[0]


def plain_clone(
    url: str,
    directory: Path | str,
    key_file: str | None = None,
    progress: IO[str] | None = None,
) -> None:
    """Clone ``url`` into ``directory`` and check out its default branch."""
    target = Path(directory)
    if (target / ".git").exists():
        raise CloneError("repository already exists")
    if url.startswith(("http://", "https://")):
        session = _http_session(url)
    else:
        session = _ssh_session(url, key_file)
    with session as ((refs, capabilities), fetch):
        wants = [
            sha for name, sha in refs.items() if name.startswith(("refs/heads/", "refs/tags/"))
        ]
        if not wants:
            raise CloneError("remote repository is empty")
        pack = fetch(build_upload_request(wants), progress)
    try:
        objects = parse_pack(pack)
        target.mkdir(parents=True, exist_ok=True)
        write_repository(target, objects, refs, _head_ref(refs, capabilities), url)
    except ValueError as exc:
        raise CloneError(str(exc)) from exc


def clone_repositories(
    repos: Iterable[Mapping[str, Any]], directory: Path | str, ssh: bool
) -> None:
    """Clone each repository record into ``directory/<name>``."""
    for repo in repos:
        key_file = find_ssh_key_file() if ssh else None
        url = repo["ssh_url"] if ssh else repo["clone_url"]
        plain_clone(url, Path(directory) / repo["name"], key_file, sys.stdout)