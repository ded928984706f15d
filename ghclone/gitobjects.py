"""Git objects: pack decoding and writing a checked-out repository."""

import hashlib
import os
import struct
import zlib
from collections.abc import Mapping
from pathlib import Path

_TYPE_NAMES = {1: "commit", 2: "tree", 3: "blob", 4: "tag"}
_OFS_DELTA, _REF_DELTA = 6, 7


def object_id(kind: str, data: bytes) -> str:
    """Return the hex SHA-1 name of an object of the given kind."""
    return hashlib.sha1(f"{kind} {len(data)}\0".encode() + data).hexdigest()


def _varint(data: bytes, pos: int) -> tuple[int, int]:
    result = shift = 0
    while True:
        byte = data[pos]
        pos += 1
        result |= (byte & 0x7F) << shift
        shift += 7
        if not byte & 0x80:
            return result, pos


def apply_delta(base: bytes, delta: bytes) -> bytes:
    """Rebuild an object from its base and a git delta."""
    out = bytearray()
    try:
        source_size, pos = _varint(delta, 0)
        target_size, pos = _varint(delta, pos)
        if source_size != len(base):
            raise ValueError("delta base size mismatch")
        while pos < len(delta):
            op = delta[pos]
            pos += 1
            if op & 0x80:
                offset = size = 0
                for bit in range(7):
                    if op & (1 << bit):
                        if bit < 4:
                            offset |= delta[pos] << (8 * bit)
                        else:
                            size |= delta[pos] << (8 * (bit - 4))
                        pos += 1
                size = size or 0x10000
                if offset + size > len(base):
                    raise ValueError("delta copy out of bounds")
                out += base[offset:offset + size]
            elif op:
                if pos + op > len(delta):
                    raise ValueError("delta insert out of bounds")
                out += delta[pos:pos + op]
                pos += op
            else:
                raise ValueError("invalid delta opcode")
    except IndexError as exc:
        raise ValueError("truncated delta") from exc
    if len(out) != target_size:
        raise ValueError("delta result size mismatch")
    return bytes(out)


def _read_entries(data: bytes, count: int) -> dict[int, tuple[int, bytes, tuple | None]]:
    entries = {}
    pos, end = 12, len(data) - 20
    for _ in range(count):
        start = pos
        byte = data[pos]
        pos += 1
        kind, size, shift = (byte >> 4) & 7, byte & 15, 4
        while byte & 0x80:
            byte = data[pos]
            pos += 1
            size |= (byte & 0x7F) << shift
            shift += 7
        base = None
        if kind == _OFS_DELTA:
            byte = data[pos]
            pos += 1
            distance = byte & 0x7F
            while byte & 0x80:
                byte = data[pos]
                pos += 1
                distance = ((distance + 1) << 7) | (byte & 0x7F)
            base = ("ofs", start - distance)
        elif kind == _REF_DELTA:
            base = ("ref", data[pos:pos + 20].hex())
            pos += 20
        elif kind not in _TYPE_NAMES:
            raise ValueError(f"invalid object type {kind}")
        decompressor = zlib.decompressobj()
        body = decompressor.decompress(data[pos:end])
        if not decompressor.eof:
            raise ValueError("truncated pack object")
        pos = end - len(decompressor.unused_data)
        if len(body) != size:
            raise ValueError("pack object size mismatch")
        entries[start] = (kind, body, base)
    return entries


def parse_pack(data: bytes) -> dict[str, tuple[str, bytes]]:
    """Decode a pack file into ``{sha: (kind, data)}`` with deltas resolved."""
    if len(data) < 32 or data[:4] != b"PACK":
        raise ValueError("not a pack file")
    version, count = struct.unpack(">II", data[4:12])
    if version not in (2, 3):
        raise ValueError(f"unsupported pack version {version}")
    if hashlib.sha1(data[:-20]).digest() != data[-20:]:
        raise ValueError("pack checksum mismatch")
    try:
        entries = _read_entries(data, count)
    except IndexError as exc:
        raise ValueError("truncated pack") from exc

    objects: dict[str, tuple[str, bytes]] = {}
    resolved: dict[int, tuple[str, bytes]] = {}
    unresolved = list(entries)
    while unresolved:
        remaining = []
        for offset in unresolved:
            kind, body, base = entries[offset]
            if base is None:
                resolved[offset] = (_TYPE_NAMES[kind], body)
            else:
                how, where = base
                source = (resolved if how == "ofs" else objects).get(where)
                if source is None:
                    remaining.append(offset)
                    continue
                resolved[offset] = (source[0], apply_delta(source[1], body))
            objects[object_id(*resolved[offset])] = resolved[offset]
        if len(remaining) == len(unresolved):
            raise ValueError("unresolvable delta in pack")
        unresolved = remaining
    return objects


def parse_tree(data: bytes) -> list[tuple[str, str, str]]:
    """Split a tree object into ``(mode, name, sha)`` entries."""
    entries = []
    pos = 0
    while pos < len(data):
        space = data.find(b" ", pos)
        nul = data.find(b"\0", space + 1)
        if space < 0 or nul < 0 or nul + 21 > len(data):
            raise ValueError("malformed tree object")
        entries.append(
            (data[pos:space].decode("ascii"), os.fsdecode(data[space + 1:nul]),
             data[nul + 1:nul + 21].hex())
        )
        pos = nul + 21
    return entries


def parse_commit_tree(data: bytes) -> str:
    """Return the tree named by a commit object."""
    first = data.split(b"\n", 1)[0]
    if not first.startswith(b"tree "):
        raise ValueError("malformed commit object")
    return first[5:].decode("ascii")


def _get(objects: Mapping[str, tuple[str, bytes]], sha: str, kind: str) -> bytes:
    found = objects.get(sha)
    if found is None:
        raise ValueError(f"object not found: {sha}")
    if found[0] != kind:
        raise ValueError(f"object {sha} is a {found[0]}, expected {kind}")
    return found[1]


def _write_ref(git_dir: Path, name: str, content: str) -> None:
    if any(part in ("", ".", "..") for part in name.split("/")):
        raise ValueError(f"invalid reference name: {name!r}")
    target = git_dir / name
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content + "\n", encoding="utf-8")


def _checkout(
    objects: Mapping[str, tuple[str, bytes]], tree_sha: str, root: Path, prefix: str
) -> list[tuple[bytes, str, int]]:
    entries = []
    for mode, name, sha in parse_tree(_get(objects, tree_sha, "tree")):
        if name in ("", ".", "..", ".git") or any(c in name for c in "/\\\0"):
            raise ValueError(f"unsafe path in tree: {name!r}")
        relative = prefix + name
        target = root / relative
        kind = int(mode, 8)
        if kind == 0o40000:
            target.mkdir(exist_ok=True)
            entries.extend(_checkout(objects, sha, root, relative + "/"))
            continue
        if kind == 0o160000:
            target.mkdir(exist_ok=True)
        elif kind == 0o120000:
            blob = _get(objects, sha, "blob")
            try:
                os.symlink(os.fsdecode(blob), target)
            except OSError:
                target.write_bytes(blob)
        else:
            target.write_bytes(_get(objects, sha, "blob"))
            kind = 0o100755 if kind & 0o111 else 0o100644
            if kind == 0o100755:
                target.chmod(0o755)
        entries.append((os.fsencode(relative), sha, kind))
    return entries


def _write_index(git_dir: Path, root: Path, entries: list[tuple[bytes, str, int]]) -> None:
    body = bytearray(b"DIRC" + struct.pack(">II", 2, len(entries)))
    for path, sha, mode in sorted(entries):
        info = os.lstat(root / os.fsdecode(path))
        fields = (
            int(info.st_ctime), info.st_ctime_ns % 10**9,
            int(info.st_mtime), info.st_mtime_ns % 10**9,
            info.st_dev, info.st_ino, mode, info.st_uid, info.st_gid, info.st_size,
        )
        entry = struct.pack(">10I", *(field & 0xFFFFFFFF for field in fields))
        entry += bytes.fromhex(sha) + struct.pack(">H", min(len(path), 0xFFF)) + path
        body += entry + b"\0" * (8 - len(entry) % 8)
    body += hashlib.sha1(body).digest()
    (git_dir / "index").write_bytes(bytes(body))


def write_repository(
    path: Path | str,
    objects: Mapping[str, tuple[str, bytes]],
    refs: Mapping[str, str],
    head_ref: str | None,
    url: str,
) -> None:
    """Create a repository at ``path`` holding ``objects`` and check out ``head_ref``."""
    root = Path(path)
    git_dir = root / ".git"
    for sub in ("objects/info", "objects/pack", "refs/heads", "refs/tags", "hooks", "info"):
        (git_dir / sub).mkdir(parents=True, exist_ok=True)

    for sha, (kind, data) in objects.items():
        target = git_dir / "objects" / sha[:2] / sha[2:]
        if not target.exists():
            target.parent.mkdir(exist_ok=True)
            target.write_bytes(zlib.compress(f"{kind} {len(data)}\0".encode() + data))

    for name, sha in refs.items():
        if name.startswith("refs/heads/"):
            _write_ref(git_dir, "refs/remotes/origin/" + name.removeprefix("refs/heads/"), sha)
        elif name.startswith("refs/tags/"):
            _write_ref(git_dir, name, sha)

    branch = head_ref.removeprefix("refs/heads/") if head_ref else "master"
    _write_ref(git_dir, "HEAD", f"ref: refs/heads/{branch}")
    if any(part in ("", ".", "..") for part in branch.split("/")):
        raise ValueError(f"invalid reference name: {branch!r}")

    checked_out = bool(head_ref) and head_ref in refs
    config = [
        "[core]",
        "\trepositoryformatversion = 0",
        "\tfilemode = true",
        "\tbare = false",
        "\tlogallrefupdates = true",
        '[remote "origin"]',
        f"\turl = {url}",
        "\tfetch = +refs/heads/*:refs/remotes/origin/*",
    ]
    if checked_out:
        config += [f'[branch "{branch}"]', "\tremote = origin", f"\tmerge = {head_ref}"]
    (git_dir / "config").write_text("\n".join(config) + "\n", encoding="utf-8")

    if not checked_out:
        return
    commit_sha = refs[head_ref]
    tree_sha = parse_commit_tree(_get(objects, commit_sha, "commit"))
    _write_ref(git_dir, f"refs/heads/{branch}", commit_sha)
    _write_ref(git_dir, "refs/remotes/origin/HEAD", f"ref: refs/remotes/origin/{branch}")
    _write_index(git_dir, root, _checkout(objects, tree_sha, root, ""))