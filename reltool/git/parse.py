# reltool Git Output Parsing
# Pure functions turning git output and remote URLs into structured values

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union
from urllib.parse import urlparse

REV_RANGE_PLACEHOLDER = "[REV_RANGE]"

_URL_RE = re.compile(r"^(?:(?:https?|git|ssh|git\+ssh|ssh\+git|file)://|[\w.-]+@[\w.-]+:)")
_SCP_RE = re.compile(r"^(?:(?P<user>[\w.-]+)@)?(?P<host>[\w.-]+):(?P<path>[^/].*)$")
_CHANGELOG_LINE_RE = re.compile(r"^\*\s+(?P<subject>.*?)\s+\((?P<hash>[0-9a-f]{4,40})\)$")

_SAME_REPO_FIELDS = ("protocol", "host", "repository", "owner")


@dataclass(frozen=True)
class RepositoryIdentity:
    """Repository coordinates derived from a remote URL."""

    remote: str
    protocol: str
    host: str
    repository: str
    owner: str
    project: str


@dataclass(frozen=True)
class StatusEntry:
    """One line of porcelain status output."""

    index: str
    worktree: str
    path: str
    orig_path: Optional[str] = None

    @property
    def is_untracked(self) -> bool:
        return self.index == "?" and self.worktree == "?"


@dataclass(frozen=True)
class CommitRecord:
    subject: str
    hash: str


def is_url(value: Optional[str]) -> bool:
    """Check whether value looks like a remote URL rather than a remote name."""
    return bool(value) and _URL_RE.match(value) is not None


def parse_repo(remote: Optional[str]) -> Optional[RepositoryIdentity]:
    """
    Parse a remote URL into a RepositoryIdentity.

    Handles scheme URLs (https, git, ssh, file) and scp-like
    ``user@host:owner/project.git`` remotes. A ``#fragment`` is ignored.

    Args:
        remote: Remote URL.

    Returns:
        RepositoryIdentity, or None for an empty remote.
    """
    if not remote:
        return None

    url = remote.split("#", 1)[0]

    if "://" in url:
        parsed = urlparse(url)
        protocol = parsed.scheme
        if protocol in ("git+ssh", "ssh+git"):
            protocol = "ssh"
        host = parsed.hostname or ""
        path = parsed.path
    else:
        match = _SCP_RE.match(url)
        if match:
            protocol = "ssh"
            host = match.group("host")
            path = match.group("path")
        else:
            protocol = "file"
            host = ""
            path = url

    path = path.strip("/")
    if path.endswith(".git"):
        path = path[: -len(".git")]

    owner, _, project = path.rpartition("/")

    return RepositoryIdentity(
        remote=remote,
        protocol=protocol,
        host=host,
        repository=path,
        owner=owner,
        project=project,
    )


def _field(repo: Union[RepositoryIdentity, Mapping[str, Any]], name: str) -> Any:
    if isinstance(repo, Mapping):
        return repo.get(name)
    return getattr(repo, name, None)


def is_same_repo(
    repo_a: Union[RepositoryIdentity, Mapping[str, Any], None],
    repo_b: Union[RepositoryIdentity, Mapping[str, Any], None],
) -> bool:
    """
    Check whether two repository identities point at the same repository.

    Compares protocol, host, repository and owner; the remote string itself
    may differ (e.g. by a ``#branch`` suffix).
    """
    if repo_a is None or repo_b is None:
        return False
    return all(_field(repo_a, name) == _field(repo_b, name) for name in _SAME_REPO_FIELDS)


def parse_status(output: str) -> list[StatusEntry]:
    """
    Parse porcelain / short status output.

    Args:
        output: Raw ``git status --porcelain`` output.

    Returns:
        Entries in git's own order.
    """
    entries = []
    for line in output.splitlines():
        if len(line) < 4:
            continue

        # Format: XY filename
        index, worktree, path = line[0], line[1], line[3:]
        orig_path = None

        # Renames: "R  old -> new"
        if " -> " in path:
            orig_path, path = path.split(" -> ", 1)

        entries.append(StatusEntry(index=index, worktree=worktree, path=path, orig_path=orig_path))
    return entries


def parse_changelog(text: str) -> list[CommitRecord]:
    """Parse ``* <subject> (<hash>)`` changelog lines into commit records."""
    records = []
    for line in text.splitlines():
        match = _CHANGELOG_LINE_RE.match(line.strip())
        if match:
            records.append(CommitRecord(subject=match.group("subject"), hash=match.group("hash")))
    return records


def expand_rev_range(command: str, latest_tag: Optional[str]) -> str:
    """
    Fill the revision range placeholder of a changelog command.

    Args:
        command: Command template containing ``[REV_RANGE]``.
        latest_tag: Existing tag to start from, or None for the full history.

    Returns:
        Command with ``<tag>...HEAD`` or an empty range.
    """
    rev_range = f"{latest_tag}...HEAD" if latest_tag else ""
    return command.replace(REV_RANGE_PLACEHOLDER, rev_range)
