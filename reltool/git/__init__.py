# reltool Git Module
# Git facade for repository state queries and release mutations

from reltool.git.errors import (
    ChangelogError,
    GitCloneError,
    GitCommitError,
    GitError,
    GitPushError,
    GitTagError,
)
from reltool.git.operations import DEFAULT_REMOTE, Git
from reltool.git.parse import (
    CommitRecord,
    RepositoryIdentity,
    StatusEntry,
    is_same_repo,
    is_url,
    parse_changelog,
    parse_repo,
    parse_status,
)
from reltool.git.push import PushCommand

__all__ = [
    "Git",
    "DEFAULT_REMOTE",
    "PushCommand",
    # Parsing
    "RepositoryIdentity",
    "StatusEntry",
    "CommitRecord",
    "is_same_repo",
    "is_url",
    "parse_repo",
    "parse_status",
    "parse_changelog",
    # Errors
    "GitError",
    "GitCloneError",
    "GitCommitError",
    "GitTagError",
    "GitPushError",
    "ChangelogError",
]
