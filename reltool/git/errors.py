# reltool Git Errors
# Exceptions raised by mutating git operations


class GitError(Exception):
    """Exception raised for git operation errors."""

    def __init__(self, message: str, returncode: int = 1, stderr: str = ""):
        self.message = message
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


class GitCloneError(GitError):
    """Cloning a repository failed."""


class GitCommitError(GitError):
    """Creating a commit failed."""


class GitTagError(GitError):
    """Creating a tag failed."""


class GitPushError(GitError):
    """Pushing to a remote failed."""


class ChangelogError(GitError):
    """The changelog command failed."""
