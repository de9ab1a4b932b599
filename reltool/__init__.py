"""reltool - git facade for release automation.

Answers repository-state questions (clean tree, tags, branch, remotes) and
performs release mutations (stage, commit, tag, push) plus changelog
generation, all by shelling out to git.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "Git",
    "GitError",
    "ReleaseConfig",
    "Shell",
    "ShellError",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name in ("Git", "GitError"):
        from reltool import git

        return getattr(git, name)
    if name == "ReleaseConfig":
        from reltool.config import ReleaseConfig

        return ReleaseConfig
    if name in ("Shell", "ShellError"):
        from reltool import shell

        return getattr(shell, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
