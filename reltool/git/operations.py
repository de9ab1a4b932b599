# reltool Git Operations
# Repository state queries and release mutations on top of the git CLI

import shlex
from collections.abc import Sequence
from pathlib import Path
from typing import Optional, Union

from reltool.config.schema import ReleaseConfig
from reltool.git.errors import (
    ChangelogError,
    GitCloneError,
    GitCommitError,
    GitPushError,
    GitTagError,
)
from reltool.git.parse import (
    REV_RANGE_PLACEHOLDER,
    RepositoryIdentity,
    StatusEntry,
    expand_rev_range,
    is_same_repo,
    is_url,
    parse_repo,
    parse_status,
)
from reltool.git.push import PushCommand
from reltool.logger import ReleaseLogger
from reltool.shell import Shell, ShellError, format_template

DEFAULT_REMOTE = "origin"

_NOTHING_TO_COMMIT = ("nothing to commit", "nothing added to commit", "no changes added to commit")


def _as_list(paths: Union[str, Path, Sequence[Union[str, Path]]]) -> list[str]:
    if isinstance(paths, (str, Path)):
        return [str(paths)]
    return [str(p) for p in paths]


class Git:
    """
    Git facade for release automation.

    Queries never raise: outside a repository, or when the asked-for state is
    absent, they return False or None. ``stage`` and ``reset`` are best effort
    and log a warning on failure. ``clone``, ``commit``, ``tag``, ``push`` and
    ``get_changelog`` raise a GitError subclass.
    """

    def __init__(
        self,
        config: Optional[ReleaseConfig] = None,
        *,
        shell: Optional[Shell] = None,
        cwd: Optional[Path] = None,
        logger: Optional[ReleaseLogger] = None,
    ):
        """
        Initialize the facade.

        Args:
            config: Release configuration (defaults when omitted).
            shell: Shell used to invoke git. Built from config when omitted.
            cwd: Working directory for the default shell.
            logger: Output for warnings and command echo.
        """
        self.config = config or ReleaseConfig()
        if shell is None:
            shell = Shell(
                cwd=cwd,
                verbose=self.config.options.verbose,
                dry_run=self.config.options.dry_run,
                logger=logger or ReleaseLogger(verbose=self.config.options.verbose),
            )
        self.shell = shell
        self.logger = logger or shell.logger

    def _git(self, *args: str, read_only: bool = True, strip: bool = True) -> str:
        return self.shell.exec(["git", *args], read_only=read_only, strip=strip)

    def _succeeds(self, *args: str) -> bool:
        try:
            self._git(*args)
            return True
        except ShellError:
            return False

    # Queries

    def is_git_repo(self) -> bool:
        """Check if the working directory is inside a git repository."""
        return self._succeeds("rev-parse", "--git-dir")

    def is_in_git_root_dir(self) -> bool:
        """Check if the working directory is the root of its work tree."""
        try:
            return self._git("rev-parse", "--show-cdup") == ""
        except ShellError:
            return False

    def has_upstream(self) -> bool:
        """Check if the current branch has an upstream tracking branch."""
        return self._succeeds("rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{u}")

    def get_branch_name(self) -> Optional[str]:
        """
        Get current branch name.

        Returns:
            Branch name, or None for an unborn or detached HEAD.
        """
        try:
            branch = self._git("rev-parse", "--abbrev-ref", "HEAD")
        except ShellError:
            return None
        return None if branch in ("", "HEAD") else branch

    def tag_exists(self, name: str) -> bool:
        """Check if a tag with exactly this name exists."""
        return self._succeeds("show-ref", "--tags", "--quiet", "--verify", "--", f"refs/tags/{name}")

    def is_remote_name(self, value: Optional[str]) -> bool:
        """Check if a value names a remote rather than giving its URL."""
        return bool(value) and not is_url(value)

    def get_remote_url(self, remote_name_or_url: Optional[str] = None) -> Optional[str]:
        """
        Resolve a remote to its URL.

        Args:
            remote_name_or_url: Remote name (default: origin) or URL.

        Returns:
            The URL unchanged when given one, the configured URL of the named
            remote, or None if no such remote exists.
        """
        remote = remote_name_or_url or DEFAULT_REMOTE
        if is_url(remote):
            return remote
        try:
            return self._git("remote", "get-url", remote) or None
        except ShellError:
            return None

    def get_remote(self, branch: Optional[str] = None) -> str:
        """Get the remote name configured for a branch (default: origin)."""
        branch = branch or self.get_branch_name()
        if branch:
            try:
                remote = self._git("config", "--get", f"branch.{branch}.remote")
                if remote:
                    return remote
            except ShellError:
                pass
        return DEFAULT_REMOTE

    def get_repository(self, remote_name_or_url: Optional[str] = None) -> Optional[RepositoryIdentity]:
        """Get the identity of a remote repository, or None without a remote."""
        return parse_repo(self.get_remote_url(remote_name_or_url))

    def is_working_dir_clean(self) -> bool:
        """Check for staged, unstaged and untracked changes."""
        try:
            return self._git("status", "--porcelain") == ""
        except ShellError:
            return False

    def status(self) -> str:
        """
        Get short status of tracked files.

        Returns:
            Trimmed ``git status --short --untracked-files=no`` output, one
            ``XY file`` entry per line. Empty outside a repository.
        """
        try:
            return self._git("status", "--short", "--untracked-files=no")
        except ShellError:
            return ""

    def status_entries(self) -> list[StatusEntry]:
        """Get parsed porcelain status, untracked files included."""
        try:
            return parse_status(self._git("status", "--porcelain", strip=False))
        except ShellError:
            return []

    def get_latest_tag(self) -> Optional[str]:
        """Get the most recent tag reachable from HEAD, or None."""
        try:
            return self._git("describe", "--tags", "--abbrev=0") or None
        except ShellError:
            return None

    def is_same_repo(
        self,
        repo_a: Optional[RepositoryIdentity],
        repo_b: Optional[RepositoryIdentity],
    ) -> bool:
        """Compare two repositories by protocol, host, owner and repository."""
        return is_same_repo(repo_a, repo_b)

    # Best-effort mutations

    def stage(self, paths: Union[str, Path, Sequence[Union[str, Path]]]) -> None:
        """Add paths to the index. Logs a warning on failure."""
        files = _as_list(paths)
        try:
            self._git("add", *files, read_only=False)
        except ShellError:
            self.logger.warning(f"Could not stage {' '.join(files)}")

    def reset(self, paths: Union[str, Path, Sequence[Union[str, Path]]]) -> None:
        """Discard working tree changes of paths. Logs a warning on failure."""
        files = _as_list(paths)
        try:
            self._git("checkout", "HEAD", "--", *files, read_only=False)
        except ShellError:
            self.logger.warning(f"Could not reset {' '.join(files)}")

    # Mutations

    def clone(self, remote_url: str, target_dir: Union[str, Path]) -> None:
        """
        Clone a repository.

        Raises:
            GitCloneError: If git clone fails.
        """
        try:
            self._git("clone", remote_url, str(target_dir), read_only=False)
        except ShellError as err:
            raise GitCloneError(
                f"Could not clone {remote_url}: {err.message}",
                returncode=err.returncode,
                stderr=err.stderr,
            ) from err

    def commit(self, message: Optional[str] = None, *, args: Optional[str] = None) -> Optional[str]:
        """
        Create a commit.

        Args:
            message: Commit message (default: git.commit_message template).
            args: Extra git commit arguments (default: git.commit_args).

        Returns:
            Hash of the new commit, or None when there was nothing to commit.

        Raises:
            GitCommitError: If git commit fails for any other reason.
        """
        if message is None:
            message = format_template(self.config.git.commit_message, self.config.context())
        extra = shlex.split(self.config.git.commit_args if args is None else args)

        try:
            self._git("commit", f"--message={message}", *extra, read_only=False)
        except ShellError as err:
            output = f"{err.stdout}\n{err.stderr}"
            if any(marker in output for marker in _NOTHING_TO_COMMIT):
                self.logger.warning("No changes to commit")
                return None
            raise GitCommitError(
                f"Could not commit: {err.message}",
                returncode=err.returncode,
                stderr=err.stderr,
            ) from err

        if self.shell.dry_run:
            return None
        return self._git("rev-parse", "HEAD")

    def tag(
        self,
        name: Optional[str] = None,
        annotation: Optional[str] = None,
        *,
        args: Optional[str] = None,
    ) -> str:
        """
        Create a tag, annotated when an annotation is given.

        Without a name, both name and annotation come from the git.tag_name
        and git.tag_annotation templates.

        Returns:
            The tag name.

        Raises:
            GitTagError: If git tag fails (e.g. the tag already exists).
        """
        context = self.config.context()
        if name is None:
            name = format_template(self.config.git.tag_name, context)
            if annotation is None:
                annotation = format_template(self.config.git.tag_annotation, context)

        cmd = ["tag"]
        if annotation:
            cmd.extend(["--annotate", f"--message={annotation}"])
        cmd.extend(shlex.split(self.config.git.tag_args if args is None else args))
        cmd.append(name)

        try:
            self._git(*cmd, read_only=False)
        except ShellError as err:
            raise GitTagError(
                f'Could not tag "{name}": {err.message}',
                returncode=err.returncode,
                stderr=err.stderr,
            ) from err
        return name

    def push(
        self,
        push_repo: Optional[str] = None,
        has_upstream_branch: Optional[bool] = None,
        *,
        push_args: Optional[str] = None,
    ) -> None:
        """
        Push commits and tags.

        Args:
            push_repo: Remote name or URL (default: git.push_repo).
            has_upstream_branch: False to set up tracking with ``-u``.
            push_args: Extra git push arguments (default: git.push_args).

        Raises:
            GitPushError: If git push fails.
        """
        command = PushCommand(
            push_repo=self.config.git.push_repo if push_repo is None else push_repo,
            has_upstream_branch=has_upstream_branch,
            push_args=self.config.git.push_args if push_args is None else push_args,
        )

        if command.sets_upstream:
            branch = self.get_branch_name()
            if branch is None:
                raise GitPushError("Could not determine the current branch to push")
            command.branch = branch
            if self.is_remote_name(command.push_repo):
                command.remote = command.push_repo
            else:
                command.remote = self.get_remote(branch)

        try:
            self.shell.exec(command.args(), display=command.render(), read_only=False)
        except ShellError as err:
            raise GitPushError(
                f"Could not push: {err.message}",
                returncode=err.returncode,
                stderr=err.stderr,
            ) from err

        if command.sets_upstream:
            self.logger.info(
                f"Branch '{command.branch}' set up to track remote branch "
                f"'{command.branch}' from '{command.remote}'."
            )

    # Changelog

    def get_changelog(
        self,
        command: Optional[str] = None,
        tag_name: Optional[str] = None,
        latest_version: Optional[str] = None,
    ) -> str:
        """
        Generate a changelog from the commit log.

        ``[REV_RANGE]`` in the command becomes ``<tag>...HEAD`` when the tag
        for latest_version exists (without a version: the latest tag),
        otherwise it is left empty and the whole history is listed.

        Args:
            command: Command template (default: scripts.changelog).
            tag_name: Tag name template with ``${version}`` (default: git.tag_name).
            latest_version: Version of the previous release.

        Returns:
            Trimmed command output.

        Raises:
            ChangelogError: If the command fails.
        """
        if command is None:
            command = self.config.scripts.changelog
        if tag_name is None:
            tag_name = self.config.git.tag_name

        if REV_RANGE_PLACEHOLDER in command:
            if latest_version:
                latest_tag = format_template(tag_name, {"version": latest_version})
                if not self.tag_exists(latest_tag):
                    latest_tag = None
            else:
                latest_tag = self.get_latest_tag()
            command = expand_rev_range(command, latest_tag)

        try:
            return self.shell.run(command, self.config.context(), read_only=True)
        except ShellError as err:
            raise ChangelogError(
                f"Could not create changelog: {err.message}",
                returncode=err.returncode,
                stderr=err.stderr,
            ) from err
