# reltool Shell
# Command execution primitive used by the git facade and changelog scripts

import re
import shlex
import shutil
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Optional, Union

from reltool.logger import ReleaseLogger

_TEMPLATE_RE = re.compile(r"\$\{(\w+)\}")


class ShellError(Exception):
    """Exception raised when an invoked command exits non-zero."""

    def __init__(self, message: str, returncode: int = 1, stderr: str = "", stdout: str = ""):
        self.message = message
        self.returncode = returncode
        self.stderr = stderr
        self.stdout = stdout
        super().__init__(message)


def format_template(template: str, context: Optional[Mapping[str, Any]] = None) -> str:
    """
    Replace ``${key}`` tokens with values from context.

    Unknown keys and keys with a None value are left untouched, so shell
    variables in the same string still expand at run time.

    Args:
        template: String with ``${key}`` placeholders.
        context: Values to substitute.

    Returns:
        Formatted string.
    """
    if not context:
        return template

    def _replace(match: re.Match) -> str:
        value = context.get(match.group(1))
        return match.group(0) if value is None else str(value)

    return _TEMPLATE_RE.sub(_replace, template)


class Shell:
    """
    Runs external commands and captures their output.

    In verbose mode every command line is echoed as ``$ <command>`` before it
    runs. In dry-run mode commands that are not read-only are echoed and
    skipped.
    """

    def __init__(
        self,
        *,
        cwd: Optional[Path] = None,
        verbose: bool = False,
        dry_run: bool = False,
        logger: Optional[ReleaseLogger] = None,
    ):
        self.cwd = cwd
        self.verbose = verbose
        self.dry_run = dry_run
        self.logger = logger or ReleaseLogger(verbose=verbose)

    def run(
        self,
        command: str,
        context: Optional[Mapping[str, Any]] = None,
        *,
        read_only: bool = False,
    ) -> str:
        """
        Run a shell command string.

        Args:
            command: Command line, may contain ``${key}`` placeholders.
            context: Template values for the placeholders.
            read_only: Command does not change anything (runs in dry-run mode).

        Returns:
            Stripped stdout.

        Raises:
            ShellError: If the command exits non-zero.
        """
        command = format_template(command, context)
        return self._execute(command, display=command, read_only=read_only, shell=True)

    def exec(
        self,
        args: Sequence[str],
        *,
        display: Optional[str] = None,
        read_only: bool = False,
        strip: bool = True,
    ) -> str:
        """
        Run a command given as an argument list.

        Args:
            args: Program and arguments.
            display: Command text to echo instead of the joined arguments.
            read_only: Command does not change anything (runs in dry-run mode).
            strip: Strip surrounding whitespace from stdout.

        Returns:
            Stdout, stripped unless strip is False.

        Raises:
            ShellError: If the command exits non-zero.
        """
        args = list(args)
        if display is None:
            display = shlex.join(args)
        return self._execute(args, display=display, read_only=read_only, shell=False, strip=strip)

    def copy(
        self,
        files: Union[str, Sequence[str]],
        target_dir: Union[str, Path],
        *,
        cwd: Optional[Union[str, Path]] = None,
    ) -> list[Path]:
        """
        Copy files into a directory.

        Args:
            files: File name or names, relative to cwd.
            target_dir: Destination directory (created if missing).
            cwd: Source directory (defaults to the shell's cwd).

        Returns:
            Paths of the copies.
        """
        if isinstance(files, str):
            files = [files]

        source_dir = Path(cwd or self.cwd or Path.cwd())
        target = Path(target_dir)
        if not target.is_absolute() and self.cwd is not None:
            target = Path(self.cwd) / target

        if self.dry_run:
            for name in files:
                self.logger.command(f"cp {name} {target_dir}")
            return []

        target.mkdir(parents=True, exist_ok=True)
        copied = []
        for name in files:
            source = source_dir / name
            if not source.exists():
                raise FileNotFoundError(f"Source does not exist: {source}")
            copied.append(Path(shutil.copy2(source, target / Path(name).name)))
        return copied

    def _execute(
        self,
        cmd: Union[str, list[str]],
        *,
        display: str,
        read_only: bool,
        shell: bool,
        strip: bool = True,
    ) -> str:
        skip = self.dry_run and not read_only
        if self.verbose or skip:
            self.logger.command(display)
        if skip:
            return ""

        if self.cwd is not None and not Path(self.cwd).is_dir():
            raise ShellError(f"Working directory does not exist: {self.cwd}")

        try:
            result = subprocess.run(
                cmd,
                cwd=self.cwd,
                shell=shell,
                check=False,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError:
            program = cmd[0] if isinstance(cmd, list) and cmd else display
            raise ShellError(f"{program} command not found. Is it installed?")

        stdout = result.stdout.strip() if result.stdout else ""
        stderr = result.stderr.strip() if result.stderr else ""

        if result.returncode != 0:
            raise ShellError(
                stderr or stdout or f"Command failed: {display}",
                returncode=result.returncode,
                stderr=stderr,
                stdout=stdout,
            )

        if self.verbose and stdout:
            self.logger.output(stdout)
        return stdout if strip else (result.stdout or "")
