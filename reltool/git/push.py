# reltool Push Command
# Builds the git push invocation from push options

import shlex
from dataclasses import dataclass
from typing import Optional


@dataclass
class PushCommand:
    """
    A ``git push --follow-tags`` invocation.

    ``render()`` gives the command text with every slot in place, empty or
    not (``git push --follow-tags {args} {repo} {upstream}``), which is what
    verbose mode echoes. ``args()`` gives the argument list actually run,
    without the empty slots.
    """

    push_repo: str = ""
    has_upstream_branch: Optional[bool] = None
    push_args: str = ""
    remote: str = "origin"
    branch: Optional[str] = None

    @property
    def sets_upstream(self) -> bool:
        return self.has_upstream_branch is False

    @property
    def repo(self) -> str:
        return "" if self.sets_upstream else self.push_repo

    @property
    def upstream(self) -> str:
        if not self.sets_upstream:
            return ""
        return f"-u {self.remote} {self.branch}"

    def render(self) -> str:
        return f"git push --follow-tags {self.push_args} {self.repo} {self.upstream}"

    def args(self) -> list[str]:
        args = ["git", "push", "--follow-tags", *shlex.split(self.push_args)]
        if self.repo:
            args.append(self.repo)
        if self.sets_upstream:
            args.extend(["-u", self.remote, self.branch or ""])
        return args
