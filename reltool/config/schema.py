# reltool Configuration Schema
# Pydantic models for YAML configuration validation

from typing import Any, Optional

from pydantic import BaseModel, Field

DEFAULT_CHANGELOG_COMMAND = 'git log --pretty=format:"* %s (%h)" [REV_RANGE]'


class OptionsConfig(BaseModel):
    """Output and execution options."""

    verbose: bool = Field(default=False, description="Echo every invoked command")
    dry_run: bool = Field(default=False, description="Echo mutating commands without running them")


class ScriptsConfig(BaseModel):
    """Shell command templates."""

    changelog: str = Field(
        default=DEFAULT_CHANGELOG_COMMAND,
        description="Changelog command; [REV_RANGE] is replaced with <latest tag>...HEAD",
    )


class GitConfig(BaseModel):
    """Templates and extra flags for mutating git operations."""

    tag_name: str = Field(default="${version}", description="Tag name template")
    tag_annotation: str = Field(default="Release ${version}", description="Annotated tag message template")
    commit_message: str = Field(default="Release ${version}", description="Commit message template")
    commit_args: str = Field(default="", description="Extra arguments for git commit")
    tag_args: str = Field(default="", description="Extra arguments for git tag")
    push_args: str = Field(default="", description="Extra arguments for git push")
    push_repo: str = Field(default="", description="Remote name or URL to push to")


class ReleaseConfig(BaseModel):
    """Root configuration model for reltool."""

    name: str = Field(default="", description="Project name")
    version: Optional[str] = Field(default=None, description="Version being released")
    options: OptionsConfig = Field(default_factory=OptionsConfig, description="Execution options")
    scripts: ScriptsConfig = Field(default_factory=ScriptsConfig, description="Command templates")
    git: GitConfig = Field(default_factory=GitConfig, description="Git settings")

    def context(self) -> dict[str, Any]:
        """Template values available as ${key} in commands."""
        return {"name": self.name, "version": self.version}
