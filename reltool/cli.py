"""Click-based CLI for reltool - repository state and changelog for releases."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from pydantic import ValidationError
from rich.console import Console

from reltool import __version__
from reltool.config import (
    ReleaseConfig,
    generate_default_config,
    get_config_path,
    load_or_default_config,
    validate_config_file,
)
from reltool.git import ChangelogError, Git, parse_changelog
from reltool.logger import ReleaseLogger


console = Console(highlight=False)
logger = ReleaseLogger(console)


def _load_config(verbose: bool = False) -> ReleaseConfig:
    """Load the configuration or exit with an error message."""
    try:
        config = load_or_default_config()
    except (ValidationError, yaml.YAMLError) as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    if verbose:
        config.options.verbose = True
    return config


@click.group()
@click.version_option(version=__version__, prog_name="reltool")
def cli() -> None:
    """reltool - git facade for release automation.

    \b
    Inspect repository state and generate changelogs from the commit log.
    Configuration is read from .reltool.yaml (or $RELTOOL_CONFIG).
    """
    pass


@cli.command()
@click.option("--remote", default=None, help="Remote name or URL (default: origin)")
@click.option("--verbose", "-v", is_flag=True, help="Echo every git command")
def info(remote: Optional[str], verbose: bool) -> None:
    """Show repository state relevant for a release."""
    config = _load_config(verbose)
    git = Git(config, logger=ReleaseLogger(console, verbose=config.options.verbose))

    if not git.is_git_repo():
        logger.error("Not a git repository")
        sys.exit(1)

    repository = git.get_repository(remote)
    state: dict[str, object] = {
        "Root directory": git.is_in_git_root_dir(),
        "Branch": git.get_branch_name(),
        "Upstream": git.has_upstream(),
        "Clean working dir": git.is_working_dir_clean(),
        "Changed files": len(git.status_entries()),
        "Latest tag": git.get_latest_tag(),
        "Remote URL": git.get_remote_url(remote),
        "Repository": repository.repository if repository else None,
        "Host": repository.host if repository else None,
    }
    logger.show_repository_state(state)


@cli.command()
@click.option("--latest-version", default=None, help="Version of the previous release")
@click.option("--command", "command", default=None, help="Override scripts.changelog")
@click.option("--table", is_flag=True, help="Render commits as a table")
@click.option("--verbose", "-v", is_flag=True, help="Echo every command")
def changelog(latest_version: Optional[str], command: Optional[str], table: bool, verbose: bool) -> None:
    """Print the changelog since the latest release."""
    config = _load_config(verbose)
    git = Git(config, logger=ReleaseLogger(console, verbose=config.options.verbose))

    try:
        text = git.get_changelog(command=command, latest_version=latest_version)
    except ChangelogError as e:
        logger.error(e.message)
        sys.exit(1)

    if table:
        logger.show_changelog(parse_changelog(text))
    else:
        click.echo(text)


# ============================================================================
# Configuration Commands
# ============================================================================


@cli.group()
def config() -> None:
    """Configuration file commands."""
    pass


@config.command("init")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing file")
def config_init(force: bool) -> None:
    """Create a default .reltool.yaml."""
    config_path = get_config_path()
    if config_path.exists() and not force:
        logger.warning(f"Configuration already exists: {config_path}")
        sys.exit(1)

    config_path.write_text(generate_default_config(Path.cwd().name), encoding="utf-8")
    logger.success(f"Created configuration: {config_path}")


@config.command("show")
def config_show() -> None:
    """Show the effective configuration."""
    config = _load_config()
    data = config.model_dump(mode="json")
    click.echo(yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True).rstrip())


@config.command("validate")
@click.argument("file", required=False, type=click.Path(path_type=Path))
def config_validate(file: Optional[Path]) -> None:
    """Validate a configuration file."""
    is_valid, errors = validate_config_file(file)
    if is_valid:
        logger.success("Configuration is valid")
        return

    for error in errors:
        logger.error(error)
    sys.exit(1)


if __name__ == "__main__":
    cli()
