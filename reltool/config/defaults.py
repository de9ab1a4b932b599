# reltool Default Configuration
# Default configuration as Python dict and YAML generator

import copy
from typing import Any

import yaml

from reltool.config.schema import DEFAULT_CHANGELOG_COMMAND

DEFAULT_CONFIG: dict[str, Any] = {
    "name": "",
    "options": {
        "verbose": False,
        "dry_run": False,
    },
    "scripts": {
        "changelog": DEFAULT_CHANGELOG_COMMAND,
    },
    "git": {
        "tag_name": "${version}",
        "tag_annotation": "Release ${version}",
        "commit_message": "Release ${version}",
        "commit_args": "",
        "tag_args": "",
        "push_args": "",
        "push_repo": "",
    },
}


def get_default_config() -> dict[str, Any]:
    """Return a deep copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def generate_default_config(name: str = "") -> str:
    """Generate default configuration as YAML string with comments."""
    header = """# reltool configuration
#
# Templates may use ${name} and ${version}.
# scripts.changelog: [REV_RANGE] becomes "<latest tag>...HEAD" when that tag
# exists, otherwise the whole history is listed.

"""
    data = get_default_config()
    data["name"] = name
    return header + yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
