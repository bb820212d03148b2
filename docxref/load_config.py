"""Logic for loading and merging configuration files."""

import copy
from pathlib import Path
from typing import Any

import yaml

from docxref.deep_merge import deep_merge
from docxref.errors import ContentLoadError
from docxref.reference_extractor import DEFAULT_CODE_PATTERN
from docxref.rewrite_references import (
    DEFAULT_UNRESOLVED_TAG,
    check_unresolved_tag,
)

DEFAULT_CONFIG: dict[str, Any] = {
    "site": {
        "api_root": "/api",
        "docs_root": "",
    },
    "rules": {
        "informal_references": True,
        "at_references": True,
        "code_reference_pattern": DEFAULT_CODE_PATTERN,
        "report_alias_collisions": False,
        "unresolved_tag": DEFAULT_UNRESOLVED_TAG,
    },
    "xref_maps": [],
}


def default_config() -> dict[str, Any]:
    """Return a fresh copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = default_config()
    if path:
        p = Path(path)
        if not p.exists():
            msg = f"Config file not found: {p}"
            raise ContentLoadError(msg)
        try:
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            msg = f"Invalid YAML in config {p}: {exc}"
            raise ContentLoadError(msg) from exc
        if not isinstance(user_config, dict):
            msg = f"Config {p} must be a mapping"
            raise ContentLoadError(msg)
        config = deep_merge(config, user_config)
        tag = config["rules"].get("unresolved_tag")
        if tag:
            try:
                check_unresolved_tag(tag)
            except ValueError as exc:
                msg = f"Invalid rules.unresolved_tag in config {p}: {exc}"
                raise ContentLoadError(msg) from exc
    return config
