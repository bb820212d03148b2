"""Logic for loading DocFX ManagedReference YAML as generated content units."""

import logging
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from docxref.content_unit import GENERATED_API_MEMBER, ContentUnit
from docxref.errors import ContentLoadError

logger = logging.getLogger(__name__)

YAML_MIME_PREFIX = "### YamlMime:"
# Unquoted "=" in VB names confuses PyYAML: "  name.vb: =" -> "  name.vb: '='"
VB_EQUALS_RE = re.compile(r"^(\s*[\w\.]+\.vb:\s+)(=$)", re.MULTILINE)


def strip_yaml_mime_header(text: str) -> str:
    """Remove the DocFX YAML MIME header from the content."""
    lines = text.splitlines()
    if lines and lines[0].startswith(YAML_MIME_PREFIX):
        return "\n".join(lines[1:]).lstrip("\n")
    return text


def as_text(v: object) -> str:
    """Convert a value to a string, handling lists and None."""
    if v is None:
        return ""
    if isinstance(v, str):
        return v.strip()
    if isinstance(v, list):
        return "\n".join(as_text(x) for x in v if as_text(x))
    return str(v).strip()


def load_managed_reference(path: Path) -> dict[str, Any]:
    """Load and parse a DocFX ManagedReference YAML file."""
    raw = strip_yaml_mime_header(path.read_text(encoding="utf-8"))
    raw = VB_EQUALS_RE.sub(r"\1'='", raw)
    try:
        doc = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        msg = f"Invalid YAML in {path}: {exc}"
        raise ContentLoadError(msg) from exc
    if doc is not None and not isinstance(doc, dict):
        msg = f"{path} is not a ManagedReference document"
        raise ContentLoadError(msg)
    return doc or {}


def iter_main_items(doc: dict[str, Any]) -> Iterable[dict[str, Any]]:
    """Iterate over the main items in a DocFX YAML document."""
    for it in doc.get("items") or []:
        if isinstance(it, dict) and it.get("uid"):
            yield it


def member_body(item: dict[str, Any]) -> str:
    """Join the prose fields of an item into one body."""
    parts = [as_text(item.get(key)) for key in ("summary", "remarks", "example")]
    return "\n\n".join(p for p in parts if p)


def load_api_members(api_dir: Path) -> list[ContentUnit]:
    """Load every item of every ManagedReference file under a directory."""
    yml_files = sorted(p for p in api_dir.rglob("*.yml") if p.name != "toc.yml")
    if not yml_files:
        logger.warning("No .yml files found under %s", api_dir)

    units: list[ContentUnit] = []
    for f in yml_files:
        for it in iter_main_items(load_managed_reference(f)):
            uid = str(it["uid"])
            parent = it.get("parent")
            units.append(
                ContentUnit(
                    uid=uid,
                    kind=GENERATED_API_MEMBER,
                    source_path=str(it.get("fullName") or uid),
                    raw_body=member_body(it),
                    title=str(it.get("name") or it.get("fullName") or ""),
                    parent=str(parent) if parent else None,
                )
            )
    return units
