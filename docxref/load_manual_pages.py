"""Logic for loading hand-written Markdown pages as content units."""

import logging
import re
from pathlib import Path
from typing import Any

import yaml

from docxref.content_unit import MANUAL_PAGE, ContentUnit
from docxref.errors import ContentLoadError

logger = logging.getLogger(__name__)

FRONT_MATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL
)
HEADING_RE = re.compile(r"^#[ \t]+(.+?)[ \t#]*$", re.MULTILINE)
MARKDOWN_SUFFIXES = (".md", ".markdown")


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split YAML front matter from a Markdown document."""
    m = FRONT_MATTER_RE.match(text)
    if not m:
        return {}, text
    meta = yaml.safe_load(m.group(1)) or {}
    if not isinstance(meta, dict):
        msg = "front matter must be a mapping"
        raise ValueError(msg)
    return meta, text[m.end() :]


def load_manual_page(path: Path, docs_dir: Path) -> ContentUnit:
    """Load one Markdown page.

    The uid comes from the ``uid`` front matter key, falling back to the
    relative path without suffix. The title comes from ``title``, then the
    first level-one heading, then the file stem.
    """
    rel = path.relative_to(docs_dir).as_posix()
    try:
        meta, body = split_front_matter(path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, ValueError) as exc:
        msg = f"Invalid front matter in {rel}: {exc}"
        raise ContentLoadError(msg) from exc

    uid = str(meta.get("uid") or "").strip() or rel.rsplit(".", 1)[0]
    title = str(meta.get("title") or "").strip()
    if not title:
        heading = HEADING_RE.search(body)
        title = heading.group(1).strip() if heading else path.stem

    return ContentUnit(
        uid=uid,
        kind=MANUAL_PAGE,
        source_path=rel,
        raw_body=body,
        title=title,
    )


def load_manual_pages(docs_dir: Path) -> list[ContentUnit]:
    """Load every Markdown page under a directory, sorted by path."""
    files = sorted(
        p
        for p in docs_dir.rglob("*")
        if p.is_file() and p.suffix.lower() in MARKDOWN_SUFFIXES
    )
    if not files:
        logger.warning("No Markdown pages found under %s", docs_dir)
    return [load_manual_page(p, docs_dir) for p in files]
