"""Logic for mapping content units to site page paths and output files."""

import re
from pathlib import Path, PurePosixPath

# Keep letters, digits, underscore, dash. Dots become hyphens.
DOT_SAFE_RE = re.compile(r"[^A-Za-z0-9_-]+")


def dot_safe(name: str) -> str:
    """Make a stable filename-ish token from a qualified symbol name."""
    name = name.replace("+", "-")  # nested types Outer+Inner -> Outer-Inner
    name = name.replace("`", "")  # generic arity List`1 -> List1
    name = name.replace(".", "-")
    name = DOT_SAFE_RE.sub("-", name).strip("-")
    return name or "Unknown"


def header_slug(s: str) -> str:
    """Generate a GitHub-ish anchor slug: lower, hyphenate non-alnum."""
    s = s.strip().lower()
    s = re.sub(r"[^a-z0-9]+", "-", s)
    s = re.sub(r"-{2,}", "-", s).strip("-")
    return s or "section"


def join_site_path(root: str, rel: str) -> str:
    """Join a site root such as ``/api`` with a relative page path."""
    root = "/" + root.strip("/") if root.strip("/") else ""
    return f"{root}/{rel.lstrip('/')}"


def page_path_for_uid(api_root: str, uid: str) -> str:
    """Return the page path of a generated API unit."""
    return join_site_path(api_root, dot_safe(uid))


def page_path_for_source(docs_root: str, source_path: str) -> str:
    """Return the page path of a manual page: its relative path without suffix."""
    rel = PurePosixPath(source_path.replace("\\", "/"))
    if rel.suffix.lower() in {".md", ".markdown"}:
        rel = rel.with_suffix("")
    return join_site_path(docs_root, str(rel))


def output_file_for_page(out_root: Path, page_path: str) -> Path:
    """Determine the output Markdown file for a page path, creating its folder."""
    # /api/Foo-Bar#anchor -> out_root/api/Foo-Bar.md
    rel = page_path.split("#", 1)[0].lstrip("/") + ".md"
    p = out_root / rel
    p.parent.mkdir(parents=True, exist_ok=True)
    return p
