"""Logic for loading DocFX xrefmap files as external link targets."""

from pathlib import Path

import yaml

from docxref.errors import ContentLoadError
from docxref.link_target import LinkTarget
from docxref.load_api_members import strip_yaml_mime_header


def load_xref_map(path: Path) -> dict[str, LinkTarget]:
    """Load an ``xrefmap.yml`` into a map of uid to link target.

    Entries without an ``href`` are skipped; a ``baseUrl`` at the top level
    is prefixed to relative hrefs.
    """
    try:
        doc = yaml.safe_load(strip_yaml_mime_header(path.read_text(encoding="utf-8")))
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Cannot read xref map {path}: {exc}"
        raise ContentLoadError(msg) from exc

    doc = doc or {}
    if not isinstance(doc, dict):
        msg = f"{path} is not an xref map"
        raise ContentLoadError(msg)
    base_url = str(doc.get("baseUrl") or "")
    targets: dict[str, LinkTarget] = {}
    for ref in doc.get("references") or []:
        if not isinstance(ref, dict) or not ref.get("uid") or not ref.get("href"):
            continue
        href = str(ref["href"])
        if base_url and "://" not in href:
            href = base_url.rstrip("/") + "/" + href.lstrip("/")
        uid = str(ref["uid"])
        title = ref.get("name") or ref.get("fullName") or uid
        targets.setdefault(uid, LinkTarget(title=str(title), page_path=href))
    return targets


def load_xref_maps(paths: list[str]) -> dict[str, LinkTarget]:
    """Load several xref maps; earlier maps win on conflicting uids."""
    targets: dict[str, LinkTarget] = {}
    for p in paths:
        for uid, target in load_xref_map(Path(p)).items():
            targets.setdefault(uid, target)
    return targets
