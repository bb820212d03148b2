"""Logic for mapping uids to the pages their references link to."""

from collections.abc import Iterable
from typing import Any

from docxref.content_unit import ContentUnit, is_api_member_kind
from docxref.link_target import LinkTarget
from docxref.page_paths import (
    header_slug,
    page_path_for_source,
    page_path_for_uid,
)
from docxref.uid_keys import short_name


def build_link_targets(
    units: Iterable[ContentUnit],
    site: dict[str, Any],
    external_targets: dict[str, LinkTarget] | None = None,
) -> dict[str, LinkTarget]:
    """Build a map of uids to link targets for every unit and external entry."""
    units = list(units)
    targets: dict[str, LinkTarget] = {}
    _add_page_targets(targets, units, site)
    _add_member_anchor_targets(targets, units, site.get("api_root", "/api"))
    for uid, target in (external_targets or {}).items():
        targets.setdefault(uid, target)
    return targets


def _title_for(unit: ContentUnit) -> str:
    if unit.title:
        return unit.title
    if is_api_member_kind(unit.kind):
        return short_name(unit.uid)
    return unit.uid


def _add_page_targets(
    targets: dict[str, LinkTarget],
    units: list[ContentUnit],
    site: dict[str, Any],
) -> None:
    """Add targets for units that get a page of their own."""
    api_root = site.get("api_root", "/api")
    docs_root = site.get("docs_root", "")
    known = {u.uid for u in units}
    for unit in units:
        if is_api_member_kind(unit.kind):
            if unit.parent and unit.parent in known:
                continue
            page = page_path_for_uid(api_root, unit.uid)
        else:
            page = page_path_for_source(docs_root, unit.source_path)
        targets[unit.uid] = LinkTarget(title=_title_for(unit), page_path=page)


def _add_member_anchor_targets(
    targets: dict[str, LinkTarget],
    units: list[ContentUnit],
    api_root: str,
) -> None:
    """Add targets for members rendered as anchors on their parent's page.

    Parents may themselves be anchored members registered later, so passes
    repeat until nothing changes.
    """
    pending = [u for u in units if u.uid not in targets]
    while pending:
        remaining = []
        for unit in pending:
            parent_target = targets.get(unit.parent or "")
            if parent_target is None:
                remaining.append(unit)
                continue
            parent_page = parent_target.page_path.split("#", 1)[0]
            anchor = header_slug(unit.title or short_name(unit.uid))
            targets[unit.uid] = LinkTarget(
                title=_title_for(unit), page_path=f"{parent_page}#{anchor}"
            )
        if len(remaining) == len(pending):
            break
        pending = remaining

    # Parent cycles fall back to a page of their own.
    for unit in pending:
        targets[unit.uid] = LinkTarget(
            title=_title_for(unit),
            page_path=page_path_for_uid(api_root, unit.uid),
        )
