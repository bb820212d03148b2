"""Orchestration of registry load, reference resolution and link rewriting."""

import dataclasses
import logging
from collections.abc import Iterable
from typing import Any

from docxref.build_link_targets import build_link_targets
from docxref.build_manifest import BuildManifest, Diagnostic
from docxref.content_unit import ContentUnit
from docxref.document_registry import DocumentRegistry
from docxref.link_target import LinkTarget
from docxref.load_config import default_config
from docxref.reference import Reference
from docxref.reference_resolver import ReferenceResolver
from docxref.rewrite_references import (
    DEFAULT_UNRESOLVED_TAG,
    check_unresolved_tag,
    rewrite_references,
)

logger = logging.getLogger(__name__)


def run(
    manual_pages: Iterable[ContentUnit],
    generated_members: Iterable[ContentUnit],
    config: dict[str, Any] | None = None,
    external_targets: dict[str, LinkTarget] | None = None,
) -> BuildManifest:
    """Run the full assembly pipeline and return the build manifest.

    Steps run strictly in order: register manual pages, register generated
    members, build the index, extract and resolve references, rewrite
    bodies, emit the manifest. A uid collision raises
    ``RegistryCollisionError`` before any resolution happens; unresolved
    references only produce diagnostics. An unresolved tag naming fields
    other than ``status`` and ``token`` raises ``ValueError`` up front.
    """
    config = config or default_config()
    rules = config.get("rules", {})
    unresolved_tag = rules.get("unresolved_tag", DEFAULT_UNRESOLVED_TAG)
    if unresolved_tag:
        check_unresolved_tag(unresolved_tag)

    registry = DocumentRegistry()
    registry.register_all(list(manual_pages))
    registry.register_all(list(generated_members))

    index = registry.build_index(external_targets)
    collisions: dict[str, tuple[str, ...]] = {}
    if rules.get("report_alias_collisions", False):
        collisions = index.alias_collisions()
        for alias, uids in collisions.items():
            logger.warning("Alias '%s' is ambiguous: %s", alias, ", ".join(uids))

    resolver = ReferenceResolver(config)
    references = resolver.resolve_all(registry.all_units(), index)

    uid_targets = build_link_targets(
        registry.all_units(), config.get("site", {}), index.external_targets
    )

    by_owner: dict[str, list[Reference]] = {}
    for ref in references:
        by_owner.setdefault(ref.owner_uid, []).append(ref)

    units = [
        dataclasses.replace(
            unit,
            raw_body=rewrite_references(
                unit.raw_body, by_owner.get(unit.uid, []), uid_targets, unresolved_tag
            ),
        )
        for unit in registry.all_units()
    ]

    diagnostics = [
        Diagnostic.from_reference(ref)
        for ref in references
        if not ref.resolution_state.is_linked
    ]
    logger.info(
        "Resolved %d of %d references across %d units",
        len(references) - len(diagnostics),
        len(references),
        len(units),
    )

    return BuildManifest(
        units=units,
        diagnostics=diagnostics,
        link_targets=uid_targets,
        alias_collisions=collisions,
        reference_count=len(references),
    )
