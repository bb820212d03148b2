"""Logic for resolving extracted cross-references against the index."""

import dataclasses
import logging
from collections.abc import Iterable
from typing import Any

from docxref.content_unit import ContentUnit
from docxref.reference import Reference
from docxref.reference_extractor import ReferenceExtractor
from docxref.resolution_index import ResolutionIndex
from docxref.resolution_state import ResolutionState

logger = logging.getLogger(__name__)


class ReferenceResolver:
    """Extracts references from units and classifies each one by lookup."""

    def __init__(self, config: dict[str, Any]) -> None:
        """Initialize the resolver with the extractor configured from config."""
        self.extractor = ReferenceExtractor(config)

    def extract_references(self, unit: ContentUnit) -> list[Reference]:
        """Return the unresolved references in a unit, ordered by offset."""
        return self.extractor.extract(unit)

    def resolve(self, ref: Reference, index: ResolutionIndex) -> Reference:
        """Return a copy of the reference with its resolution state set.

        An exact uid match always wins. Otherwise a unique alias resolves,
        several alias candidates make the reference ambiguous, and no match
        at all makes it missing.
        """
        uid = index.exact(ref.target_token)
        if uid is not None:
            state = ResolutionState.resolved(uid)
        else:
            candidates = index.aliases(ref.target_token)
            if len(candidates) == 1:
                state = ResolutionState.resolved(candidates[0])
            elif candidates:
                state = ResolutionState.ambiguous(candidates)
            else:
                state = ResolutionState.missing()

        if not state.is_linked:
            logger.debug(
                "%s reference '%s' in %s at %d",
                state.status,
                ref.target_token,
                ref.owner_uid,
                ref.location_offset,
            )
        return dataclasses.replace(ref, resolution_state=state)

    def resolve_all(
        self, units: Iterable[ContentUnit], index: ResolutionIndex
    ) -> list[Reference]:
        """Extract and resolve every reference of every unit.

        Output is ordered by unit order, then by offset within the unit, so
        identical input always produces identical output.
        """
        resolved: list[Reference] = []
        for unit in units:
            refs = sorted(
                self.extract_references(unit), key=lambda r: r.location_offset
            )
            resolved.extend(self.resolve(ref, index) for ref in refs)
        return resolved
