"""Data models for the manifest handed to the external renderer."""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from docxref.content_unit import ContentUnit
from docxref.link_target import LinkTarget
from docxref.reference import Reference
from docxref.resolution_state import ResolutionState

MANIFEST_SCHEMA_VERSION = 1


@dataclass(frozen=True)
class Diagnostic:
    """A reference that could not be turned into a link."""

    uid: str
    location_offset: int
    target_token: str
    resolution_state: ResolutionState
    syntax_kind: str

    @classmethod
    def from_reference(cls, ref: Reference) -> "Diagnostic":
        """Build the diagnostic recorded for an unlinked reference."""
        return cls(
            uid=ref.owner_uid,
            location_offset=ref.location_offset,
            target_token=ref.target_token,
            resolution_state=ref.resolution_state,
            syntax_kind=ref.syntax_kind,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize the diagnostic for the manifest."""
        return {
            "uid": self.uid,
            "location_offset": self.location_offset,
            "target_token": self.target_token,
            "resolution_state": self.resolution_state.to_dict(),
            "syntax_kind": self.syntax_kind,
        }


@dataclass
class BuildManifest:
    """The complete, resolved content set of one build."""

    units: list[ContentUnit]
    diagnostics: list[Diagnostic]
    link_targets: dict[str, LinkTarget]
    alias_collisions: dict[str, tuple[str, ...]] = field(default_factory=dict)
    reference_count: int = 0

    def to_dict(self, config_hash: str = "") -> dict[str, Any]:
        """Serialize the manifest; equal manifests serialize identically."""
        return {
            "meta": {
                "schema_version": MANIFEST_SCHEMA_VERSION,
                "config_hash": config_hash,
                "total_units": len(self.units),
                "total_references": self.reference_count,
                "total_diagnostics": len(self.diagnostics),
            },
            "units": [
                {**asdict(u), "page_path": self._page_path(u.uid)} for u in self.units
            ],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "link_targets": {
                uid: asdict(t) for uid, t in sorted(self.link_targets.items())
            },
            "alias_collisions": {
                alias: list(uids) for alias, uids in self.alias_collisions.items()
            },
        }

    def _page_path(self, uid: str) -> str:
        target = self.link_targets.get(uid)
        return target.page_path if target else ""


def write_manifest(manifest: BuildManifest, path: Path, config_hash: str = "") -> None:
    """Write the manifest as deterministic JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(manifest.to_dict(config_hash), indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
