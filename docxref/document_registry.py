"""Registry holding every content unit of a build, keyed by uid."""

import logging
from collections.abc import Iterator

from docxref.content_unit import ContentUnit, is_api_member_kind
from docxref.errors import DuplicateUidError
from docxref.link_target import LinkTarget
from docxref.resolution_index import ResolutionIndex
from docxref.uid_keys import alias_keys, normalize_token

logger = logging.getLogger(__name__)


class DocumentRegistry:
    """Collects content units in registration order and rejects duplicates."""

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._units: dict[str, ContentUnit] = {}

    def register(self, unit: ContentUnit) -> None:
        """Add a unit, failing if its uid is already taken."""
        existing = self._units.get(unit.uid)
        if existing is not None:
            raise DuplicateUidError(unit.uid, existing.source_path, unit.source_path)
        self._units[unit.uid] = unit
        logger.debug("Registered %s %s", unit.kind, unit.uid)

    def register_all(self, units: list[ContentUnit]) -> None:
        """Register several units in order."""
        for unit in units:
            self.register(unit)

    def all_units(self) -> Iterator[ContentUnit]:
        """Return a fresh iterator over the units in registration order."""
        return iter(list(self._units.values()))

    def get(self, uid: str) -> ContentUnit | None:
        """Return the unit registered under a uid, if any."""
        return self._units.get(uid)

    def __contains__(self, uid: object) -> bool:
        """Check whether a uid is registered."""
        return uid in self._units

    def __len__(self) -> int:
        """Return the number of registered units."""
        return len(self._units)

    def build_index(
        self, external_targets: dict[str, LinkTarget] | None = None
    ) -> ResolutionIndex:
        """Build the resolution index over every registered unit."""
        uid_keys: dict[str, str] = {}
        for unit in self._units.values():
            key = normalize_token(unit.uid)
            other = uid_keys.get(key)
            if other is not None:
                # Distinct uids that only differ by whitespace or escaping.
                raise DuplicateUidError(
                    key, self._units[other].source_path, unit.source_path
                )
            uid_keys[key] = unit.uid

        candidates: dict[str, list[str]] = {}
        for unit in self._units.values():
            if not is_api_member_kind(unit.kind):
                continue
            for alias in alias_keys(unit.uid):
                candidates.setdefault(alias, []).append(unit.uid)

        index = ResolutionIndex(
            uid_keys,
            {alias: tuple(uids) for alias, uids in candidates.items()},
            external_targets,
        )
        logger.info(
            "Indexed %d units with %d aliases (%d colliding)",
            len(uid_keys),
            len(candidates),
            len(index.alias_collisions()),
        )
        return index
