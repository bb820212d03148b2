"""Lookup structure mapping uids and short-name aliases to content units."""

from docxref.link_target import LinkTarget
from docxref.uid_keys import normalize_token


class ResolutionIndex:
    """Read-only lookup table built once per build from the registry.

    Every unit is reachable under its normalized uid. Generated API members
    are also reachable under their aliases; an alias claimed by several units
    keeps all of them as candidates and never resolves to a single one.
    External xref-map entries are reachable under their uid only.
    """

    def __init__(
        self,
        uid_keys: dict[str, str],
        alias_candidates: dict[str, tuple[str, ...]],
        external_targets: dict[str, LinkTarget] | None = None,
    ) -> None:
        """Initialize the index from prepared lookup tables."""
        self._uid_keys = dict(uid_keys)  # normalized key -> uid
        self._aliases = dict(alias_candidates)  # normalized alias -> uids
        self._external = {
            normalize_token(uid): uid for uid in (external_targets or {})
        }
        self.external_targets = dict(external_targets or {})

    def exact(self, token: str) -> str | None:
        """Return the uid whose normalized form equals the token."""
        key = normalize_token(token)
        uid = self._uid_keys.get(key)
        if uid is not None:
            return uid
        return self._external.get(key)

    def aliases(self, token: str) -> tuple[str, ...]:
        """Return every uid the token could mean as an alias, in registration order."""
        return self._aliases.get(normalize_token(token), ())

    def alias_collisions(self) -> dict[str, tuple[str, ...]]:
        """Return the aliases that are claimed by more than one unit."""
        return {
            alias: uids
            for alias, uids in sorted(self._aliases.items())
            if len(uids) > 1
        }

    def __len__(self) -> int:
        """Return the number of distinct lookup keys."""
        return len(self._uid_keys) + len(self._aliases) + len(self._external)
