"""Data models for the outcome of resolving a single cross-reference."""

from dataclasses import dataclass

UNRESOLVED = "unresolved"
RESOLVED = "resolved"
AMBIGUOUS = "ambiguous"
MISSING = "missing"


@dataclass(frozen=True)
class ResolutionState:
    """Represents where a reference points, or why it points nowhere."""

    status: str
    candidates: tuple[str, ...] = ()  # one uid when resolved, several when ambiguous

    @classmethod
    def unresolved(cls) -> "ResolutionState":
        """Return the state of a reference that has not been looked up yet."""
        return cls(UNRESOLVED)

    @classmethod
    def resolved(cls, uid: str) -> "ResolutionState":
        """Return a state pointing at exactly one uid."""
        return cls(RESOLVED, (uid,))

    @classmethod
    def ambiguous(cls, uids: tuple[str, ...]) -> "ResolutionState":
        """Return a state listing every uid the reference could mean."""
        return cls(AMBIGUOUS, tuple(uids))

    @classmethod
    def missing(cls) -> "ResolutionState":
        """Return the state of a reference with no match at all."""
        return cls(MISSING)

    @property
    def uid(self) -> str | None:
        """The resolved uid, or None for any other state."""
        if self.status == RESOLVED:
            return self.candidates[0]
        return None

    @property
    def is_linked(self) -> bool:
        """Whether the reference can be rewritten into a link."""
        return self.status == RESOLVED

    def to_dict(self) -> dict[str, object]:
        """Serialize the state for the manifest."""
        return {"status": self.status, "candidates": list(self.candidates)}
